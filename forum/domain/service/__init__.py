"""Domain services."""

from .badge_service import BADGE_DEFINITIONS, BadgeService
from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentNode, build_comment_tree
from .email import EmailSender
from .jwt_service import JWTService
from .mention import extract_mentions
from .notification_service import NotificationService
from .post_service import PostService
from .side_effects import CommentSideEffects, DispatchReport
from .vote_service import VoteResult, VoteService, VoteSummary

__all__ = [
    "BADGE_DEFINITIONS",
    "BadgeService",
    "CommentNode",
    "CommentService",
    "CommentSideEffects",
    "DispatchReport",
    "EmailSender",
    "JWTService",
    "NotificationService",
    "PostService",
    "Service",
    "VoteResult",
    "VoteService",
    "VoteSummary",
    "build_comment_tree",
    "extract_mentions",
]
