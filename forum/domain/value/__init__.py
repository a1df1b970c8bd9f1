"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    BadgeId,
    CommentId,
    NotificationId,
    PostId,
    UserBadgeId,
    UserId,
    VoteId,
    generate_id,
)
from forum.domain.value.types import (
    BadgeCriteria,
    BadgeLevel,
    BadgeType,
    NotificationData,
    NotificationType,
    OutgoingEmail,
    UserStats,
    VoteOutcome,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    "BadgeId",
    "UserBadgeId",
    "NotificationId",
    "generate_id",
    # Types
    "VoteType",
    "VoteOutcome",
    "BadgeType",
    "BadgeLevel",
    "BadgeCriteria",
    "NotificationType",
    "NotificationData",
    "OutgoingEmail",
    "UserStats",
]
