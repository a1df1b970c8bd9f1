"""Domain models for the forum."""

from forum.domain.model.badge import Badge, UserBadge
from forum.domain.model.comment import Comment
from forum.domain.model.notification import Notification
from forum.domain.model.post import Post
from forum.domain.model.user import User
from forum.domain.model.vote import Vote

__all__ = [
    "Badge",
    "Comment",
    "Notification",
    "Post",
    "User",
    "UserBadge",
    "Vote",
]
