"""PostgreSQL repository implementations."""

from forum.persistence.repository.badge import PostgresBadgeRepository
from forum.persistence.repository.comment import PostgresCommentRepository
from forum.persistence.repository.notification import PostgresNotificationRepository
from forum.persistence.repository.post import PostgresPostRepository
from forum.persistence.repository.user import PostgresUserRepository
from forum.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresBadgeRepository",
    "PostgresNotificationRepository",
]
