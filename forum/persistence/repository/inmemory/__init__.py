"""In-memory repository implementations for testing."""

from .badge import InMemoryBadgeRepository
from .comment import InMemoryCommentRepository
from .notification import InMemoryNotificationRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryBadgeRepository",
    "InMemoryCommentRepository",
    "InMemoryNotificationRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
