"""Mock persistence providers for testing."""

from dishka import Scope, provide

from forum.domain.repository import (
    BadgeRepository,
    CommentRepository,
    NotificationRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from forum.persistence.repository.inmemory import (
    InMemoryBadgeRepository,
    InMemoryCommentRepository,
    InMemoryNotificationRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from forum.util.di.base import ProviderBase
from forum.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository()

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()

    @provide(scope=Scope.REQUEST)
    def get_badge_repository(self) -> BadgeRepository:
        """Provide in-memory badge repository."""
        return InMemoryBadgeRepository()

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(self) -> NotificationRepository:
        """Provide in-memory notification repository."""
        return InMemoryNotificationRepository()


class SharedPersistenceProvider(ProviderBase):
    """In-memory repositories shared across requests.

    API tests drive several HTTP requests against one app; APP scope keeps
    the data written by one request visible to the next.
    """

    scope = Scope.APP

    @provide
    def get_user_repository(self) -> UserRepository:
        return InMemoryUserRepository()

    @provide
    def get_post_repository(self) -> PostRepository:
        return InMemoryPostRepository()

    @provide
    def get_comment_repository(self) -> CommentRepository:
        return InMemoryCommentRepository()

    @provide
    def get_vote_repository(self) -> VoteRepository:
        return InMemoryVoteRepository()

    @provide
    def get_badge_repository(self) -> BadgeRepository:
        return InMemoryBadgeRepository()

    @provide
    def get_notification_repository(self) -> NotificationRepository:
        return InMemoryNotificationRepository()
