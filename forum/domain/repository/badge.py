"""Badge repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Dict, List, Sequence, Set

from forum.domain.model.badge import Badge, UserBadge
from forum.domain.value import BadgeId, UserId


class BadgeRepository(ABC):
    """Repository for badges and the badges users hold."""

    @abstractmethod
    async def find_active(self) -> List[Badge]:
        """List every active badge definition."""
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> List[UserBadge]:
        """List a user's badges, most recently earned first."""
        pass

    @abstractmethod
    async def find_recent_by_user(self, user_id: UserId, limit: int) -> List[Badge]:
        """List a user's most recently earned badges.

        Args:
            user_id: The badge holder
            limit: Maximum number of badges

        Returns:
            Badges ordered by earned time, newest first
        """
        pass

    @abstractmethod
    async def find_recent_by_users(
        self, user_ids: Sequence[UserId], limit: int
    ) -> Dict[UserId, List[Badge]]:
        """Batched variant of find_recent_by_user.

        Args:
            user_ids: Badge holders
            limit: Maximum number of badges per user

        Returns:
            Mapping user ID -> badges (newest first). Users without badges
            map to an empty list.
        """
        pass

    @abstractmethod
    async def find_user_badge_ids(self, user_id: UserId) -> Set[BadgeId]:
        """IDs of the badges a user already holds."""
        pass

    @abstractmethod
    async def award(self, user_badge: UserBadge) -> UserBadge:
        """Record that a user earned a badge."""
        pass

    @abstractmethod
    async def upsert(self, badge: Badge) -> Badge:
        """Create a badge definition, or update the one with the same name."""
        pass

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Scope a unit of badge work.

        If the block raises, the work done inside it is undone and the
        surrounding transaction stays usable. The exception still propagates.
        """
        pass
