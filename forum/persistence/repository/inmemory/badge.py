"""In-memory badge repository for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Sequence

from forum.domain.model.badge import Badge, UserBadge
from forum.domain.repository.badge import BadgeRepository
from forum.domain.value import BadgeId, UserId


class InMemoryBadgeRepository(BadgeRepository):
    """In-memory implementation of BadgeRepository for testing."""

    def __init__(self) -> None:
        self._badges: dict[BadgeId, Badge] = {}
        self._user_badges: list[UserBadge] = []

    async def find_active(self) -> list[Badge]:
        """List active badge definitions."""
        return sorted(
            (b for b in self._badges.values() if b.is_active), key=lambda b: b.id
        )

    async def find_by_user(self, user_id: UserId) -> list[UserBadge]:
        """List a user's badges, newest first."""
        held = [ub for ub in self._user_badges if ub.user_id == user_id]
        return sorted(held, key=lambda ub: (ub.earned_at, ub.id), reverse=True)

    async def find_recent_by_user(self, user_id: UserId, limit: int) -> list[Badge]:
        """List a user's most recently earned active badges."""
        held = await self.find_by_user(user_id)
        return [ub.badge for ub in held if ub.badge.is_active][:limit]

    async def find_recent_by_users(
        self, user_ids: Sequence[UserId], limit: int
    ) -> dict[UserId, list[Badge]]:
        """Most recent badges for several users."""
        return {
            user_id: await self.find_recent_by_user(user_id, limit)
            for user_id in user_ids
        }

    async def find_user_badge_ids(self, user_id: UserId) -> set[BadgeId]:
        """IDs of the badges a user holds."""
        return {ub.badge.id for ub in self._user_badges if ub.user_id == user_id}

    async def award(self, user_badge: UserBadge) -> UserBadge:
        """Record an earned badge; an already-held badge is left untouched."""
        if user_badge.badge.id not in await self.find_user_badge_ids(
            user_badge.user_id
        ):
            self._user_badges.append(user_badge)
        return user_badge

    async def upsert(self, badge: Badge) -> Badge:
        """Create or replace a badge definition."""
        self._badges[badge.id] = badge
        return badge

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Restore the held badges if the block raises."""
        held = list(self._user_badges)
        try:
            yield
        except Exception:
            self._user_badges = held
            raise
