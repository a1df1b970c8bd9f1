"""PostgreSQL implementation of Badge repository."""

from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Dict, List, Sequence, Set

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Badge, UserBadge
from forum.domain.repository import BadgeRepository
from forum.domain.value import BadgeId, UserId
from forum.persistence.mappers import (
    badge_to_dict,
    row_to_badge,
    row_to_user_badge,
    user_badge_to_dict,
)
from forum.persistence.tables import badges_table, user_badges_table


def _held_badges():
    """Select user_badges rows joined with their badge definition."""
    return select(
        user_badges_table.c.id.label("user_badge_id"),
        user_badges_table.c.user_id,
        user_badges_table.c.earned_at,
        user_badges_table.c.awarded_by,
        badges_table,
    ).join(badges_table, badges_table.c.id == user_badges_table.c.badge_id)


def _split_row(row: dict) -> UserBadge:
    badge = row_to_badge(row)
    return row_to_user_badge(
        {
            "id": row["user_badge_id"],
            "user_id": row["user_id"],
            "earned_at": row["earned_at"],
            "awarded_by": row["awarded_by"],
        },
        badge,
    )


class PostgresBadgeRepository(BadgeRepository):
    """PostgreSQL implementation of BadgeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_active(self) -> List[Badge]:
        """List active badge definitions."""
        stmt = (
            select(badges_table)
            .where(badges_table.c.is_active.is_(True))
            .order_by(badges_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_badge(row._asdict()) for row in result.fetchall()]

    async def find_by_user(self, user_id: UserId) -> List[UserBadge]:
        """List a user's badges, newest first."""
        stmt = (
            _held_badges()
            .where(user_badges_table.c.user_id == user_id)
            .order_by(user_badges_table.c.earned_at.desc(), user_badges_table.c.id.desc())
        )
        result = await self.session.execute(stmt)
        return [_split_row(row._asdict()) for row in result.fetchall()]

    async def find_recent_by_user(self, user_id: UserId, limit: int) -> List[Badge]:
        """List a user's most recently earned active badges."""
        stmt = (
            _held_badges()
            .where(
                user_badges_table.c.user_id == user_id,
                badges_table.c.is_active.is_(True),
            )
            .order_by(user_badges_table.c.earned_at.desc(), user_badges_table.c.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_badge(row._asdict()) for row in result.fetchall()]

    async def find_recent_by_users(
        self, user_ids: Sequence[UserId], limit: int
    ) -> Dict[UserId, List[Badge]]:
        """Most recent badges for several users, one query.

        Ranks each user's badges with a window function and keeps the top
        ``limit`` per user.
        """
        badges: Dict[UserId, List[Badge]] = defaultdict(list)
        if not user_ids:
            return {}

        rank = (
            func.row_number()
            .over(
                partition_by=user_badges_table.c.user_id,
                order_by=(
                    user_badges_table.c.earned_at.desc(),
                    user_badges_table.c.id.desc(),
                ),
            )
            .label("rank")
        )
        ranked = (
            _held_badges()
            .add_columns(rank)
            .where(
                user_badges_table.c.user_id.in_(user_ids),
                badges_table.c.is_active.is_(True),
            )
            .subquery()
        )
        stmt = (
            select(ranked)
            .where(ranked.c.rank <= limit)
            .order_by(ranked.c.user_id, ranked.c.rank)
        )
        result = await self.session.execute(stmt)
        for row in result.fetchall():
            data = row._asdict()
            badges[UserId(data["user_id"])].append(row_to_badge(data))

        return {user_id: badges.get(user_id, []) for user_id in user_ids}

    async def find_user_badge_ids(self, user_id: UserId) -> Set[BadgeId]:
        """IDs of the badges a user holds."""
        stmt = select(user_badges_table.c.badge_id).where(
            user_badges_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return {BadgeId(badge_id) for badge_id in result.scalars().all()}

    async def award(self, user_badge: UserBadge) -> UserBadge:
        """Record an earned badge; an already-held badge is left untouched."""
        stmt = (
            insert(user_badges_table)
            .values(**user_badge_to_dict(user_badge))
            .on_conflict_do_nothing(
                index_elements=[user_badges_table.c.user_id, user_badges_table.c.badge_id]
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user_badge

    async def upsert(self, badge: Badge) -> Badge:
        """Create a badge definition or update it in place."""
        badge_dict = badge_to_dict(badge)
        stmt = insert(badges_table).values(**badge_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[badges_table.c.id],
            set_={k: v for k, v in badge_dict.items() if k not in ("id", "created_at")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return badge

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Run the block in a SAVEPOINT on the request's session.

        A database error inside the block rolls back to the savepoint instead
        of aborting the whole transaction.
        """
        async with self.session.begin_nested():
            yield
