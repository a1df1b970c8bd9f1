"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import NotFoundError
from forum.domain.model import Vote
from forum.domain.repository import VoteRepository
from forum.domain.value import CommentId, PostId, UserId, VoteId, VoteType
from forum.persistence.mappers import row_to_vote, vote_to_dict
from forum.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[Vote]:
        """Find a user's vote on a comment."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.comment_id == comment_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Vote]:
        """Find a user's vote on a post."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.post_id == post_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_comments(self, comment_ids: Sequence[CommentId]) -> List[Vote]:
        """Find all votes on the given comments (batch query)."""
        if not comment_ids:
            return []

        stmt = select(votes_table).where(votes_table.c.comment_id.in_(comment_ids))
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create)."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def update_type(self, vote_id: VoteId, vote_type: VoteType) -> Vote:
        """Switch the direction of a vote."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote_id)
            .values(type=vote_type.value)
            .returning(votes_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            raise NotFoundError("Vote", str(vote_id))
        await self.session.flush()
        return row_to_vote(row._asdict())

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def count_by_type(
        self,
        vote_type: VoteType,
        post_ids: Sequence[PostId] = (),
        comment_ids: Sequence[CommentId] = (),
    ) -> int:
        """Count votes of a type on any of the given posts or comments."""
        targets = []
        if post_ids:
            targets.append(votes_table.c.post_id.in_(post_ids))
        if comment_ids:
            targets.append(votes_table.c.comment_id.in_(comment_ids))
        if not targets:
            return 0

        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(and_(votes_table.c.type == vote_type.value, or_(*targets)))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
