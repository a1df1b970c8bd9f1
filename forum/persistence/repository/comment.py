"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, UserId
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.tables import comments_table, users_table


def _select_with_author():
    """Select comments joined with the author's display fields."""
    return select(
        comments_table,
        users_table.c.name.label("author_name"),
        users_table.c.image.label("author_image"),
    ).join(users_table, users_table.c.id == comments_table.c.author_id)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = _select_with_author().where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find every comment on a post."""
        stmt = _select_with_author().where(comments_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (upsert on ID)."""
        comment_dict = comment_to_dict(comment)
        stmt = insert(comments_table).values(**comment_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[comments_table.c.id],
            set_={
                "content": comment_dict["content"],
                "updated_at": comment_dict["updated_at"],
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def count_by_author(self, author_id: UserId) -> int:
        """Count a user's comments."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.author_id == author_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_ids_by_author(self, author_id: UserId) -> List[CommentId]:
        """List the IDs of a user's comments."""
        stmt = select(comments_table.c.id).where(
            comments_table.c.author_id == author_id
        )
        result = await self.session.execute(stmt)
        return [CommentId(comment_id) for comment_id in result.scalars().all()]
