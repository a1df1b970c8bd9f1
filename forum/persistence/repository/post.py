"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, UserId
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.tables import posts_table, users_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, with its author's name."""
        stmt = (
            select(posts_table, users_table.c.name.label("author_name"))
            .join(users_table, users_table.c.id == posts_table.c.author_id)
            .where(posts_table.c.id == post_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def save(self, post: Post) -> Post:
        """Save a post (upsert on ID)."""
        post_dict = post_to_dict(post)
        stmt = insert(posts_table).values(**post_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[posts_table.c.id],
            set_={
                "title": post_dict["title"],
                "content": post_dict["content"],
                "updated_at": post_dict["updated_at"],
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post; comments and votes cascade in the database."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_ids_by_author(self, author_id: UserId) -> List[PostId]:
        """List the IDs of a user's posts."""
        stmt = select(posts_table.c.id).where(posts_table.c.author_id == author_id)
        result = await self.session.execute(stmt)
        return [PostId(post_id) for post_id in result.scalars().all()]

    async def count_by_author(self, author_id: UserId) -> int:
        """Count a user's posts."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.author_id == author_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
