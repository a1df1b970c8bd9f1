"""In-memory comment repository for testing."""

from typing import Optional

from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, PostId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find every comment on a post."""
        return [c for c in self._comments.values() if c.post_id == post_id]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[comment.id] = comment
        return comment

    async def count_by_author(self, author_id: UserId) -> int:
        """Count a user's comments."""
        return sum(1 for c in self._comments.values() if c.author_id == author_id)

    async def find_ids_by_author(self, author_id: UserId) -> list[CommentId]:
        """List the IDs of a user's comments."""
        return [c.id for c in self._comments.values() if c.author_id == author_id]
