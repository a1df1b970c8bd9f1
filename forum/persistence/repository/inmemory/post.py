"""In-memory post repository for testing."""

from typing import Optional

from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import PostId, UserId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    Deleting a post does not cascade; the database does that in production.
    """

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save a post."""
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        self._posts.pop(post_id, None)

    async def find_ids_by_author(self, author_id: UserId) -> list[PostId]:
        """List the IDs of a user's posts."""
        return [p.id for p in self._posts.values() if p.author_id == author_id]

    async def count_by_author(self, author_id: UserId) -> int:
        """Count a user's posts."""
        return sum(1 for p in self._posts.values() if p.author_id == author_id)
