"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from forum.domain.model.post import Post
from forum.domain.value import PostId, UserId


class PostRepository(ABC):
    """Repository for Post aggregate."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post together with its comments and votes.

        Args:
            post_id: The post ID to delete
        """
        pass

    @abstractmethod
    async def find_ids_by_author(self, author_id: UserId) -> List[PostId]:
        """List the IDs of all posts written by a user."""
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        """Count posts written by a user."""
        pass
