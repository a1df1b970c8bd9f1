"""Post domain service."""

from datetime import datetime

import logfire

from forum.domain.error import NotAuthorizedError, NotFoundError
from forum.domain.model import Post, User
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, UserId, generate_id

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self, author: User, title: str, content: str | None = None
    ) -> Post:
        """Create a post.

        Args:
            author: Post author
            title: Post title
            content: Post body

        Returns:
            Created post
        """
        with logfire.span(
            "post_service.create_post", author_id=str(author.id), title=title
        ):
            now = datetime.now()
            post = Post(
                id=PostId(generate_id("post")),
                title=title,
                content=content,
                author_id=author.id,
                author_name=author.name,
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def delete_post(self, post_id: PostId, user_id: UserId) -> None:
        """Delete a post with its comments and votes.

        Args:
            post_id: Post ID
            user_id: User requesting the deletion

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user is not the post author
        """
        with logfire.span(
            "post_service.delete_post", post_id=str(post_id), user_id=str(user_id)
        ):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                raise NotFoundError("Post", str(post_id))
            if post.author_id != user_id:
                logfire.warn(
                    "Post deletion refused",
                    post_id=str(post_id),
                    author_id=str(post.author_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("post", str(post_id), str(user_id))

            await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=str(post_id))
