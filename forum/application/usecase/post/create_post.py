"""Create post use case."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.error import NotFoundError
from forum.domain.model import Post
from forum.domain.repository import UserRepository
from forum.domain.service import PostService
from forum.domain.value import UserId


class PostResponse(BaseModel):
    """Post details."""

    id: str
    title: str
    content: str | None
    author_id: str
    author_name: str
    created_at: datetime
    updated_at: datetime
    upvotes: int = 0
    downvotes: int = 0

    @classmethod
    def from_post(cls, post: Post, upvotes: int = 0, downvotes: int = 0) -> "PostResponse":
        return cls(
            id=str(post.id),
            title=post.title,
            content=post.content,
            author_id=str(post.author_id),
            author_name=post.author_name,
            created_at=post.created_at,
            updated_at=post.updated_at,
            upvotes=upvotes,
            downvotes=downvotes,
        )


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str
    content: str | None = None
    author_id: str  # User ID from authenticated user


class CreatePostUseCase:
    """Use case for creating a post."""

    def __init__(
        self, post_service: PostService, user_repository: UserRepository
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_repository: User repository (post author)
        """
        self.post_service = post_service
        self.user_repository = user_repository

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Execute create post flow.

        Raises:
            NotFoundError: If the author doesn't exist
        """
        author = await self.user_repository.find_by_id(UserId(request.author_id))
        if not author:
            raise NotFoundError("User", request.author_id)

        post = await self.post_service.create_post(
            author=author, title=request.title, content=request.content
        )
        return PostResponse.from_post(post)
