"""Create comment use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from forum.domain.error import NotFoundError
from forum.domain.repository import UserRepository
from forum.domain.service import (
    CommentService,
    CommentSideEffects,
    DispatchReport,
    PostService,
)
from forum.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    id: str
    post_id: str
    parent_id: str | None
    author_id: str
    author_name: str
    author_image: str | None
    content: str
    created_at: datetime
    updated_at: datetime
    notifications_sent: int


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_repository: UserRepository,
        side_effects: CommentSideEffects,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            user_repository: User repository (comment author)
            side_effects: Badge and notification dispatcher
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_repository = user_repository
        self.side_effects = side_effects

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Verify post and author exist
        2. Create comment via comment service (validates parent if replying)
        3. Dispatch badge and notification side effects; their failures are
           logged and never fail the request

        Args:
            request: Create comment request

        Returns:
            The created comment and the number of notifications delivered

        Raises:
            NotFoundError: If the post or author doesn't exist
            ValueError: If the parent comment is invalid
        """
        post_id = PostId(request.post_id)

        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        author = await self.user_repository.find_by_id(UserId(request.author_id))
        if not author:
            raise NotFoundError("User", request.author_id)

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author=author,
            content=request.content,
            parent_id=CommentId(request.parent_id) if request.parent_id else None,
        )

        try:
            report = await self.side_effects.dispatch(comment, post, author)
        except Exception as e:
            logfire.error(
                "Comment side effects failed",
                comment_id=str(comment.id),
                error=str(e),
            )
            report = DispatchReport()

        return CreateCommentResponse(
            id=str(comment.id),
            post_id=str(comment.post_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            author_id=str(comment.author_id),
            author_name=comment.author_name,
            author_image=comment.author_image,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            notifications_sent=report.delivered,
        )
