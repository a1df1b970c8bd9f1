"""Get comment votes use case."""

from pydantic import BaseModel

from forum.domain.service import JWTService, VoteService
from forum.domain.value import CommentId


class GetCommentVotesRequest(BaseModel):
    """Get comment votes request."""

    comment_id: str
    auth_token: str | None = None  # JWT token for authentication (optional)


class GetCommentVotesResponse(BaseModel):
    """Vote tally for a comment."""

    comment_id: str
    upvotes: int
    downvotes: int
    user_vote: str | None


class GetCommentVotesUseCase:
    """Use case for reading a comment's vote tally."""

    def __init__(self, vote_service: VoteService, jwt_service: JWTService) -> None:
        """Initialize get comment votes use case.

        Args:
            vote_service: Vote domain service
            jwt_service: JWT service for identifying the viewer
        """
        self.vote_service = vote_service
        self.jwt_service = jwt_service

    async def execute(self, request: GetCommentVotesRequest) -> GetCommentVotesResponse:
        """Execute get comment votes flow.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        viewer_id = self.jwt_service.get_user_id_from_token(request.auth_token)
        summary = await self.vote_service.get_comment_vote_summary(
            CommentId(request.comment_id), viewer_id
        )
        return GetCommentVotesResponse(
            comment_id=request.comment_id,
            upvotes=summary.upvotes,
            downvotes=summary.downvotes,
            user_vote=summary.user_vote,
        )
