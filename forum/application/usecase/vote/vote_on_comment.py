"""Vote on comment use case."""

from pydantic import BaseModel

from forum.domain.service import VoteService
from forum.domain.value import CommentId, UserId, VoteOutcome, VoteType

OUTCOME_MESSAGES = {
    VoteOutcome.RECORDED: "Vote recorded",
    VoteOutcome.UPDATED: "Vote updated",
    VoteOutcome.REMOVED: "Vote removed",
}


class VoteOnCommentRequest(BaseModel):
    """Vote on comment request."""

    comment_id: str
    user_id: str  # User ID from authenticated user
    vote_type: str  # "up" or "down"


class VoteOnCommentResponse(BaseModel):
    """Vote on comment response, with the refreshed tally."""

    outcome: VoteOutcome
    message: str
    user_vote: str | None
    upvotes: int
    downvotes: int


class VoteOnCommentUseCase:
    """Use case for casting, switching or withdrawing a comment vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize vote on comment use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: VoteOnCommentRequest) -> VoteOnCommentResponse:
        """Execute vote on comment flow.

        Args:
            request: Vote request

        Returns:
            Outcome and the comment's tally after the vote

        Raises:
            ValueError: If the vote type is invalid
            NotFoundError: If the comment doesn't exist
        """
        vote_type = VoteType.parse(request.vote_type)
        comment_id = CommentId(request.comment_id)
        user_id = UserId(request.user_id)

        result = await self.vote_service.vote_on_comment(comment_id, user_id, vote_type)
        summary = await self.vote_service.get_comment_vote_summary(comment_id, user_id)

        return VoteOnCommentResponse(
            outcome=result.outcome,
            message=OUTCOME_MESSAGES[result.outcome],
            user_vote=summary.user_vote,
            upvotes=summary.upvotes,
            downvotes=summary.downvotes,
        )
