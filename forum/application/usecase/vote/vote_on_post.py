"""Vote on post use case."""

from pydantic import BaseModel

from forum.domain.service import VoteService
from forum.domain.value import PostId, UserId, VoteOutcome, VoteType

from .vote_on_comment import OUTCOME_MESSAGES


class VoteOnPostRequest(BaseModel):
    """Vote on post request."""

    post_id: str
    user_id: str  # User ID from authenticated user
    vote_type: str  # "up" or "down"


class VoteOnPostResponse(BaseModel):
    """Vote on post response."""

    outcome: VoteOutcome
    message: str
    user_vote: str | None


class VoteOnPostUseCase:
    """Use case for casting, switching or withdrawing a post vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize vote on post use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: VoteOnPostRequest) -> VoteOnPostResponse:
        """Execute vote on post flow.

        Raises:
            ValueError: If the vote type is invalid
            NotFoundError: If the post doesn't exist
        """
        vote_type = VoteType.parse(request.vote_type)
        result = await self.vote_service.vote_on_post(
            PostId(request.post_id), UserId(request.user_id), vote_type
        )
        return VoteOnPostResponse(
            outcome=result.outcome,
            message=OUTCOME_MESSAGES[result.outcome],
            user_vote=result.vote.type.display if result.vote else None,
        )
