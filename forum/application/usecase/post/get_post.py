"""Get post use case."""

from pydantic import BaseModel

from forum.domain.error import NotFoundError
from forum.domain.repository import VoteRepository
from forum.domain.service import PostService
from forum.domain.value import PostId, VoteType

from .create_post import PostResponse


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str


class GetPostUseCase:
    """Use case for reading a post with its vote tally."""

    def __init__(
        self, post_service: PostService, vote_repository: VoteRepository
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_repository: Vote repository for the tally
        """
        self.post_service = post_service
        self.vote_repository = vote_repository

    async def execute(self, request: GetPostRequest) -> PostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post_id = PostId(request.post_id)
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        upvotes = await self.vote_repository.count_by_type(
            VoteType.UP, post_ids=[post_id]
        )
        downvotes = await self.vote_repository.count_by_type(
            VoteType.DOWN, post_ids=[post_id]
        )
        return PostResponse.from_post(post, upvotes=upvotes, downvotes=downvotes)
