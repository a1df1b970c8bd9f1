"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from forum.domain.error import NotFoundError
from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository
from forum.domain.value import CommentId, PostId, UserId, VoteId, VoteType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[Vote]:
        """Find a user's vote on a comment."""
        for vote in self._votes:
            if vote.user_id == user_id and vote.comment_id == comment_id:
                return vote
        return None

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Vote]:
        """Find a user's vote on a post."""
        for vote in self._votes:
            if vote.user_id == user_id and vote.post_id == post_id:
                return vote
        return None

    async def find_by_comments(self, comment_ids: Sequence[CommentId]) -> list[Vote]:
        """Find all votes on the given comments."""
        wanted = set(comment_ids)
        return [v for v in self._votes if v.comment_id in wanted]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the user already voted on the target
        """
        if vote.comment_id is not None:
            existing = await self.find_by_user_and_comment(vote.user_id, vote.comment_id)
        else:
            existing = await self.find_by_user_and_post(vote.user_id, vote.post_id)
        if existing:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote

    async def update_type(self, vote_id: VoteId, vote_type: VoteType) -> Vote:
        """Switch the direction of a vote."""
        for i, vote in enumerate(self._votes):
            if vote.id == vote_id:
                updated = vote.model_copy(update={"type": vote_type})
                self._votes[i] = updated
                return updated
        raise NotFoundError("Vote", str(vote_id))

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote by ID."""
        self._votes = [v for v in self._votes if v.id != vote_id]

    async def count_by_type(
        self,
        vote_type: VoteType,
        post_ids: Sequence[PostId] = (),
        comment_ids: Sequence[CommentId] = (),
    ) -> int:
        """Count votes of a type on any of the given posts or comments."""
        posts = set(post_ids)
        comments = set(comment_ids)
        return sum(
            1
            for v in self._votes
            if v.type is vote_type
            and (
                (v.post_id is not None and v.post_id in posts)
                or (v.comment_id is not None and v.comment_id in comments)
            )
        )
