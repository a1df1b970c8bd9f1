"""Vote domain service."""

from dataclasses import dataclass
from datetime import datetime

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import Vote
from forum.domain.repository import CommentRepository, PostRepository, VoteRepository
from forum.domain.value import (
    CommentId,
    PostId,
    UserId,
    VoteId,
    VoteOutcome,
    VoteType,
    generate_id,
)

from .base import Service


@dataclass
class VoteResult:
    """Outcome of casting a vote, with the vote as it now stands."""

    outcome: VoteOutcome
    vote: Vote | None


@dataclass
class VoteSummary:
    """Vote tally for a single comment."""

    upvotes: int
    downvotes: int
    user_vote: str | None


class VoteService(Service):
    """Domain service for vote operations.

    Voting toggles: voting again with the same direction withdraws the vote,
    voting with the other direction switches it.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository
            comment_repository: Comment repository
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository

    async def vote_on_comment(
        self, comment_id: CommentId, user_id: UserId, vote_type: VoteType
    ) -> VoteResult:
        """Cast, switch or withdraw a vote on a comment.

        Args:
            comment_id: Comment ID
            user_id: Voter
            vote_type: Requested direction

        Returns:
            What happened and the resulting vote (None when withdrawn)

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "vote_service.vote_on_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
            vote_type=vote_type.value,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Vote on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            existing = await self.vote_repository.find_by_user_and_comment(
                user_id, comment_id
            )
            return await self._toggle(
                existing,
                vote_type,
                Vote(
                    id=VoteId(generate_id("vote")),
                    user_id=user_id,
                    type=vote_type,
                    comment_id=comment_id,
                    created_at=datetime.now(),
                ),
            )

    async def vote_on_post(
        self, post_id: PostId, user_id: UserId, vote_type: VoteType
    ) -> VoteResult:
        """Cast, switch or withdraw a vote on a post.

        Args:
            post_id: Post ID
            user_id: Voter
            vote_type: Requested direction

        Returns:
            What happened and the resulting vote (None when withdrawn)

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span(
            "vote_service.vote_on_post",
            post_id=str(post_id),
            user_id=str(user_id),
            vote_type=vote_type.value,
        ):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Vote on non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            existing = await self.vote_repository.find_by_user_and_post(
                user_id, post_id
            )
            return await self._toggle(
                existing,
                vote_type,
                Vote(
                    id=VoteId(generate_id("vote")),
                    user_id=user_id,
                    type=vote_type,
                    post_id=post_id,
                    created_at=datetime.now(),
                ),
            )

    async def _toggle(
        self, existing: Vote | None, vote_type: VoteType, new_vote: Vote
    ) -> VoteResult:
        if existing is None:
            saved = await self.vote_repository.save(new_vote)
            logfire.info("Vote recorded", vote_id=str(saved.id))
            return VoteResult(outcome=VoteOutcome.RECORDED, vote=saved)

        if existing.type is vote_type:
            await self.vote_repository.delete(existing.id)
            logfire.info("Vote removed", vote_id=str(existing.id))
            return VoteResult(outcome=VoteOutcome.REMOVED, vote=None)

        updated = await self.vote_repository.update_type(existing.id, vote_type)
        logfire.info(
            "Vote updated", vote_id=str(existing.id), vote_type=vote_type.value
        )
        return VoteResult(outcome=VoteOutcome.UPDATED, vote=updated)

    async def get_votes_for_comments(self, comment_ids: list[CommentId]) -> list[Vote]:
        """Get every vote cast on any of the given comments.

        Args:
            comment_ids: Comment IDs

        Returns:
            Matching votes
        """
        if not comment_ids:
            return []

        with logfire.span(
            "vote_service.get_votes_for_comments", comment_count=len(comment_ids)
        ):
            votes = await self.vote_repository.find_by_comments(comment_ids)
            logfire.info("Votes retrieved for comments", count=len(votes))
            return votes

    async def get_comment_vote_summary(
        self, comment_id: CommentId, viewer_id: UserId | None = None
    ) -> VoteSummary:
        """Tally the votes on a comment.

        Args:
            comment_id: Comment ID
            viewer_id: User whose own vote should be reported

        Returns:
            Up/down counts and the viewer's vote ("up" / "down" / None)

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "vote_service.get_comment_vote_summary", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            votes = await self.vote_repository.find_by_comments([comment_id])
            upvotes = sum(1 for vote in votes if vote.type is VoteType.UP)
            user_vote = None
            if viewer_id is not None:
                own = [vote for vote in votes if vote.user_id == viewer_id]
                if own:
                    user_vote = min(own, key=lambda v: (v.created_at, v.id)).type.display

            return VoteSummary(
                upvotes=upvotes,
                downvotes=len(votes) - upvotes,
                user_vote=user_vote,
            )
