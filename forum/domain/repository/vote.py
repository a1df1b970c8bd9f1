"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from forum.domain.model.vote import Vote
from forum.domain.value import CommentId, PostId, UserId, VoteId, VoteType


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    """

    @abstractmethod
    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[Vote]:
        """Find a user's vote on a comment.

        Args:
            user_id: The voter
            comment_id: The voted comment

        Returns:
            The vote if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Vote]:
        """Find a user's vote on a post."""
        pass

    @abstractmethod
    async def find_by_comments(self, comment_ids: Sequence[CommentId]) -> List[Vote]:
        """Find every vote targeting any of the given comments.

        Args:
            comment_ids: Comment IDs to match

        Returns:
            All matching votes (empty when comment_ids is empty)
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Persist a new vote."""
        pass

    @abstractmethod
    async def update_type(self, vote_id: VoteId, vote_type: VoteType) -> Vote:
        """Change the direction of an existing vote.

        Args:
            vote_id: The vote to change
            vote_type: New vote direction

        Returns:
            The updated vote
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote."""
        pass

    @abstractmethod
    async def count_by_type(
        self,
        vote_type: VoteType,
        post_ids: Sequence[PostId] = (),
        comment_ids: Sequence[CommentId] = (),
    ) -> int:
        """Count votes of a type cast on any of the given posts or comments.

        Args:
            vote_type: Direction to count
            post_ids: Posts to include
            comment_ids: Comments to include

        Returns:
            Number of matching votes
        """
        pass
