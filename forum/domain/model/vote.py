"""Vote entity.

Votes are up or down and target exactly one post or one comment.
Each user can hold at most one vote per target.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, PostId, UserId, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - Exactly one of post_id / comment_id is set
    - One vote per user per target (enforced by unique indexes)
    """

    id: VoteId
    user_id: UserId
    type: VoteType
    post_id: Optional[PostId] = None
    comment_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_single_target(self) -> "Vote":
        """Validate that the vote targets exactly one entity."""
        if (self.post_id is None) == (self.comment_id is None):
            raise ValueError("A vote must target exactly one of post or comment")
        return self
