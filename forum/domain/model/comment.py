"""Comment entity.

Comments are stored flat with a nullable parent reference; the nested
thread is assembled at read time.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.
    ``parent_id`` is None for top-level comments. The author's display
    fields are denormalised onto the comment when it is read.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_name: str
    author_image: Optional[str] = None
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
