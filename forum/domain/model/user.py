"""User aggregate root.

Users author posts and comments, vote, earn badges and receive
notifications. Authentication itself is handled outside this service.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId


class User(DomainModel):
    """User aggregate root.

    The ``name`` is the public handle and is what ``@mentions`` resolve
    against (case-insensitively).
    """

    id: UserId
    name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
    image: Optional[str] = None
    email_verified: bool = False
    # Notification preferences
    email_notifications: bool = True
    notify_on_comment: bool = True
    notify_on_reply: bool = True
    notify_on_mention: bool = True
    notify_on_like: bool = False
    notify_on_system: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
