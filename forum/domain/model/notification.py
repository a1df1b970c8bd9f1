"""Notification entity."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import (
    NotificationData,
    NotificationId,
    NotificationType,
    UserId,
)


class Notification(DomainModel):
    """In-app notification addressed to a single user."""

    id: NotificationId
    user_id: UserId
    type: NotificationType
    title: str = Field(min_length=1, max_length=200)
    message: str
    data: NotificationData = Field(default_factory=NotificationData)
    is_read: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
