"""List notifications use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from forum.domain.model import Notification
from forum.domain.service import NotificationService
from forum.domain.value import UserId


class NotificationItem(BaseModel):
    """Notification in a listing."""

    id: str
    type: str
    title: str
    message: str
    data: dict
    is_read: bool
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        return cls(
            id=str(notification.id),
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            data=notification.data.model_dump(exclude_none=True),
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str  # User ID from authenticated user
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationItem]
    unread_count: int


class ListNotificationsUseCase:
    """Use case for listing the current user's notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize list notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Execute list notifications flow."""
        user_id = UserId(request.user_id)
        notifications = await self.notification_service.list_notifications(
            user_id, limit=request.limit, offset=request.offset
        )
        unread = await self.notification_service.count_unread(user_id)
        return ListNotificationsResponse(
            notifications=[NotificationItem.from_notification(n) for n in notifications],
            unread_count=unread,
        )
