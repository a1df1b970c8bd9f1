"""Mark notifications read use case."""

from pydantic import BaseModel

from forum.domain.error import NotFoundError
from forum.domain.service import NotificationService
from forum.domain.value import NotificationId, UserId


class MarkNotificationsReadRequest(BaseModel):
    """Mark notifications read request.

    Without a notification ID, every notification of the user is marked.
    """

    user_id: str  # User ID from authenticated user
    notification_id: str | None = None


class MarkNotificationsReadResponse(BaseModel):
    """Mark notifications read response."""

    updated: int
    unread_count: int


class MarkNotificationsReadUseCase:
    """Use case for marking one or all notifications read."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark notifications read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: MarkNotificationsReadRequest
    ) -> MarkNotificationsReadResponse:
        """Execute mark notifications read flow.

        Raises:
            NotFoundError: If the notification doesn't exist or belongs to
                another user
        """
        user_id = UserId(request.user_id)
        if request.notification_id:
            found = await self.notification_service.mark_as_read(
                NotificationId(request.notification_id), user_id
            )
            if not found:
                raise NotFoundError("Notification", request.notification_id)
            updated = 1
        else:
            updated = await self.notification_service.mark_all_as_read(user_id)

        unread = await self.notification_service.count_unread(user_id)
        return MarkNotificationsReadResponse(updated=updated, unread_count=unread)
