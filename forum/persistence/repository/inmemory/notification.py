"""In-memory notification repository for testing."""

from forum.domain.model.notification import Notification
from forum.domain.repository.notification import NotificationRepository
from forum.domain.value import NotificationId, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    async def save(self, notification: Notification) -> Notification:
        """Save a notification."""
        self._notifications[notification.id] = notification
        return notification

    async def find_by_user(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Notification]:
        """List a user's notifications, newest first."""
        owned = sorted(
            (n for n in self._notifications.values() if n.user_id == user_id),
            key=lambda n: (n.created_at, n.id),
            reverse=True,
        )
        return owned[offset : offset + limit]

    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        return sum(
            1
            for n in self._notifications.values()
            if n.user_id == user_id and not n.is_read
        )

    async def mark_as_read(
        self, notification_id: NotificationId, user_id: UserId
    ) -> bool:
        """Mark one of the user's notifications read."""
        notification = self._notifications.get(notification_id)
        if notification is None or notification.user_id != user_id:
            return False
        self._notifications[notification_id] = notification.model_copy(
            update={"is_read": True}
        )
        return True

    async def mark_all_as_read(self, user_id: UserId) -> int:
        """Mark all of a user's unread notifications read."""
        count = 0
        for notification_id, notification in list(self._notifications.items()):
            if notification.user_id == user_id and not notification.is_read:
                self._notifications[notification_id] = notification.model_copy(
                    update={"is_read": True}
                )
                count += 1
        return count
