"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List

from forum.domain.model.notification import Notification
from forum.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Persist a notification.

        Implementations must isolate the write so that a failure here does
        not abort the caller's surrounding transaction.
        """
        pass

    @abstractmethod
    async def find_by_user(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Notification]:
        """List a user's notifications, newest first."""
        pass

    @abstractmethod
    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        pass

    @abstractmethod
    async def mark_as_read(
        self, notification_id: NotificationId, user_id: UserId
    ) -> bool:
        """Mark one notification read.

        Args:
            notification_id: The notification
            user_id: Its owner; notifications of other users are untouched

        Returns:
            True if a notification was updated
        """
        pass

    @abstractmethod
    async def mark_all_as_read(self, user_id: UserId) -> int:
        """Mark all of a user's notifications read.

        Returns:
            Number of notifications updated
        """
        pass
