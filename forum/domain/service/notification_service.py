"""Notification domain service."""

from datetime import datetime

import logfire

from forum.config import EmailSettings
from forum.domain.model import Notification, User
from forum.domain.repository import NotificationRepository
from forum.domain.value import (
    NotificationData,
    NotificationId,
    NotificationType,
    OutgoingEmail,
    UserId,
    generate_id,
)

from .base import Service
from .email import EmailSender

UNTITLED_POST = "Untitled Post"
TITLE_EXCERPT = 50
COMMENT_EXCERPT = 100


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def _post_title(data: NotificationData) -> str | None:
    title = data.post_title
    if title and title.strip() and title != UNTITLED_POST:
        return _truncate(title, TITLE_EXCERPT)
    return None


def build_notification_content(
    type: NotificationType, data: NotificationData
) -> tuple[str, str]:
    """Build the title and message of an activity notification.

    Args:
        type: Notification type
        data: Notification context

    Returns:
        (title, message)
    """
    author = data.author_name or "Someone"
    title = _post_title(data)

    if type is NotificationType.POST_LIKE:
        return (
            f"{author} liked your post",
            f'"{title}"' if title else "Someone liked your post",
        )
    if type is NotificationType.POST_COMMENT:
        return (
            f"{author} commented on your post",
            f'on "{title}"' if title else "Someone commented on your post",
        )
    if type is NotificationType.COMMENT_REPLY:
        return (
            f"{author} replied to your comment",
            f'"{_truncate(data.comment_content, COMMENT_EXCERPT)}"'
            if data.comment_content
            else "Someone replied to your comment",
        )
    if type is NotificationType.MENTION:
        return (
            f"{author} mentioned you",
            f'in "{title}"' if title else "You were mentioned in a post",
        )
    if type is NotificationType.BEST_ANSWER:
        return (
            "Your comment was marked as best answer!",
            f'in "{title}"' if title else "Your comment was marked as the best answer",
        )
    return ("New notification", "You have a new notification")


class NotificationService(Service):
    """Domain service for in-app notifications and notification emails."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        email_sender: EmailSender,
        email_settings: EmailSettings,
        allow_unverified_email: bool = False,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            email_sender: Outgoing email adapter
            email_settings: Email configuration (sender, site URL)
            allow_unverified_email: Send to unverified addresses (development)
        """
        self.notification_repository = notification_repository
        self.email_sender = email_sender
        self.email_settings = email_settings
        self.allow_unverified_email = allow_unverified_email

    async def create_activity_notification(
        self, user_id: UserId, type: NotificationType, data: NotificationData
    ) -> Notification:
        """Create and persist an activity notification.

        Args:
            user_id: Recipient
            type: Notification type
            data: Notification context

        Returns:
            Saved notification
        """
        with logfire.span(
            "notification_service.create_activity_notification",
            user_id=str(user_id),
            type=type.value,
        ):
            title, message = build_notification_content(type, data)
            notification = Notification(
                id=NotificationId(generate_id("notification")),
                user_id=user_id,
                type=type,
                title=title,
                message=message,
                data=data,
                created_at=datetime.now(),
            )
            saved = await self.notification_repository.save(notification)
            logfire.info(
                "Notification created",
                notification_id=str(saved.id),
                user_id=str(user_id),
                type=type.value,
            )
            return saved

    async def list_notifications(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Notification]:
        """List a user's notifications, newest first."""
        with logfire.span(
            "notification_service.list_notifications",
            user_id=str(user_id),
            limit=limit,
            offset=offset,
        ):
            return await self.notification_repository.find_by_user(
                user_id, limit=limit, offset=offset
            )

    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        return await self.notification_repository.count_unread(user_id)

    async def mark_as_read(
        self, notification_id: NotificationId, user_id: UserId
    ) -> bool:
        """Mark one of the user's notifications read.

        Returns:
            True if the notification exists and belongs to the user
        """
        with logfire.span(
            "notification_service.mark_as_read",
            notification_id=str(notification_id),
            user_id=str(user_id),
        ):
            updated = await self.notification_repository.mark_as_read(
                notification_id, user_id
            )
            if not updated:
                logfire.warn(
                    "Notification not found for user",
                    notification_id=str(notification_id),
                    user_id=str(user_id),
                )
            return updated

    async def mark_all_as_read(self, user_id: UserId) -> int:
        """Mark all of a user's notifications read.

        Returns:
            Number of notifications updated
        """
        with logfire.span(
            "notification_service.mark_all_as_read", user_id=str(user_id)
        ):
            count = await self.notification_repository.mark_all_as_read(user_id)
            logfire.info("Notifications marked read", user_id=str(user_id), count=count)
            return count

    def should_send_email(self, user: User, type: NotificationType) -> bool:
        """Check the user's email preferences for a notification type.

        The user needs an address, the global email opt-in and a verified
        address (unless unverified addresses are allowed), plus the per-type
        preference.

        Args:
            user: Recipient
            type: Notification type

        Returns:
            True if an email should be sent
        """
        if not user.email or not user.email_notifications:
            return False
        if not (user.email_verified or self.allow_unverified_email):
            return False

        preferences = {
            NotificationType.POST_COMMENT: user.notify_on_comment,
            NotificationType.POST_LIKE: user.notify_on_like,
            NotificationType.MENTION: user.notify_on_mention,
            NotificationType.COMMENT_REPLY: user.notify_on_reply,
            NotificationType.SYSTEM: user.notify_on_system,
            NotificationType.BEST_ANSWER: True,
        }
        return preferences.get(type, False)

    def render_email(self, user: User, notification: Notification) -> OutgoingEmail:
        """Render the email for a notification.

        Args:
            user: Recipient (must have an email address)
            notification: Notification to announce

        Returns:
            Rendered email
        """
        site = self.email_settings.site_url.rstrip("/")
        data = notification.data
        if data.custom_url:
            link = data.custom_url
        elif data.post_id:
            link = f"{site}/posts/{data.post_id}"
            if data.comment_id:
                link += f"#comment-{data.comment_id}"
        else:
            link = f"{site}/notifications"

        text = (
            f"Hi {user.name},\n\n"
            f"{notification.title}\n"
            f"{notification.message}\n\n"
            f"View: {link}\n"
        )
        return OutgoingEmail(to=user.email, subject=notification.title, text=text)

    async def send_notification_email(
        self, user: User, notification: Notification
    ) -> bool:
        """Email a notification to its recipient if their preferences allow.

        Args:
            user: Recipient
            notification: Notification to announce

        Returns:
            True if an email was sent

        Raises:
            EmailDeliveryError: If the mail relay rejected the message
        """
        with logfire.span(
            "notification_service.send_notification_email",
            user_id=str(user.id),
            type=notification.type.value,
        ):
            if not self.should_send_email(user, notification.type):
                logfire.info(
                    "Email suppressed by user preferences",
                    user_id=str(user.id),
                    type=notification.type.value,
                    has_email=bool(user.email),
                    verified=user.email_verified,
                )
                return False

            sent = await self.email_sender.send(self.render_email(user, notification))
            if sent:
                logfire.info(
                    "Notification email sent",
                    user_id=str(user.id),
                    notification_id=str(notification.id),
                )
            return sent
