"""Unit tests for NotificationService."""

import pytest

from forum.adapter.email import MockEmailSender
from forum.adapter.error import EmailDeliveryError
from forum.config import EmailSettings
from forum.domain.service import NotificationService
from forum.domain.service.notification_service import build_notification_content
from forum.domain.value import (
    NotificationData,
    NotificationId,
    NotificationType,
    UserId,
)
from forum.persistence.repository.inmemory import InMemoryNotificationRepository
from tests.factories import make_user

SITE = "https://forum.example"


@pytest.fixture
def email_sender() -> MockEmailSender:
    return MockEmailSender(fail_for={"broken@example.com"})


@pytest.fixture
def notification_service(email_sender) -> NotificationService:
    return NotificationService(
        notification_repository=InMemoryNotificationRepository(),
        email_sender=email_sender,
        email_settings=EmailSettings(site_url=SITE),
    )


def verified_user(user_id: str = "user_alice", **kwargs):
    kwargs.setdefault("email", f"{user_id.removeprefix('user_')}@example.com")
    return make_user(user_id, email_verified=True, **kwargs)


class TestNotificationContent:
    """Tests for notification titles and messages."""

    def test_post_comment(self):
        title, message = build_notification_content(
            NotificationType.POST_COMMENT,
            NotificationData(author_name="bob", post_title="Dark matter"),
        )

        assert title == "bob commented on your post"
        assert message == 'on "Dark matter"'

    def test_long_post_title_is_truncated(self):
        _, message = build_notification_content(
            NotificationType.MENTION,
            NotificationData(author_name="bob", post_title="x" * 80),
        )

        assert message == 'in "' + "x" * 50 + '..."'

    def test_untitled_post_is_treated_as_missing(self):
        _, message = build_notification_content(
            NotificationType.POST_LIKE,
            NotificationData(author_name="bob", post_title="Untitled Post"),
        )

        assert message == "Someone liked your post"

    def test_reply_quotes_comment_excerpt(self):
        title, message = build_notification_content(
            NotificationType.COMMENT_REPLY,
            NotificationData(author_name="bob", comment_content="y" * 120),
        )

        assert title == "bob replied to your comment"
        assert message == '"' + "y" * 100 + '..."'

    def test_missing_author_reads_someone(self):
        title, _ = build_notification_content(
            NotificationType.MENTION, NotificationData()
        )

        assert title == "Someone mentioned you"

    def test_system_notification_uses_generic_text(self):
        assert build_notification_content(
            NotificationType.SYSTEM, NotificationData()
        ) == ("New notification", "You have a new notification")


class TestNotificationInbox:
    """Tests for persisting and reading notifications."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, notification_service):
        """Created notifications are listed and counted as unread."""
        user_id = UserId("user_alice")
        first = await notification_service.create_activity_notification(
            user_id, NotificationType.POST_COMMENT, NotificationData(author_name="a")
        )
        second = await notification_service.create_activity_notification(
            user_id, NotificationType.MENTION, NotificationData(author_name="b")
        )

        listed = await notification_service.list_notifications(user_id)

        assert {n.id for n in listed} == {first.id, second.id}
        assert first.is_read is False
        assert await notification_service.count_unread(user_id) == 2

    @pytest.mark.asyncio
    async def test_mark_as_read_only_for_owner(self, notification_service):
        """Only the recipient can mark a notification read."""
        notification = await notification_service.create_activity_notification(
            UserId("user_alice"), NotificationType.SYSTEM, NotificationData()
        )

        assert not await notification_service.mark_as_read(
            notification.id, UserId("user_bob")
        )
        assert await notification_service.mark_as_read(
            notification.id, UserId("user_alice")
        )
        assert await notification_service.count_unread(UserId("user_alice")) == 0

    @pytest.mark.asyncio
    async def test_mark_unknown_notification(self, notification_service):
        assert not await notification_service.mark_as_read(
            NotificationId("notification_x"), UserId("user_alice")
        )

    @pytest.mark.asyncio
    async def test_mark_all_as_read(self, notification_service):
        user_id = UserId("user_alice")
        for _ in range(3):
            await notification_service.create_activity_notification(
                user_id, NotificationType.SYSTEM, NotificationData()
            )

        assert await notification_service.mark_all_as_read(user_id) == 3
        assert await notification_service.mark_all_as_read(user_id) == 0


class TestEmailPreferences:
    """Tests for should_send_email."""

    def test_verified_opted_in_user_gets_email(self, notification_service):
        user = verified_user()

        assert notification_service.should_send_email(
            user, NotificationType.POST_COMMENT
        )

    def test_no_address_no_email(self, notification_service):
        user = make_user(email=None, email_verified=True)

        assert not notification_service.should_send_email(
            user, NotificationType.MENTION
        )

    def test_global_opt_out(self, notification_service):
        user = verified_user(email_notifications=False)

        assert not notification_service.should_send_email(
            user, NotificationType.BEST_ANSWER
        )

    def test_unverified_address_needs_development(self, email_sender):
        user = make_user(email="alice@example.com", email_verified=False)
        strict = NotificationService(
            InMemoryNotificationRepository(), email_sender, EmailSettings()
        )
        lenient = NotificationService(
            InMemoryNotificationRepository(),
            email_sender,
            EmailSettings(),
            allow_unverified_email=True,
        )

        assert not strict.should_send_email(user, NotificationType.MENTION)
        assert lenient.should_send_email(user, NotificationType.MENTION)

    @pytest.mark.parametrize(
        "type, flag",
        [
            (NotificationType.POST_COMMENT, "notify_on_comment"),
            (NotificationType.COMMENT_REPLY, "notify_on_reply"),
            (NotificationType.MENTION, "notify_on_mention"),
            (NotificationType.POST_LIKE, "notify_on_like"),
            (NotificationType.SYSTEM, "notify_on_system"),
        ],
    )
    def test_per_type_preferences(self, notification_service, type, flag):
        assert notification_service.should_send_email(
            verified_user(**{flag: True}), type
        )
        assert not notification_service.should_send_email(
            verified_user(**{flag: False}), type
        )

    def test_best_answer_always_allowed(self, notification_service):
        assert notification_service.should_send_email(
            verified_user(), NotificationType.BEST_ANSWER
        )


class TestNotificationEmail:
    """Tests for rendering and sending notification emails."""

    @pytest.mark.asyncio
    async def test_email_links_to_comment(self, notification_service, email_sender):
        user = verified_user()
        notification = await notification_service.create_activity_notification(
            user.id,
            NotificationType.COMMENT_REPLY,
            NotificationData(
                post_id="post_1", comment_id="comment_9", author_name="bob"
            ),
        )

        sent = await notification_service.send_notification_email(user, notification)

        assert sent is True
        (email,) = email_sender.sent
        assert email.to == "alice@example.com"
        assert email.subject == "bob replied to your comment"
        assert f"{SITE}/posts/post_1#comment-comment_9" in email.text

    @pytest.mark.asyncio
    async def test_email_without_post_links_to_inbox(
        self, notification_service, email_sender
    ):
        user = verified_user()
        notification = await notification_service.create_activity_notification(
            user.id, NotificationType.SYSTEM, NotificationData()
        )

        await notification_service.send_notification_email(user, notification)

        assert f"{SITE}/notifications" in email_sender.sent[0].text

    @pytest.mark.asyncio
    async def test_suppressed_email_is_not_sent(
        self, notification_service, email_sender
    ):
        user = verified_user(notify_on_mention=False)
        notification = await notification_service.create_activity_notification(
            user.id, NotificationType.MENTION, NotificationData()
        )

        assert not await notification_service.send_notification_email(
            user, notification
        )
        assert email_sender.sent == []

    @pytest.mark.asyncio
    async def test_delivery_failure_propagates(self, notification_service):
        user = verified_user("user_broken")
        notification = await notification_service.create_activity_notification(
            user.id, NotificationType.MENTION, NotificationData()
        )

        with pytest.raises(EmailDeliveryError):
            await notification_service.send_notification_email(user, notification)
