"""Unit tests for CommentSideEffects."""

import pytest
import pytest_asyncio

from forum.adapter.email import MockEmailSender
from forum.config import EmailSettings
from forum.domain.model import Notification
from forum.domain.service import BadgeService, CommentSideEffects, NotificationService
from forum.domain.value import NotificationType, UserId
from forum.persistence.repository.inmemory import (
    InMemoryBadgeRepository,
    InMemoryCommentRepository,
    InMemoryNotificationRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from tests.factories import make_badge, make_comment, make_post, make_user


class FailingNotificationRepository(InMemoryNotificationRepository):
    """Rejects notifications for selected recipients."""

    def __init__(self, fail_for: set[str]) -> None:
        super().__init__()
        self.fail_for = fail_for

    async def save(self, notification: Notification) -> Notification:
        if notification.user_id in self.fail_for:
            raise RuntimeError("insert failed")
        return await super().save(notification)


class Forum:
    """Wires the side-effect dispatcher over in-memory repositories."""

    def __init__(
        self,
        notification_repository: InMemoryNotificationRepository | None = None,
        email_sender: MockEmailSender | None = None,
    ) -> None:
        self.users = InMemoryUserRepository()
        self.posts = InMemoryPostRepository()
        self.comments = InMemoryCommentRepository()
        self.votes = InMemoryVoteRepository()
        self.badges = InMemoryBadgeRepository()
        self.notifications = notification_repository or InMemoryNotificationRepository()
        self.email_sender = email_sender or MockEmailSender()

        self.side_effects = CommentSideEffects(
            badge_service=BadgeService(
                self.badges, self.users, self.posts, self.comments, self.votes
            ),
            notification_service=NotificationService(
                self.notifications, self.email_sender, EmailSettings()
            ),
            user_repository=self.users,
            comment_repository=self.comments,
        )

    async def add_users(self, *handles: str) -> None:
        for handle in handles:
            await self.users.save(
                make_user(
                    f"user_{handle}",
                    email=f"{handle}@example.com",
                    email_verified=True,
                )
            )

    async def notified(self, handle: str) -> list[NotificationType]:
        found = await self.notifications.find_by_user(UserId(f"user_{handle}"))
        return [n.type for n in found]


@pytest_asyncio.fixture
async def forum() -> Forum:
    forum = Forum()
    await forum.add_users("alice", "bob", "carol", "dave")
    await forum.posts.save(make_post("post_1", author_id="user_alice"))
    return forum


class TestRecipients:
    """Tests for who gets notified about a new comment."""

    @pytest.mark.asyncio
    async def test_post_author_is_notified(self, forum):
        """A top-level comment notifies the post author."""
        # Arrange
        post = await forum.posts.find_by_id("post_1")
        bob = await forum.users.find_by_id("user_bob")
        comment = await forum.comments.save(make_comment("c_1", author_id="user_bob"))

        # Act
        report = await forum.side_effects.dispatch(comment, post, bob)

        # Assert
        assert await forum.notified("alice") == [NotificationType.POST_COMMENT]
        assert report.attempted == report.delivered == 1
        assert report.emails_sent == 1
        assert forum.email_sender.sent[0].to == "alice@example.com"

    @pytest.mark.asyncio
    async def test_own_post_is_not_notified(self, forum):
        """Commenting on your own post notifies nobody."""
        post = await forum.posts.find_by_id("post_1")
        alice = await forum.users.find_by_id("user_alice")
        comment = await forum.comments.save(make_comment("c_1", author_id="user_alice"))

        report = await forum.side_effects.dispatch(comment, post, alice)

        assert report.attempted == 0
        assert await forum.notified("alice") == []

    @pytest.mark.asyncio
    async def test_reply_notifies_parent_author(self, forum):
        """A reply notifies both the post author and the parent's author."""
        post = await forum.posts.find_by_id("post_1")
        carol = await forum.users.find_by_id("user_carol")
        await forum.comments.save(make_comment("c_1", author_id="user_bob"))
        reply = await forum.comments.save(
            make_comment("c_2", minutes=1, parent_id="c_1", author_id="user_carol")
        )

        report = await forum.side_effects.dispatch(reply, post, carol)

        assert await forum.notified("alice") == [NotificationType.POST_COMMENT]
        assert await forum.notified("bob") == [NotificationType.COMMENT_REPLY]
        assert report.delivered == 2

    @pytest.mark.asyncio
    async def test_mentions_are_resolved_case_insensitively(self, forum):
        """Mentioned users are notified once; self-mentions are ignored."""
        post = await forum.posts.find_by_id("post_1")
        bob = await forum.users.find_by_id("user_bob")
        comment = await forum.comments.save(
            make_comment(
                "c_1",
                author_id="user_bob",
                content="@Carol and @dave, see @carol's note. cc @bob @nobody",
            )
        )

        report = await forum.side_effects.dispatch(comment, post, bob)

        assert await forum.notified("carol") == [NotificationType.MENTION]
        assert await forum.notified("dave") == [NotificationType.MENTION]
        assert await forum.notified("bob") == []
        assert report.attempted == 3

    @pytest.mark.asyncio
    async def test_mentions_follow_text_order(self, forum):
        """Mentioned users are notified in the order they appear."""
        post = await forum.posts.find_by_id("post_1")
        bob = await forum.users.find_by_id("user_bob")
        comment = await forum.comments.save(
            make_comment("c_1", author_id="user_bob", content="@dave, then @Carol")
        )

        await forum.side_effects.dispatch(comment, post, bob)

        assert [e.to for e in forum.email_sender.sent] == [
            "alice@example.com",
            "dave@example.com",
            "carol@example.com",
        ]

    @pytest.mark.asyncio
    async def test_missing_post_author_is_skipped(self, forum):
        """A recipient without a user record is skipped."""
        post = make_post("post_2", author_id="user_ghost")
        bob = await forum.users.find_by_id("user_bob")
        comment = await forum.comments.save(
            make_comment("c_1", post_id="post_2", author_id="user_bob")
        )

        report = await forum.side_effects.dispatch(comment, post, bob)

        assert report.attempted == 0


class TestFailureIsolation:
    """Tests that one failing recipient doesn't affect the others."""

    @pytest.mark.asyncio
    async def test_email_failure_is_counted(self):
        """A rejected email is counted and the other emails still go out."""
        # Arrange
        forum = Forum(email_sender=MockEmailSender(fail_for={"carol@example.com"}))
        await forum.add_users("alice", "bob", "carol")
        post = await forum.posts.save(make_post("post_1", author_id="user_alice"))
        bob = await forum.users.find_by_id("user_bob")
        comment = await forum.comments.save(
            make_comment("c_1", author_id="user_bob", content="thanks @carol")
        )

        # Act
        report = await forum.side_effects.dispatch(comment, post, bob)

        # Assert
        assert report.delivered == 2
        assert report.emails_sent == 1
        assert report.emails_failed == 1
        assert await forum.notified("carol") == [NotificationType.MENTION]

    @pytest.mark.asyncio
    async def test_notification_failure_is_counted(self):
        """A failed insert is counted and the other recipients are notified."""
        forum = Forum(
            notification_repository=FailingNotificationRepository({"user_alice"})
        )
        await forum.add_users("alice", "bob", "carol")
        post = await forum.posts.save(make_post("post_1", author_id="user_alice"))
        bob = await forum.users.find_by_id("user_bob")
        comment = await forum.comments.save(
            make_comment("c_1", author_id="user_bob", content="@carol")
        )

        report = await forum.side_effects.dispatch(comment, post, bob)

        assert report.attempted == 2
        assert report.delivered == 1
        assert report.failed == 1
        assert await forum.notified("carol") == [NotificationType.MENTION]
        assert [e.to for e in forum.email_sender.sent] == ["carol@example.com"]

    @pytest.mark.asyncio
    async def test_badge_failure_does_not_block_notifications(self):
        """Notifications go out even when the badge check fails."""
        forum = Forum()
        await forum.add_users("alice")
        post = await forum.posts.save(make_post("post_1", author_id="user_alice"))
        # The commenter has no user record, so the badge check raises
        ghost = make_user("user_ghost")
        comment = await forum.comments.save(make_comment("c_1", author_id="user_ghost"))

        report = await forum.side_effects.dispatch(comment, post, ghost)

        assert report.delivered == 1


class TestBadgeAwarding:
    """Tests for badge recomputation after commenting."""

    @pytest.mark.asyncio
    async def test_commenter_earns_badge(self, forum):
        """The commenter is checked for newly earned badges."""
        await forum.badges.upsert(make_badge("first-comment", comments_count=1))
        post = await forum.posts.find_by_id("post_1")
        bob = await forum.users.find_by_id("user_bob")
        comment = await forum.comments.save(make_comment("c_1", author_id="user_bob"))

        await forum.side_effects.dispatch(comment, post, bob)

        held = await forum.badges.find_by_user(UserId("user_bob"))
        assert [ub.badge.id for ub in held] == ["first-comment"]
