"""Best-effort follow-up work after a comment is created.

Awards badges to the commenter and notifies the post author, the author of
the parent comment and every mentioned user. Nothing here can fail the
comment itself: each step and each recipient is isolated, and failures are
logged and counted.
"""

import asyncio
from dataclasses import dataclass

import logfire

from forum.domain.model import Comment, Notification, Post, User
from forum.domain.repository import CommentRepository, UserRepository
from forum.domain.value import NotificationData, NotificationType, UserId

from .badge_service import BadgeService
from .mention import extract_mentions
from .notification_service import NotificationService


@dataclass
class DispatchReport:
    """Summary of the notifications sent for a comment."""

    attempted: int = 0
    delivered: int = 0
    failed: int = 0
    emails_sent: int = 0
    emails_failed: int = 0


class CommentSideEffects:
    """Dispatches badge and notification side effects for new comments."""

    def __init__(
        self,
        badge_service: BadgeService,
        notification_service: NotificationService,
        user_repository: UserRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            badge_service: Badge domain service
            notification_service: Notification domain service
            user_repository: User repository (recipients, mentions)
            comment_repository: Comment repository (parent comment lookup)
        """
        self.badge_service = badge_service
        self.notification_service = notification_service
        self.user_repository = user_repository
        self.comment_repository = comment_repository

    async def dispatch(
        self, comment: Comment, post: Post, commenter: User
    ) -> DispatchReport:
        """Run the side effects of a freshly created comment.

        Args:
            comment: The new comment
            post: Post the comment belongs to
            commenter: Comment author

        Returns:
            Notification counts
        """
        with logfire.span(
            "comment_side_effects.dispatch",
            comment_id=str(comment.id),
            post_id=str(post.id),
        ):
            await self._award_badges(commenter.id)

            recipients = await self._collect_recipients(comment, post, commenter)
            report = DispatchReport(attempted=len(recipients))

            data = NotificationData(
                post_id=str(post.id),
                comment_id=str(comment.id),
                author_id=str(commenter.id),
                author_name=commenter.name,
                post_title=post.title,
                comment_content=comment.content,
                avatar_url=commenter.image,
            )

            # Notifications share the request's session, so they are written
            # one at a time; emails go out concurrently afterwards.
            persisted: list[tuple[User, Notification]] = []
            for recipient, type in recipients:
                try:
                    notification = (
                        await self.notification_service.create_activity_notification(
                            recipient.id, type, data
                        )
                    )
                except Exception as e:
                    report.failed += 1
                    logfire.error(
                        "Failed to create notification",
                        user_id=str(recipient.id),
                        type=type.value,
                        error=str(e),
                    )
                    continue
                report.delivered += 1
                persisted.append((recipient, notification))

            results = await asyncio.gather(
                *(
                    self.notification_service.send_notification_email(user, notification)
                    for user, notification in persisted
                ),
                return_exceptions=True,
            )
            for (user, notification), result in zip(persisted, results):
                if isinstance(result, BaseException):
                    report.emails_failed += 1
                    logfire.error(
                        "Failed to send notification email",
                        user_id=str(user.id),
                        notification_id=str(notification.id),
                        error=str(result),
                    )
                elif result:
                    report.emails_sent += 1

            logfire.info(
                "Comment side effects dispatched",
                comment_id=str(comment.id),
                attempted=report.attempted,
                delivered=report.delivered,
                failed=report.failed,
                emails_sent=report.emails_sent,
                emails_failed=report.emails_failed,
            )
            return report

    async def _award_badges(self, user_id: UserId) -> None:
        try:
            await self.badge_service.check_and_award_badges(user_id)
        except Exception as e:
            logfire.error(
                "Badge check failed after comment", user_id=str(user_id), error=str(e)
            )

    async def _collect_recipients(
        self, comment: Comment, post: Post, commenter: User
    ) -> list[tuple[User, NotificationType]]:
        """Resolve who gets notified, in post author, parent author, mention order."""
        targets: list[tuple[UserId, NotificationType]] = []

        if post.author_id != commenter.id:
            targets.append((post.author_id, NotificationType.POST_COMMENT))

        if comment.parent_id:
            try:
                parent = await self.comment_repository.find_by_id(comment.parent_id)
            except Exception as e:
                parent = None
                logfire.error(
                    "Parent comment lookup failed",
                    parent_id=str(comment.parent_id),
                    error=str(e),
                )
            if parent and parent.author_id != commenter.id:
                targets.append((parent.author_id, NotificationType.COMMENT_REPLY))

        handles = extract_mentions(comment.content)
        if handles:
            try:
                mentioned = await self.user_repository.find_by_names(handles)
            except Exception as e:
                mentioned = []
                logfire.error(
                    "Mention lookup failed", handles=handles, error=str(e)
                )
            position: dict[str, int] = {}
            for index, handle in enumerate(handles):
                position.setdefault(handle.lower(), index)
            seen: set[UserId] = set()
            for user in sorted(
                mentioned,
                key=lambda u: (position.get(u.name.lower(), len(handles)), u.id),
            ):
                if user.id == commenter.id or user.id in seen:
                    continue
                seen.add(user.id)
                targets.append((user.id, NotificationType.MENTION))

        recipients: list[tuple[User, NotificationType]] = []
        for user_id, type in targets:
            try:
                user = await self.user_repository.find_by_id(user_id)
            except Exception as e:
                user = None
                logfire.error(
                    "Recipient lookup failed", user_id=str(user_id), error=str(e)
                )
            if user is None:
                logfire.warn(
                    "Notification recipient not found",
                    user_id=str(user_id),
                    type=type.value,
                )
                continue
            recipients.append((user, type))
        return recipients
