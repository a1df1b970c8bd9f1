"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, EmailSettings, Settings
from forum.domain.repository import (
    BadgeRepository,
    CommentRepository,
    NotificationRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from forum.domain.service import (
    BadgeService,
    CommentService,
    CommentSideEffects,
    EmailSender,
    JWTService,
    NotificationService,
    PostService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_badge_service(
        self,
        badge_repository: BadgeRepository,
        user_repository: UserRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
    ) -> BadgeService:
        """Provide badge domain service."""
        return BadgeService(
            badge_repository=badge_repository,
            user_repository=user_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            vote_repository=vote_repository,
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        email_sender: EmailSender,
        email_settings: EmailSettings,
        settings: Settings,
    ) -> NotificationService:
        """Provide notification domain service.

        Unverified addresses receive email only in development.
        """
        return NotificationService(
            notification_repository=notification_repository,
            email_sender=email_sender,
            email_settings=email_settings,
            allow_unverified_email=settings.is_development,
        )

    @provide
    def get_comment_side_effects(
        self,
        badge_service: BadgeService,
        notification_service: NotificationService,
        user_repository: UserRepository,
        comment_repository: CommentRepository,
    ) -> CommentSideEffects:
        """Provide the post-comment side effect dispatcher."""
        return CommentSideEffects(
            badge_service=badge_service,
            notification_service=notification_service,
            user_repository=user_repository,
            comment_repository=comment_repository,
        )
