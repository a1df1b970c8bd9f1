"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.badge import GetUserBadgesUseCase
from forum.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentTreeUseCase,
)
from forum.application.usecase.notification import (
    ListNotificationsUseCase,
    MarkNotificationsReadUseCase,
)
from forum.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
)
from forum.application.usecase.vote import (
    GetCommentVotesUseCase,
    VoteOnCommentUseCase,
    VoteOnPostUseCase,
)
from forum.config import CommentSettings
from forum.domain.repository import UserRepository, VoteRepository
from forum.domain.service import (
    BadgeService,
    CommentService,
    CommentSideEffects,
    JWTService,
    NotificationService,
    PostService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_repository: UserRepository
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service, user_repository=user_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, vote_repository: VoteRepository
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service, vote_repository=vote_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_repository: UserRepository,
        side_effects: CommentSideEffects,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_repository=user_repository,
            side_effects=side_effects,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_tree_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        badge_service: BadgeService,
        jwt_service: JWTService,
        comment_settings: CommentSettings,
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
            badge_service=badge_service,
            jwt_service=jwt_service,
            comment_settings=comment_settings,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_vote_on_comment_use_case(
        self, vote_service: VoteService
    ) -> VoteOnCommentUseCase:
        """Provide vote on comment use case."""
        return VoteOnCommentUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_votes_use_case(
        self, vote_service: VoteService, jwt_service: JWTService
    ) -> GetCommentVotesUseCase:
        """Provide get comment votes use case."""
        return GetCommentVotesUseCase(
            vote_service=vote_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_vote_on_post_use_case(self, vote_service: VoteService) -> VoteOnPostUseCase:
        """Provide vote on post use case."""
        return VoteOnPostUseCase(vote_service=vote_service)

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_notifications_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationsReadUseCase:
        """Provide mark notifications read use case."""
        return MarkNotificationsReadUseCase(notification_service=notification_service)

    # Badge use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_badges_use_case(
        self, badge_service: BadgeService
    ) -> GetUserBadgesUseCase:
        """Provide get user badges use case."""
        return GetUserBadgesUseCase(badge_service=badge_service)
