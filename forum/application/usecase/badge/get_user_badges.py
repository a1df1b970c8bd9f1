"""Get user badges use case."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.service import BadgeService
from forum.domain.value import UserId


class UserBadgeItem(BaseModel):
    """Badge held by a user."""

    id: str
    name: str
    description: str
    icon: str
    type: str
    level: str
    earned_at: datetime
    awarded_by: str


class GetUserBadgesRequest(BaseModel):
    """Get user badges request."""

    user_id: str


class GetUserBadgesResponse(BaseModel):
    """Get user badges response."""

    user_id: str
    badges: list[UserBadgeItem]


class GetUserBadgesUseCase:
    """Use case for listing the badges a user holds."""

    def __init__(self, badge_service: BadgeService) -> None:
        """Initialize get user badges use case.

        Args:
            badge_service: Badge domain service
        """
        self.badge_service = badge_service

    async def execute(self, request: GetUserBadgesRequest) -> GetUserBadgesResponse:
        """Execute get user badges flow (newest first)."""
        held = await self.badge_service.get_user_badges(UserId(request.user_id))
        return GetUserBadgesResponse(
            user_id=request.user_id,
            badges=[
                UserBadgeItem(
                    id=str(user_badge.badge.id),
                    name=user_badge.badge.name,
                    description=user_badge.badge.description,
                    icon=user_badge.badge.icon,
                    type=user_badge.badge.type.value,
                    level=user_badge.badge.level.value,
                    earned_at=user_badge.earned_at,
                    awarded_by=user_badge.awarded_by,
                )
                for user_badge in held
            ],
        )
