"""Badge routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from forum.application.usecase.badge import (
    GetUserBadgesRequest,
    GetUserBadgesResponse,
    GetUserBadgesUseCase,
)

router = APIRouter(prefix="/users", tags=["badges"], route_class=DishkaRoute)


@router.get("/{user_id}/badges", response_model=GetUserBadgesResponse)
async def get_user_badges(
    user_id: str,
    get_user_badges_use_case: FromDishka[GetUserBadgesUseCase],
) -> GetUserBadgesResponse:
    """Get the badges a user has earned, most recent first.

    Args:
        user_id: User ID
        get_user_badges_use_case: Get user badges use case from DI

    Returns:
        Earned badges
    """
    request = GetUserBadgesRequest(user_id=user_id)
    return await get_user_badges_use_case.execute(request)
