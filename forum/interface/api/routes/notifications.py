"""Notification routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status

from forum.application.usecase.notification import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkNotificationsReadRequest,
    MarkNotificationsReadResponse,
    MarkNotificationsReadUseCase,
)
from forum.domain.error import NotFoundError
from forum.domain.service import JWTService

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """List the current user's notifications, newest first.

    Args:
        list_notifications_use_case: List notifications use case from DI
        jwt_service: JWT service for token verification (injected)
        limit: Page size
        offset: Number of notifications to skip
        auth_token: JWT token from cookie

    Returns:
        A page of notifications and the unread count
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    request = ListNotificationsRequest(user_id=user_id, limit=limit, offset=offset)
    return await list_notifications_use_case.execute(request)


@router.post("/read-all", response_model=MarkNotificationsReadResponse)
async def mark_all_notifications_read(
    mark_notifications_read_use_case: FromDishka[MarkNotificationsReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkNotificationsReadResponse:
    """Mark every notification of the current user read."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    request = MarkNotificationsReadRequest(user_id=user_id)
    return await mark_notifications_read_use_case.execute(request)


@router.post("/{notification_id}/read", response_model=MarkNotificationsReadResponse)
async def mark_notification_read(
    notification_id: str,
    mark_notifications_read_use_case: FromDishka[MarkNotificationsReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkNotificationsReadResponse:
    """Mark one notification read.

    Raises:
        HTTPException: If not authenticated or the notification doesn't
            belong to the current user
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    try:
        request = MarkNotificationsReadRequest(
            user_id=user_id, notification_id=notification_id
        )
        return await mark_notifications_read_use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
