"""Badge use cases."""

from .get_user_badges import (
    GetUserBadgesRequest,
    GetUserBadgesResponse,
    GetUserBadgesUseCase,
    UserBadgeItem,
)

__all__ = [
    "GetUserBadgesRequest",
    "GetUserBadgesResponse",
    "GetUserBadgesUseCase",
    "UserBadgeItem",
]
