"""Badge and UserBadge entities.

Badges are a catalogue of achievements; a UserBadge records that a user
earned one.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import (
    BadgeCriteria,
    BadgeId,
    BadgeLevel,
    BadgeType,
    UserBadgeId,
    UserId,
)


class Badge(DomainModel):
    """Badge definition."""

    id: BadgeId
    name: str = Field(min_length=1, max_length=100)
    description: str = ""
    icon: str = ""
    type: BadgeType
    level: BadgeLevel = BadgeLevel.BRONZE
    criteria: BadgeCriteria = Field(default_factory=BadgeCriteria)
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)


class UserBadge(DomainModel):
    """A badge held by a user."""

    id: UserBadgeId
    user_id: UserId
    badge: Badge
    earned_at: datetime = Field(default_factory=datetime.now)
    awarded_by: str = "system"
