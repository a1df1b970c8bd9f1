"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import Field, field_validator

from forum.domain.value.common import ValueObject


class VoteType(str, Enum):
    """Type of vote, as stored."""

    UP = "UP"
    DOWN = "DOWN"

    @property
    def display(self) -> str:
        """Lower-case form exposed to clients ("up" / "down")."""
        return self.value.lower()

    @classmethod
    def parse(cls, value: str) -> "VoteType":
        """Parse a client-supplied vote type, case-insensitively."""
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(f"Invalid vote type: {value}")


class VoteOutcome(str, Enum):
    """Result of casting a vote with toggle semantics."""

    RECORDED = "recorded"
    UPDATED = "updated"
    REMOVED = "removed"


class BadgeType(str, Enum):
    """Badge category."""

    ACTIVITY = "ACTIVITY"
    ENGAGEMENT = "ENGAGEMENT"
    APPRECIATION = "APPRECIATION"
    TENURE = "TENURE"
    ACHIEVEMENT = "ACHIEVEMENT"
    QUALITY = "QUALITY"
    SPECIAL = "SPECIAL"


class BadgeLevel(str, Enum):
    """Badge tier."""

    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"


class NotificationType(str, Enum):
    """Kinds of in-app notification."""

    POST_LIKE = "POST_LIKE"
    POST_COMMENT = "POST_COMMENT"
    COMMENT_REPLY = "COMMENT_REPLY"
    MENTION = "MENTION"
    BEST_ANSWER = "BEST_ANSWER"
    SYSTEM = "SYSTEM"


class BadgeCriteria(ValueObject):
    """Thresholds that make a user eligible for a badge.

    A badge is earned when any one of the configured thresholds is reached.
    Badges flagged ``manually_awarded`` are never granted automatically.
    """

    posts_count: int | None = Field(default=None, ge=1)
    comments_count: int | None = Field(default=None, ge=1)
    upvotes_received: int | None = Field(default=None, ge=1)
    days_as_active_member: int | None = Field(default=None, ge=1)
    manually_awarded: bool = False


class UserStats(ValueObject):
    """Activity counters used for badge eligibility."""

    posts_count: int = 0
    comments_count: int = 0
    upvotes_received: int = 0
    days_as_active_member: int = 0


class NotificationData(ValueObject):
    """Context attached to a notification (links and excerpts)."""

    post_id: str | None = None
    comment_id: str | None = None
    author_id: str | None = None
    author_name: str | None = None
    post_title: str | None = None
    comment_content: str | None = None
    custom_url: str | None = None
    avatar_url: str | None = None


class OutgoingEmail(ValueObject):
    """A rendered email ready for delivery."""

    to: str
    subject: str
    text: str
    html: str | None = None

    @field_validator("to")
    @classmethod
    def validate_recipient(cls, v: str) -> str:
        """Validate the recipient looks like an address."""
        if "@" not in v:
            raise ValueError("Recipient must be an email address")
        return v
