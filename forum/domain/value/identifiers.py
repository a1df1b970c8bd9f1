"""Strongly typed identifiers for forum domain entities.

Identifiers are opaque strings. Using NewType keeps the different entity IDs
apart in signatures while staying plain strings at runtime.
"""

from typing import NewType
from uuid import uuid4

# Core domain entity identifiers
UserId = NewType("UserId", str)
PostId = NewType("PostId", str)
CommentId = NewType("CommentId", str)
VoteId = NewType("VoteId", str)
BadgeId = NewType("BadgeId", str)
UserBadgeId = NewType("UserBadgeId", str)
NotificationId = NewType("NotificationId", str)


def generate_id(prefix: str) -> str:
    """Generate a new opaque identifier.

    Args:
        prefix: Short entity prefix (e.g. "comment")

    Returns:
        Identifier of the form ``<prefix>_<32 hex chars>``
    """
    return f"{prefix}_{uuid4().hex}"
