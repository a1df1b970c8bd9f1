"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from forum.domain.model import (
    Badge,
    Comment,
    Notification,
    Post,
    User,
    UserBadge,
    Vote,
)
from forum.domain.value import (
    BadgeCriteria,
    BadgeId,
    BadgeLevel,
    BadgeType,
    CommentId,
    NotificationData,
    NotificationId,
    NotificationType,
    PostId,
    UserBadgeId,
    UserId,
    VoteId,
    VoteType,
)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        name=row["name"],
        email=row.get("email"),
        image=row.get("image"),
        email_verified=row["email_verified"],
        email_notifications=row["email_notifications"],
        notify_on_comment=row["notify_on_comment"],
        notify_on_reply=row["notify_on_reply"],
        notify_on_mention=row["notify_on_mention"],
        notify_on_like=row["notify_on_like"],
        notify_on_system=row["notify_on_system"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert a posts row joined with the author's name to a Post.

    Args:
        row: Database row as dict, including ``author_name``

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        title=row["title"],
        content=row.get("content"),
        author_id=UserId(row["author_id"]),
        author_name=row["author_name"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    The author name lives on the users table and is not written.
    """
    return post.model_dump(exclude={"author_name"})


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert a comments row joined with author fields to a Comment.

    Args:
        row: Database row as dict, including ``author_name`` and
            ``author_image``

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        parent_id=CommentId(row["parent_id"]) if row.get("parent_id") else None,
        author_id=UserId(row["author_id"]),
        author_name=row["author_name"],
        author_image=row.get("author_image"),
        content=row["content"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Denormalised author fields are not written.
    """
    return comment.model_dump(exclude={"author_name", "author_image"})


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(row["id"]),
        user_id=UserId(row["user_id"]),
        type=VoteType(row["type"]),
        post_id=PostId(row["post_id"]) if row.get("post_id") else None,
        comment_id=CommentId(row["comment_id"]) if row.get("comment_id") else None,
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    vote_dict = vote.model_dump()
    vote_dict["type"] = vote.type.value
    return vote_dict


def row_to_badge(row: Dict[str, Any]) -> Badge:
    """Convert database row to Badge domain model."""
    return Badge(
        id=BadgeId(row["id"]),
        name=row["name"],
        description=row.get("description") or "",
        icon=row.get("icon") or "",
        type=BadgeType(row["type"]),
        level=BadgeLevel(row["level"]),
        criteria=BadgeCriteria.model_validate(row.get("criteria") or {}),
        is_active=row["is_active"],
        created_at=row["created_at"],
    )


def badge_to_dict(badge: Badge) -> Dict[str, Any]:
    """Convert Badge domain model to database dict."""
    badge_dict = badge.model_dump(exclude={"criteria"})
    badge_dict["type"] = badge.type.value
    badge_dict["level"] = badge.level.value
    badge_dict["criteria"] = badge.criteria.model_dump(exclude_none=True)
    return badge_dict


def row_to_user_badge(row: Dict[str, Any], badge: Badge) -> UserBadge:
    """Convert a user_badges row plus its badge to a UserBadge."""
    return UserBadge(
        id=UserBadgeId(row["id"]),
        user_id=UserId(row["user_id"]),
        badge=badge,
        earned_at=row["earned_at"],
        awarded_by=row["awarded_by"],
    )


def user_badge_to_dict(user_badge: UserBadge) -> Dict[str, Any]:
    """Convert UserBadge domain model to database dict."""
    return {
        "id": user_badge.id,
        "user_id": user_badge.user_id,
        "badge_id": user_badge.badge.id,
        "earned_at": user_badge.earned_at,
        "awarded_by": user_badge.awarded_by,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(row["id"]),
        user_id=UserId(row["user_id"]),
        type=NotificationType(row["type"]),
        title=row["title"],
        message=row["message"],
        data=NotificationData.model_validate(row.get("data") or {}),
        is_read=row["is_read"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    notification_dict = notification.model_dump(exclude={"data"})
    notification_dict["type"] = notification.type.value
    notification_dict["data"] = notification.data.model_dump(exclude_none=True)
    return notification_dict
