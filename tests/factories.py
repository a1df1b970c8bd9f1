"""Factories for domain entities used across tests."""

from datetime import datetime, timedelta

from forum.domain.model import Badge, Comment, Post, User, Vote
from forum.domain.value import (
    BadgeCriteria,
    BadgeId,
    BadgeLevel,
    BadgeType,
    CommentId,
    PostId,
    UserId,
    VoteId,
    VoteType,
)

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after a fixed base time."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_user(user_id: str = "user_alice", name: str | None = None, **kwargs) -> User:
    """Build a user; the handle defaults to the ID without its prefix."""
    return User(
        id=UserId(user_id),
        name=name or user_id.removeprefix("user_"),
        **kwargs,
    )


def make_post(
    post_id: str = "post_1",
    author_id: str = "user_alice",
    title: str = "Test Post",
    **kwargs,
) -> Post:
    """Build a post."""
    kwargs.setdefault("created_at", BASE_TIME)
    kwargs.setdefault("updated_at", kwargs["created_at"])
    return Post(
        id=PostId(post_id),
        title=title,
        content=kwargs.pop("content", "Post body"),
        author_id=UserId(author_id),
        author_name=kwargs.pop("author_name", author_id.removeprefix("user_")),
        **kwargs,
    )


def make_comment(
    comment_id: str,
    minutes: int = 0,
    parent_id: str | None = None,
    post_id: str = "post_1",
    author_id: str = "user_alice",
    content: str = "A comment",
) -> Comment:
    """Build a comment created ``minutes`` after the base time."""
    return Comment(
        id=CommentId(comment_id),
        post_id=PostId(post_id),
        parent_id=CommentId(parent_id) if parent_id else None,
        author_id=UserId(author_id),
        author_name=author_id.removeprefix("user_"),
        author_image=None,
        content=content,
        created_at=at(minutes),
        updated_at=at(minutes),
    )


def make_vote(
    vote_id: str,
    user_id: str,
    comment_id: str,
    vote_type: VoteType = VoteType.UP,
    minutes: int = 0,
) -> Vote:
    """Build a vote on a comment."""
    return Vote(
        id=VoteId(vote_id),
        user_id=UserId(user_id),
        type=vote_type,
        comment_id=CommentId(comment_id),
        created_at=at(minutes),
    )


def make_badge(
    badge_id: str,
    name: str | None = None,
    type: BadgeType = BadgeType.ACTIVITY,
    level: BadgeLevel = BadgeLevel.BRONZE,
    is_active: bool = True,
    **criteria,
) -> Badge:
    """Build a badge definition; extra keywords become its criteria."""
    return Badge(
        id=BadgeId(badge_id),
        name=name or badge_id.replace("-", " ").title(),
        type=type,
        level=level,
        criteria=BadgeCriteria(**criteria),
        is_active=is_active,
    )
