"""Badge domain service.

Computes user activity statistics, awards badges whose criteria are met and
serves the recently earned badges shown next to an author's name.
"""

from datetime import datetime

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import Badge, UserBadge
from forum.domain.repository import (
    BadgeRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from forum.domain.value import (
    BadgeCriteria,
    BadgeId,
    BadgeLevel,
    BadgeType,
    UserBadgeId,
    UserId,
    UserStats,
    VoteType,
    generate_id,
)

from .base import Service


def _badge(
    slug: str,
    name: str,
    description: str,
    icon: str,
    type: BadgeType,
    level: BadgeLevel,
    **criteria,
) -> Badge:
    return Badge(
        id=BadgeId(slug),
        name=name,
        description=description,
        icon=icon,
        type=type,
        level=level,
        criteria=BadgeCriteria(**criteria),
    )


# Built-in badge catalogue, seeded by scripts/seed_badges.py
BADGE_DEFINITIONS: list[Badge] = [
    # Activity
    _badge("first-post", "First Steps", "Posted your first contribution to the community",
           "star", BadgeType.ACTIVITY, BadgeLevel.BRONZE, posts_count=1),
    _badge("active-contributor", "Active Contributor", "Posted 10 contributions to the community",
           "bolt", BadgeType.ACTIVITY, BadgeLevel.SILVER, posts_count=10),
    _badge("prolific-writer", "Prolific Writer", "Posted 50 contributions to the community",
           "fire", BadgeType.ACTIVITY, BadgeLevel.GOLD, posts_count=50),
    _badge("content-creator", "Content Creator", "Posted 100 contributions to the community",
           "gem", BadgeType.ACTIVITY, BadgeLevel.PLATINUM, posts_count=100),
    # Engagement
    _badge("conversationalist", "Conversationalist", "Made 25 thoughtful comments",
           "chat", BadgeType.ENGAGEMENT, BadgeLevel.BRONZE, comments_count=25),
    _badge("discussion-leader", "Discussion Leader", "Made 100 thoughtful comments",
           "target", BadgeType.ENGAGEMENT, BadgeLevel.SILVER, comments_count=100),
    _badge("community-voice", "Community Voice", "Made 500 thoughtful comments",
           "megaphone", BadgeType.ENGAGEMENT, BadgeLevel.GOLD, comments_count=500),
    # Appreciation
    _badge("helpful", "Helpful", "Received 10 upvotes on your contributions",
           "star", BadgeType.APPRECIATION, BadgeLevel.BRONZE, upvotes_received=10),
    _badge("well-liked", "Well Liked", "Received 50 upvotes on your contributions",
           "trophy", BadgeType.APPRECIATION, BadgeLevel.SILVER, upvotes_received=50),
    _badge("community-favorite", "Community Favorite", "Received 200 upvotes on your contributions",
           "crown", BadgeType.APPRECIATION, BadgeLevel.GOLD, upvotes_received=200),
    _badge("expert", "Expert", "Received 500 upvotes on your contributions",
           "sparkle", BadgeType.APPRECIATION, BadgeLevel.PLATINUM, upvotes_received=500),
    # Tenure
    _badge("newcomer", "Newcomer", "Welcome to the community!",
           "target", BadgeType.TENURE, BadgeLevel.BRONZE, days_as_active_member=1),
    _badge("regular", "Regular", "Active member for 30 days",
           "shield", BadgeType.TENURE, BadgeLevel.SILVER, days_as_active_member=30),
    _badge("veteran", "Veteran", "Active member for 365 days",
           "swords", BadgeType.TENURE, BadgeLevel.GOLD, days_as_active_member=365),
    _badge("legend", "Legend", "Active member for 1000 days",
           "columns", BadgeType.TENURE, BadgeLevel.PLATINUM, days_as_active_member=1000),
    # Achievement
    _badge("problem-solver", "Problem Solver", "Provided 5 helpful answers",
           "puzzle", BadgeType.ACHIEVEMENT, BadgeLevel.BRONZE,
           comments_count=5, upvotes_received=5),
    _badge("mentor", "Mentor", "Provided 25 helpful answers",
           "graduation-cap", BadgeType.ACHIEVEMENT, BadgeLevel.SILVER,
           comments_count=25, upvotes_received=25),
    _badge("guru", "Guru", "Provided 100 helpful answers",
           "brain", BadgeType.ACHIEVEMENT, BadgeLevel.GOLD,
           comments_count=100, upvotes_received=100),
    # Quality
    _badge("trending", "Trending", "Created a post with significant engagement",
           "chart", BadgeType.QUALITY, BadgeLevel.SILVER,
           posts_count=5, upvotes_received=20),
    _badge("viral", "Viral", "Created highly engaging content",
           "rocket", BadgeType.QUALITY, BadgeLevel.GOLD,
           posts_count=10, upvotes_received=50),
    _badge("verified-expert", "Verified Expert", "Recognized expert in the community",
           "check", BadgeType.ACHIEVEMENT, BadgeLevel.PLATINUM,
           posts_count=50, upvotes_received=200, comments_count=100),
]


def is_eligible(criteria: BadgeCriteria, stats: UserStats) -> bool:
    """Check whether activity statistics satisfy a badge's criteria.

    Any single configured threshold is enough. Manually awarded badges are
    never eligible.

    Args:
        criteria: Badge criteria
        stats: User activity statistics

    Returns:
        True if the badge should be awarded
    """
    if criteria.manually_awarded:
        return False
    thresholds = [
        (criteria.posts_count, stats.posts_count),
        (criteria.comments_count, stats.comments_count),
        (criteria.upvotes_received, stats.upvotes_received),
        (criteria.days_as_active_member, stats.days_as_active_member),
    ]
    return any(
        required is not None and actual >= required for required, actual in thresholds
    )


class BadgeService(Service):
    """Domain service for badge operations."""

    def __init__(
        self,
        badge_repository: BadgeRepository,
        user_repository: UserRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
    ) -> None:
        """Initialize badge service.

        Args:
            badge_repository: Badge repository
            user_repository: User repository
            post_repository: Post repository
            comment_repository: Comment repository
            vote_repository: Vote repository
        """
        self.badge_repository = badge_repository
        self.user_repository = user_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository

    async def get_user_badges(self, user_id: UserId) -> list[UserBadge]:
        """Get every badge a user holds, most recently earned first."""
        with logfire.span("badge_service.get_user_badges", user_id=str(user_id)):
            return await self.badge_repository.find_by_user(user_id)

    async def get_recent_badges(self, user_id: UserId, limit: int = 3) -> list[Badge]:
        """Get a user's most recently earned badges.

        Args:
            user_id: User ID
            limit: Maximum number of badges

        Returns:
            Badges, newest first
        """
        with logfire.span("badge_service.get_recent_badges", user_id=str(user_id)):
            return await self.badge_repository.find_recent_by_user(user_id, limit)

    async def get_badges_for_authors(
        self, author_ids: list[UserId], limit: int = 3
    ) -> dict[UserId, list[Badge]]:
        """Get recent badges for a set of authors in one lookup.

        Args:
            author_ids: Author IDs (duplicates are ignored)
            limit: Maximum number of badges per author

        Returns:
            Mapping author ID -> badges, newest first
        """
        distinct = list(dict.fromkeys(author_ids))
        if not distinct:
            return {}

        with logfire.span(
            "badge_service.get_badges_for_authors", author_count=len(distinct)
        ):
            badges = await self.badge_repository.find_recent_by_users(distinct, limit)
            logfire.info(
                "Author badges retrieved",
                author_count=len(distinct),
                with_badges=sum(1 for items in badges.values() if items),
            )
            return badges

    async def get_user_stats(self, user_id: UserId) -> UserStats:
        """Compute the activity statistics used for badge eligibility.

        Args:
            user_id: User ID

        Returns:
            Post and comment counts, upvotes received on both, and days since
            the account was created

        Raises:
            NotFoundError: If the user doesn't exist
        """
        with logfire.span("badge_service.get_user_stats", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                raise NotFoundError("User", str(user_id))

            post_ids = await self.post_repository.find_ids_by_author(user_id)
            comment_ids = await self.comment_repository.find_ids_by_author(user_id)
            upvotes = await self.vote_repository.count_by_type(
                VoteType.UP, post_ids=post_ids, comment_ids=comment_ids
            )

            return UserStats(
                posts_count=len(post_ids),
                comments_count=len(comment_ids),
                upvotes_received=upvotes,
                days_as_active_member=(
                    datetime.now(user.created_at.tzinfo) - user.created_at
                ).days,
            )

    async def check_and_award_badges(self, user_id: UserId) -> list[UserBadge]:
        """Award every active badge the user has become eligible for.

        The check runs in a badge savepoint: if it fails, nothing is awarded
        and the caller's transaction is left usable.

        Args:
            user_id: User ID

        Returns:
            Newly awarded badges

        Raises:
            NotFoundError: If the user doesn't exist
        """
        with logfire.span("badge_service.check_and_award_badges", user_id=str(user_id)):
            async with self.badge_repository.savepoint():
                awarded = await self._award_eligible(user_id)
            return awarded

    async def _award_eligible(self, user_id: UserId) -> list[UserBadge]:
        stats = await self.get_user_stats(user_id)
        held = await self.badge_repository.find_user_badge_ids(user_id)
        available = await self.badge_repository.find_active()

        awarded: list[UserBadge] = []
        for badge in available:
            if badge.id in held or not is_eligible(badge.criteria, stats):
                continue
            user_badge = await self.badge_repository.award(
                UserBadge(
                    id=UserBadgeId(generate_id("userbadge")),
                    user_id=user_id,
                    badge=badge,
                    earned_at=datetime.now(),
                    awarded_by="system",
                )
            )
            awarded.append(user_badge)
            logfire.info(
                "Badge awarded", user_id=str(user_id), badge=badge.name
            )

        logfire.info(
            "Badge check completed",
            user_id=str(user_id),
            held=len(held),
            awarded=len(awarded),
        )
        return awarded
