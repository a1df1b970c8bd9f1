"""Unit tests for BadgeService."""

from datetime import datetime, timedelta, timezone

import pytest

from forum.domain.error import NotFoundError
from forum.domain.model import UserBadge
from forum.domain.repository import (
    BadgeRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from forum.domain.service import BADGE_DEFINITIONS, BadgeService
from forum.domain.service.badge_service import is_eligible
from forum.domain.value import (
    BadgeCriteria,
    BadgeType,
    UserBadgeId,
    UserId,
    UserStats,
    VoteType,
)
from tests.factories import at, make_badge, make_comment, make_post, make_user, make_vote
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

ALICE = UserId("user_alice")


class TestEligibility:
    """Tests for the criteria check."""

    def test_any_threshold_is_enough(self):
        """Meeting one of several thresholds earns the badge."""
        criteria = BadgeCriteria(comments_count=5, upvotes_received=5)

        assert is_eligible(criteria, UserStats(comments_count=5))
        assert is_eligible(criteria, UserStats(upvotes_received=9))
        assert not is_eligible(criteria, UserStats(comments_count=4, upvotes_received=4))

    def test_manual_badges_are_never_eligible(self):
        """Manually awarded badges are not granted automatically."""
        criteria = BadgeCriteria(posts_count=1, manually_awarded=True)

        assert not is_eligible(criteria, UserStats(posts_count=100))

    def test_no_criteria_is_not_eligible(self):
        """A badge without thresholds is never earned automatically."""
        assert not is_eligible(BadgeCriteria(), UserStats(posts_count=100))

    def test_catalogue_ids_are_unique(self):
        """Every built-in badge has its own ID and name."""
        assert len({b.id for b in BADGE_DEFINITIONS}) == len(BADGE_DEFINITIONS)
        assert len({b.name for b in BADGE_DEFINITIONS}) == len(BADGE_DEFINITIONS)


class TestUserStats:
    """Tests for get_user_stats."""

    @pytest.mark.asyncio
    async def test_counts_activity_and_upvotes_received(self, unit_env):
        """Stats count posts, comments and upvotes on both."""
        # Arrange
        badge_service = await unit_env.get(BadgeService)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)

        created = datetime.now(timezone.utc) - timedelta(days=40)
        await user_repo.save(make_user("user_alice", created_at=created))
        await post_repo.save(make_post("post_1", author_id="user_alice"))
        await comment_repo.save(make_comment("c_1", author_id="user_alice"))
        await comment_repo.save(make_comment("c_2", author_id="user_alice"))
        await comment_repo.save(make_comment("c_3", author_id="user_bob"))
        await vote_repo.save(make_vote("v_1", "user_bob", "c_1"))
        await vote_repo.save(make_vote("v_2", "user_carol", "c_1"))
        await vote_repo.save(make_vote("v_3", "user_bob", "c_2", VoteType.DOWN))
        await vote_repo.save(make_vote("v_4", "user_alice", "c_3"))

        # Act
        stats = await badge_service.get_user_stats(ALICE)

        # Assert
        assert stats.posts_count == 1
        assert stats.comments_count == 2
        assert stats.upvotes_received == 2
        assert stats.days_as_active_member == 40

    @pytest.mark.asyncio
    async def test_unknown_user_raises(self, unit_env):
        """Stats for a missing user raise NotFoundError."""
        badge_service = await unit_env.get(BadgeService)

        with pytest.raises(NotFoundError):
            await badge_service.get_user_stats(UserId("user_x"))


class TestCheckAndAwardBadges:
    """Tests for check_and_award_badges."""

    @pytest.mark.asyncio
    async def test_awards_eligible_badges_once(self, unit_env):
        """Eligible badges are awarded, and not again on the next check."""
        # Arrange
        badge_service = await unit_env.get(BadgeService)
        badge_repo = await unit_env.get(BadgeRepository)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)

        await badge_repo.upsert(make_badge("first-post", posts_count=1))
        await badge_repo.upsert(make_badge("active", posts_count=10))
        await badge_repo.upsert(
            make_badge(
                "staff", type=BadgeType.SPECIAL, posts_count=1, manually_awarded=True
            )
        )
        await user_repo.save(make_user("user_alice"))
        await post_repo.save(make_post("post_1", author_id="user_alice"))

        # Act
        first = await badge_service.check_and_award_badges(ALICE)
        second = await badge_service.check_and_award_badges(ALICE)

        # Assert
        assert [ub.badge.id for ub in first] == ["first-post"]
        assert first[0].awarded_by == "system"
        assert second == []
        held = await badge_service.get_user_badges(ALICE)
        assert [ub.badge.id for ub in held] == ["first-post"]

    @pytest.mark.asyncio
    async def test_inactive_badges_are_skipped(self, unit_env):
        """Deactivated badges are not awarded."""
        badge_service = await unit_env.get(BadgeService)
        badge_repo = await unit_env.get(BadgeRepository)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)

        await badge_repo.upsert(make_badge("retired", posts_count=1, is_active=False))
        await user_repo.save(make_user("user_alice"))
        await post_repo.save(make_post("post_1", author_id="user_alice"))

        assert await badge_service.check_and_award_badges(ALICE) == []

    @pytest.mark.asyncio
    async def test_failed_check_awards_nothing(self, unit_env, monkeypatch):
        """A failure partway through undoes the badges already awarded."""
        # Arrange
        badge_service = await unit_env.get(BadgeService)
        badge_repo = await unit_env.get(BadgeRepository)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)

        await badge_repo.upsert(make_badge("a-first", posts_count=1))
        await badge_repo.upsert(make_badge("b-second", posts_count=1))
        await user_repo.save(make_user("user_alice"))
        await post_repo.save(make_post("post_1", author_id="user_alice"))

        award = badge_repo.award

        async def award_first_only(user_badge):
            if user_badge.badge.id == "b-second":
                raise RuntimeError("insert failed")
            return await award(user_badge)

        monkeypatch.setattr(badge_repo, "award", award_first_only)

        # Act
        with pytest.raises(RuntimeError):
            await badge_service.check_and_award_badges(ALICE)

        # Assert
        assert await badge_service.get_user_badges(ALICE) == []


class TestRecentBadges:
    """Tests for the badges shown next to authors."""

    @pytest.mark.asyncio
    async def test_recent_badges_newest_first_and_capped(self, unit_env):
        """Only the latest badges are returned, newest first."""
        badge_service = await unit_env.get(BadgeService)
        badge_repo = await unit_env.get(BadgeRepository)
        for i in range(5):
            await badge_repo.award(
                UserBadge(
                    id=UserBadgeId(f"ub_{i}"),
                    user_id=ALICE,
                    badge=make_badge(f"badge-{i}"),
                    earned_at=at(i),
                )
            )

        recent = await badge_service.get_recent_badges(ALICE)

        assert [b.id for b in recent] == ["badge-4", "badge-3", "badge-2"]

    @pytest.mark.asyncio
    async def test_badges_for_authors_deduplicates(self, unit_env):
        """Each distinct author is looked up once."""
        badge_service = await unit_env.get(BadgeService)
        badge_repo = await unit_env.get(BadgeRepository)
        await badge_repo.award(
            UserBadge(
                id=UserBadgeId("ub_1"), user_id=ALICE, badge=make_badge("helpful")
            )
        )

        badges = await badge_service.get_badges_for_authors(
            [ALICE, UserId("user_bob"), ALICE]
        )

        assert list(badges) == [ALICE, UserId("user_bob")]
        assert [b.id for b in badges[ALICE]] == ["helpful"]
        assert badges[UserId("user_bob")] == []

    @pytest.mark.asyncio
    async def test_badges_for_no_authors(self, unit_env):
        """No authors, no lookup."""
        badge_service = await unit_env.get(BadgeService)

        assert await badge_service.get_badges_for_authors([]) == {}
