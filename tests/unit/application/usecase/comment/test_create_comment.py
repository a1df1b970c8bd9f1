"""Unit tests for CreateCommentUseCase."""

import pytest

from forum.adapter.email import MockEmailSender
from forum.application.usecase.comment.create_comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from forum.application.usecase.comment.get_comment_tree import (
    GetCommentTreeRequest,
    GetCommentTreeUseCase,
)
from forum.domain.error import NotFoundError
from forum.domain.repository import PostRepository, UserRepository
from forum.domain.service import NotificationService
from forum.domain.value import UserId
from tests.factories import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def seed_users_and_post(unit_env) -> None:
    user_repo = await unit_env.get(UserRepository)
    post_repo = await unit_env.get(PostRepository)
    for handle in ("alice", "bob", "carol"):
        await user_repo.save(
            make_user(
                f"user_{handle}", email=f"{handle}@example.com", email_verified=True
            )
        )
    await post_repo.save(make_post("post_1", author_id="user_alice"))


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_comment_notifies_post_author(self, unit_env):
        """Creating a comment reports the notifications it caused."""
        # Arrange
        await seed_users_and_post(unit_env)
        use_case = await unit_env.get(CreateCommentUseCase)
        notification_service = await unit_env.get(NotificationService)
        email_sender = await unit_env.get(MockEmailSender)

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_id="post_1", content="Nice work @carol", author_id="user_bob"
            )
        )

        # Assert
        assert response.post_id == "post_1"
        assert response.author_name == "bob"
        assert response.parent_id is None
        assert response.notifications_sent == 2
        assert await notification_service.count_unread(UserId("user_alice")) == 1
        assert await notification_service.count_unread(UserId("user_carol")) == 1
        assert sorted(e.to for e in email_sender.sent) == [
            "alice@example.com",
            "carol@example.com",
        ]

    @pytest.mark.asyncio
    async def test_created_reply_appears_in_tree(self, unit_env):
        """A new reply is visible in the next tree build."""
        # Arrange
        await seed_users_and_post(unit_env)
        create = await unit_env.get(CreateCommentUseCase)
        get_tree = await unit_env.get(GetCommentTreeUseCase)
        root = await create.execute(
            CreateCommentRequest(post_id="post_1", content="Root", author_id="user_bob")
        )

        # Act
        reply = await create.execute(
            CreateCommentRequest(
                post_id="post_1",
                content="Reply",
                author_id="user_carol",
                parent_id=root.id,
            )
        )
        tree = await get_tree.execute(GetCommentTreeRequest(post_id="post_1"))

        # Assert
        assert reply.parent_id == root.id
        assert tree.total == 2
        assert [r.id for r in tree.comments[0].replies] == [reply.id]

    @pytest.mark.asyncio
    async def test_comment_on_own_post_sends_nothing(self, unit_env):
        await seed_users_and_post(unit_env)
        use_case = await unit_env.get(CreateCommentUseCase)

        response = await use_case.execute(
            CreateCommentRequest(post_id="post_1", content="Bump", author_id="user_alice")
        )

        assert response.notifications_sent == 0

    @pytest.mark.asyncio
    async def test_unknown_post_raises(self, unit_env):
        await seed_users_and_post(unit_env)
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    post_id="post_missing", content="Hi", author_id="user_bob"
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_author_raises(self, unit_env):
        await seed_users_and_post(unit_env)
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    post_id="post_1", content="Hi", author_id="user_ghost"
                )
            )

    @pytest.mark.asyncio
    async def test_parent_from_other_post_rejected(self, unit_env):
        """Replying to a comment of another post is invalid."""
        await seed_users_and_post(unit_env)
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(make_post("post_2", author_id="user_alice"))
        use_case = await unit_env.get(CreateCommentUseCase)
        other = await use_case.execute(
            CreateCommentRequest(post_id="post_2", content="Hi", author_id="user_bob")
        )

        with pytest.raises(ValueError):
            await use_case.execute(
                CreateCommentRequest(
                    post_id="post_1",
                    content="Reply",
                    author_id="user_bob",
                    parent_id=other.id,
                )
            )
