"""Unit tests for CommentService."""

import pytest

from forum.domain.repository import CommentRepository
from forum.domain.service import CommentService, build_comment_tree
from forum.domain.value import CommentId, PostId
from tests.factories import make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """Top-level comment is saved with the author's details."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_user("user_alice", image="https://img.example/alice.png")

        # Act
        result = await comment_service.create_comment(
            post_id=PostId("post_1"), author=author, content="First!"
        )

        # Assert
        assert result.parent_id is None
        assert result.content == "First!"
        assert result.author_id == author.id
        assert result.author_name == "alice"
        assert result.author_image == "https://img.example/alice.png"
        assert result.id.startswith("comment_")
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """Replies reference their parent comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_repo.save(make_comment("c_parent"))

        # Act
        reply = await comment_service.create_comment(
            post_id=PostId("post_1"),
            author=make_user("user_bob"),
            content="Reply",
            parent_id=parent.id,
        )

        # Assert
        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_missing_parent_raises(self, unit_env):
        """Replying to a non-existent comment is rejected."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValueError, match="Parent comment not found"):
            await comment_service.create_comment(
                post_id=PostId("post_1"),
                author=make_user(),
                content="Reply",
                parent_id=CommentId("c_missing"),
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_post_raises(self, unit_env):
        """Replying across posts is rejected."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("c_other", post_id="post_2"))

        with pytest.raises(ValueError, match="does not belong"):
            await comment_service.create_comment(
                post_id=PostId("post_1"),
                author=make_user(),
                content="Reply",
                parent_id=CommentId("c_other"),
            )

    @pytest.mark.asyncio
    async def test_empty_content_rejected(self, unit_env):
        """Comment content must not be empty."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValueError):
            await comment_service.create_comment(
                post_id=PostId("post_1"), author=make_user(), content=""
            )

    @pytest.mark.asyncio
    async def test_created_comment_feeds_next_tree_build(self, unit_env):
        """A freshly created reply lands under its parent in the next tree."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId("post_1")
        root = await comment_service.create_comment(
            post_id=post_id, author=make_user(), content="Root"
        )
        reply = await comment_service.create_comment(
            post_id=post_id,
            author=make_user("user_bob"),
            content="Reply",
            parent_id=root.id,
        )

        # Act
        comments = await comment_service.get_comments_for_post(post_id)
        tree = build_comment_tree(post_id, comments, [])

        # Assert
        assert [node.id for node in tree] == [root.id]
        assert [node.id for node in tree[0].replies] == [reply.id]


class TestGetComments:
    """Tests for comment lookups."""

    @pytest.mark.asyncio
    async def test_get_comments_for_post_filters_by_post(self, unit_env):
        """Only the post's own comments are returned."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("c_1"))
        await comment_repo.save(make_comment("c_2", parent_id="c_1"))
        await comment_repo.save(make_comment("c_3", post_id="post_2"))

        comments = await comment_service.get_comments_for_post(PostId("post_1"))

        assert sorted(c.id for c in comments) == ["c_1", "c_2"]

    @pytest.mark.asyncio
    async def test_get_comment_by_id_missing_returns_none(self, unit_env):
        """Unknown IDs return None."""
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.get_comment_by_id(CommentId("c_x")) is None
