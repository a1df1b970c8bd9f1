"""End-to-end tests for the forum HTTP API."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from forum.config import Settings
from forum.domain.repository import UserRepository
from forum.domain.service import JWTService
from forum.interface.api.app import create_app
from tests.di import build_api_test_container
from tests.factories import make_user


async def seed_users(container) -> None:
    user_repo = await container.get(UserRepository)
    for handle in ("alice", "bob"):
        await user_repo.save(
            make_user(
                f"user_{handle}", email=f"{handle}@example.com", email_verified=True
            )
        )


@pytest.fixture
def client():
    """Create test client over in-memory repositories."""
    container = build_api_test_container()
    asyncio.run(seed_users(container))
    with TestClient(create_app(container)) as test_client:
        yield test_client


def login(client: TestClient, user_id: str) -> None:
    token = JWTService(Settings().auth).create_token(user_id)
    client.cookies.set("auth_token", token)


def create_post(client: TestClient) -> str:
    login(client, "user_alice")
    response = client.post("/posts", json={"title": "Dark matter", "content": "?"})
    assert response.status_code == 201
    return response.json()["id"]


class TestCommentThread:
    """End-to-end tests for commenting and reading threads."""

    def test_comment_reply_and_read_tree(self, client):
        """Comments and replies come back as a nested tree."""
        # Arrange
        post_id = create_post(client)
        login(client, "user_bob")

        # Act
        root = client.post(f"/posts/{post_id}/comments", json={"content": "First"})
        reply = client.post(
            f"/posts/{post_id}/comments",
            json={"content": "Reply", "parent_id": root.json()["id"]},
        )
        tree = client.get(f"/posts/{post_id}/comments")

        # Assert
        assert root.status_code == 201
        assert root.json()["notifications_sent"] == 1
        assert reply.status_code == 201
        data = tree.json()
        assert data["post_id"] == post_id
        assert data["total"] == 2
        (root_item,) = data["comments"]
        assert root_item["author_rank"] == "Member"
        assert [r["id"] for r in root_item["replies"]] == [reply.json()["id"]]

    def test_comment_requires_auth(self, client):
        post_id = create_post(client)
        client.cookies.clear()

        response = client.post(f"/posts/{post_id}/comments", json={"content": "Hi"})

        assert response.status_code == 401

    def test_comments_of_unknown_post(self, client):
        response = client.get("/posts/post_missing/comments")

        assert response.status_code == 404

    def test_empty_comment_rejected(self, client):
        post_id = create_post(client)

        response = client.post(f"/posts/{post_id}/comments", json={"content": ""})

        assert response.status_code == 422

    def test_reply_to_missing_parent(self, client):
        post_id = create_post(client)

        response = client.post(
            f"/posts/{post_id}/comments",
            json={"content": "Reply", "parent_id": "comment_missing"},
        )

        assert response.status_code == 400


class TestVotingAndNotifications:
    """End-to-end tests for votes and the notification inbox."""

    def test_vote_shows_in_tree_for_viewer(self, client):
        """The viewer sees their own vote; anonymous readers only see counts."""
        # Arrange
        post_id = create_post(client)
        comment = client.post(f"/posts/{post_id}/comments", json={"content": "Hi"})
        comment_id = comment.json()["id"]
        login(client, "user_bob")

        # Act
        vote = client.post(f"/comments/{comment_id}/vote", json={"vote_type": "up"})
        as_bob = client.get(f"/posts/{post_id}/comments").json()
        client.cookies.clear()
        anonymous = client.get(f"/posts/{post_id}/comments").json()

        # Assert
        assert vote.status_code == 200
        assert vote.json()["outcome"] == "recorded"
        assert as_bob["comments"][0]["user_vote"] == "up"
        assert anonymous["comments"][0]["user_vote"] is None
        assert anonymous["comments"][0]["upvotes"] == 1

    def test_invalid_vote_type(self, client):
        post_id = create_post(client)

        response = client.post(f"/posts/{post_id}/vote", json={"vote_type": "meh"})

        assert response.status_code == 400

    def test_notification_inbox(self, client):
        """A comment notifies the post author, who can mark it read."""
        # Arrange
        post_id = create_post(client)
        login(client, "user_bob")
        client.post(f"/posts/{post_id}/comments", json={"content": "Nice"})
        login(client, "user_alice")

        # Act
        inbox = client.get("/notifications").json()
        notification_id = inbox["notifications"][0]["id"]
        marked = client.post(f"/notifications/{notification_id}/read")

        # Assert
        assert inbox["unread_count"] == 1
        assert inbox["notifications"][0]["type"] == "POST_COMMENT"
        assert marked.json() == {"updated": 1, "unread_count": 0}

    def test_notifications_require_auth(self, client):
        assert client.get("/notifications").status_code == 401


class TestPostsAndBadges:
    """End-to-end tests for post ownership, badges and health."""

    def test_only_author_deletes_post(self, client):
        post_id = create_post(client)
        login(client, "user_bob")

        assert client.delete(f"/posts/{post_id}").status_code == 403

        login(client, "user_alice")
        assert client.delete(f"/posts/{post_id}").status_code == 200
        assert client.get(f"/posts/{post_id}").status_code == 404

    def test_user_badges_empty(self, client):
        response = client.get("/users/user_bob/badges")

        assert response.status_code == 200
        assert response.json() == {"user_id": "user_bob", "badges": []}

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
