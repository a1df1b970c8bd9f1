"""Unit tests for JWT verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from forum.config import AuthSettings
from forum.domain.service import JWTService
from forum.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="test-secret-with-at-least-32-bytes")


class TestVerifyToken:
    """Tests for verify_token."""

    def test_round_trip(self):
        token = create_token("user_alice", "alice", SETTINGS)

        payload = verify_token(token, SETTINGS)

        assert payload.user_id == "user_alice"
        assert payload.name == "alice"

    def test_wrong_secret(self):
        """Tokens signed with another secret are rejected."""
        other = AuthSettings(jwt_secret="another-secret-with-at-least-32-bytes")
        token = create_token("user_alice", None, other)

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, SETTINGS)

    def test_expired_token(self):
        token = jwt.encode(
            {
                "user_id": "user_alice",
                "exp": datetime.now(timezone.utc) - timedelta(hours=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)


class TestJWTService:
    """Tests for resolving the viewer from a token."""

    def test_missing_token_is_anonymous(self):
        assert JWTService(SETTINGS).get_user_id_from_token(None) is None

    def test_garbage_token_is_anonymous(self):
        assert JWTService(SETTINGS).get_user_id_from_token("garbage") is None

    def test_valid_token(self):
        service = JWTService(SETTINGS)

        assert service.get_user_id_from_token(service.create_token("user_bob")) == (
            "user_bob"
        )
