from datetime import UTC, datetime, timedelta

import jwt
import pytest
from rolodex.core.exceptions import errors
from rolodex.domain.schemas import TokenIdentity
from rolodex.domain.services.token_service import TokenService

from tests.helpers import TEST_SECRET_KEY


class TestTokenService:
    """Test cases for TokenService"""

    def setup_method(self):
        self.token_service = TokenService(secret_key=TEST_SECRET_KEY)

    def test_issue_token_claims(self):
        """Issued tokens carry the identity and a one hour validity."""
        token = self.token_service.issue(user_id="abc123", username="alice01")

        claims = jwt.decode(token, TEST_SECRET_KEY, algorithms=["HS256"])

        assert claims["userId"] == "abc123"
        assert claims["username"] == "alice01"
        assert claims["exp"] - claims["iat"] == 3600

    def test_verify_round_trip(self):
        token = self.token_service.issue(user_id="abc123", username="alice01")

        identity = self.token_service.verify(token)

        assert identity == TokenIdentity(user_id="abc123", username="alice01")

    def test_verify_expired_token(self):
        expired_service = TokenService(secret_key=TEST_SECRET_KEY, max_age=-10)
        token = expired_service.issue(user_id="abc123", username="alice01")

        with pytest.raises(errors.InvalidTokenError) as exc_info:
            self.token_service.verify(token)

        assert exc_info.value.extras["error"] == "jwt expired"
        assert exc_info.value.status == 403

    def test_verify_wrong_signature(self):
        other_service = TokenService(secret_key="another-secret-key-that-is-long-enough-for-hs256")
        token = other_service.issue(user_id="abc123", username="alice01")

        with pytest.raises(errors.InvalidTokenError) as exc_info:
            self.token_service.verify(token)

        assert exc_info.value.extras["error"] == "invalid signature"

    def test_verify_malformed_token(self):
        with pytest.raises(errors.InvalidTokenError) as exc_info:
            self.token_service.verify("not-a-jwt")

        assert exc_info.value.detail == "Forbidden: Invalid token"
        assert exc_info.value.extras["error"]

    def test_verify_token_without_expiry(self):
        token = jwt.encode(
            {"userId": "abc123", "username": "alice01", "iat": datetime.now(UTC)},
            TEST_SECRET_KEY,
            algorithm="HS256",
        )

        with pytest.raises(errors.InvalidTokenError) as exc_info:
            self.token_service.verify(token)

        assert "exp" in exc_info.value.extras["error"]

    def test_verify_token_without_identity(self):
        now = datetime.now(UTC)
        token = jwt.encode({"iat": now, "exp": now + timedelta(minutes=5)}, TEST_SECRET_KEY, algorithm="HS256")

        with pytest.raises(errors.InvalidTokenError) as exc_info:
            self.token_service.verify(token)

        assert exc_info.value.extras["error"] == "invalid token payload"
