"""Tests for auth utility functions."""
import pytest
from datetime import timedelta


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_is_salted(self):
        """Test hashing the same password twice gives different hashes."""
        from app.utils.auth import hash_password

        hashed = hash_password("birdie123")

        assert hashed.startswith("$2b$")
        assert hashed != hash_password("birdie123")

    def test_verify_password(self):
        """Test verification against the right and wrong password."""
        from app.utils.auth import hash_password, verify_password

        hashed = hash_password("birdie123")

        assert verify_password("birdie123", hashed) is True
        assert verify_password("bogey123", hashed) is False
        assert verify_password("", hashed) is False


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_round_trip_user_id(self):
        """Test a token resolves back to its user."""
        from app.utils.auth import create_access_token, verify_access_token

        token = create_access_token(user_id="user123", email="golfer@example.com")

        assert verify_access_token(token) == "user123"

    def test_token_claims(self):
        """Test the payload carries subject, email and expiry."""
        from jose import jwt
        from app.config import settings
        from app.utils.auth import create_access_token

        token = create_access_token(user_id="user123", email="golfer@example.com")
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])

        assert payload["sub"] == "user123"
        assert payload["email"] == "golfer@example.com"
        assert "exp" in payload

    def test_email_claim_optional(self):
        """Test tokens can be issued without an email."""
        from jose import jwt
        from app.config import settings
        from app.utils.auth import create_access_token

        token = create_access_token(user_id="user123")
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])

        assert "email" not in payload

    def test_invalid_token(self):
        """Test a garbage token is rejected."""
        from jose import JWTError
        from app.utils.auth import verify_access_token

        with pytest.raises(JWTError):
            verify_access_token("invalid.token.here")

    def test_expired_token(self):
        """Test an expired token is rejected."""
        from jose import JWTError
        from app.utils.auth import create_access_token, verify_access_token

        token = create_access_token(user_id="user123", expires_delta=timedelta(seconds=-1))

        with pytest.raises(JWTError):
            verify_access_token(token)

    def test_token_without_subject(self):
        """Test a token lacking a subject is rejected."""
        from jose import JWTError, jwt
        from app.config import settings
        from app.utils.auth import verify_access_token

        token = jwt.encode({"email": "golfer@example.com"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)

        with pytest.raises(JWTError, match="sub"):
            verify_access_token(token)
