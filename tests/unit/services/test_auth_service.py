"""Unit tests for AuthService JWT verification."""

import pytest
from datetime import datetime, timedelta, timezone
import jwt as pyjwt

from nubian.services.auth_service import AuthService, IdentityDomain, Principal
from nubian.exceptions import InvalidTokenError, MissingTokenError

USER_SECRET = "user-secret-0123456789abcdef0123456789"
ADMIN_SECRET = "admin-secret-0123456789abcdef012345678"


def _token(secret: str, issuer: str, **claims) -> str:
    now = datetime.now(timezone.utc)
    payload = {"iss": issuer, "sub": "subject-1", "iat": now, "exp": now + timedelta(hours=1)}
    payload.update(claims)
    return pyjwt.encode(payload, secret, algorithm="HS256")


class TestAuthServiceVerifyToken:
    """Tests for AuthService.verify_token method."""

    @pytest.fixture
    def auth_service(self):
        """Create AuthService with a user and an admin domain."""
        return AuthService(
            domains=[
                IdentityDomain("user", "nubianresearch", USER_SECRET),
                IdentityDomain("admin", "nubianresearch-admin", ADMIN_SECRET),
            ]
        )

    async def test_verify_token_missing_header_raises_error(self, auth_service):
        with pytest.raises(MissingTokenError):
            await auth_service.verify_token(None)

    async def test_verify_token_empty_header_raises_error(self, auth_service):
        with pytest.raises(MissingTokenError):
            await auth_service.verify_token("")

    async def test_verify_token_invalid_scheme_raises_error(self, auth_service):
        with pytest.raises(InvalidTokenError) as exc_info:
            await auth_service.verify_token("Basic abc123")

        assert "Invalid authorization header format" in str(exc_info.value)

    async def test_verify_token_malformed_jwt_raises_error(self, auth_service):
        with pytest.raises(InvalidTokenError):
            await auth_service.verify_token("Bearer not.a.valid.jwt")

    async def test_user_token_yields_user_principal(self, auth_service):
        token = _token(USER_SECRET, "nubianresearch", sub="user_1", email="a@b.c", name="A")

        principal = await auth_service.verify_token(f"Bearer {token}")

        assert principal == Principal(kind="user", id="user_1", email="a@b.c", name="A")
        assert principal.is_admin is False

    async def test_admin_token_yields_admin_principal(self, auth_service):
        token = _token(ADMIN_SECRET, "nubianresearch-admin", sub="admin_1")

        principal = await auth_service.verify_token(f"Bearer {token}")

        assert principal.kind == "admin"
        assert principal.is_admin is True

    async def test_token_signed_with_other_domain_secret_rejected(self, auth_service):
        # user issuer, admin secret
        token = _token(ADMIN_SECRET, "nubianresearch")

        with pytest.raises(InvalidTokenError):
            await auth_service.verify_token(f"Bearer {token}")

    async def test_unknown_issuer_rejected(self, auth_service):
        token = _token(USER_SECRET, "someone-else")

        with pytest.raises(InvalidTokenError) as exc_info:
            await auth_service.verify_token(f"Bearer {token}")

        assert "issuer" in exc_info.value.message

    async def test_expired_token_rejected(self, auth_service):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = _token(USER_SECRET, "nubianresearch", iat=past, exp=past + timedelta(minutes=5))

        with pytest.raises(InvalidTokenError) as exc_info:
            await auth_service.verify_token(f"Bearer {token}")

        assert exc_info.value.message == "Token has expired"

    async def test_missing_subject_rejected(self, auth_service):
        token = _token(USER_SECRET, "nubianresearch", sub="")

        with pytest.raises(InvalidTokenError):
            await auth_service.verify_token(f"Bearer {token}")

    async def test_domain_without_secret_is_not_trusted(self):
        service = AuthService(domains=[IdentityDomain("admin", "nubianresearch-admin", "")])
        token = _token(ADMIN_SECRET, "nubianresearch-admin")

        with pytest.raises(InvalidTokenError):
            await service.verify_token(f"Bearer {token}")
