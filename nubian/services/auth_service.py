"""Authentication service for session-provider JWT verification."""

from dataclasses import dataclass
from typing import Literal, Optional
import jwt

from nubian.exceptions import InvalidTokenError, MissingTokenError
from nubian.utils.logger import get_logger

log = get_logger(__name__)

PrincipalKind = Literal["user", "admin"]


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request (user or admin)."""

    kind: PrincipalKind
    id: str
    email: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.kind == "admin"

    def owns(self, user_id: Optional[str]) -> bool:
        """Whether this principal is the user identified by ``user_id``."""
        return self.kind == "user" and user_id is not None and self.id == str(user_id)


@dataclass(frozen=True)
class IdentityDomain:
    """Issuer/secret pair for one identity space."""

    kind: PrincipalKind
    issuer: str
    secret: str


class AuthService:
    """Verifies bearer tokens against the user and admin identity domains.

    Users and admins are signed by separate issuers with separate secrets; the
    unverified ``iss`` claim selects which domain a token is checked against.
    """

    ALGORITHMS = ["HS256"]

    def __init__(self, domains: list[IdentityDomain]) -> None:
        self._domains = {d.issuer: d for d in domains if d.secret}

    async def verify_token(self, authorization_header: Optional[str]) -> Principal:
        """
        Verify a bearer token and build the principal it identifies.

        Args:
            authorization_header: The Authorization header value (Bearer <token>)

        Returns:
            Principal for the token's identity domain

        Raises:
            MissingTokenError: If no token is provided
            InvalidTokenError: If token is invalid, expired or from an unknown issuer
        """
        if not authorization_header:
            raise MissingTokenError()

        parts = authorization_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise InvalidTokenError("Invalid authorization header format")

        token = parts[1]

        try:
            unverified = jwt.decode(token, options={"verify_signature": False})
            issuer = unverified.get("iss", "")

            domain = self._domains.get(issuer)
            if domain is None:
                raise InvalidTokenError("Token issuer not trusted")

            payload = jwt.decode(
                token,
                domain.secret,
                algorithms=self.ALGORITHMS,
                issuer=domain.issuer,
                options={"verify_exp": True, "verify_iat": True, "verify_nbf": True},
            )

            subject = payload.get("sub")
            if not subject:
                raise InvalidTokenError("Token missing user identifier")

            log.debug("token verified", kind=domain.kind, principal_id=subject)

            return Principal(
                kind=domain.kind,
                id=str(subject),
                email=payload.get("email"),
                name=payload.get("name"),
            )

        except jwt.ExpiredSignatureError:
            log.warning("token expired")
            raise InvalidTokenError("Token has expired")
        except InvalidTokenError:
            raise
        except jwt.InvalidTokenError as e:
            log.warning("token invalid", error=str(e))
            raise InvalidTokenError(f"Token validation failed: {str(e)}")


# Singleton instance
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        from nubian.config import get_settings

        settings = get_settings()
        _auth_service = AuthService(
            domains=[
                IdentityDomain("user", settings.user_auth_issuer, settings.user_auth_secret),
                IdentityDomain("admin", settings.admin_auth_issuer, settings.admin_auth_secret),
            ]
        )
    return _auth_service
