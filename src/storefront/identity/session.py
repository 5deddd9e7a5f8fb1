"""Session tokens issued by the identity provider.

Every authenticated request carries ``Authorization: Bearer <jwt>``. The token
is verified with python-jose against the configured key and algorithms; the
claims become an :class:`Identity` that the rest of the request trusts.
"""

from dataclasses import dataclass

import structlog
from fastapi import Header
from jose import JWTError, jwt

from storefront.errors import Unauthorized
from storefront.settings import get_settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    subject: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None
    phone: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def display_name(self) -> str:
        """Name shown on reviews. Anonymous when the provider has no name on file."""
        return self.full_name or "Anonymous User"


def decode_session_token(token: str) -> Identity:
    settings = get_settings()
    if not settings.identity_jwt_secret:
        raise Unauthorized("Authentication is not configured.")

    try:
        claims = jwt.decode(
            token,
            settings.identity_jwt_secret,
            algorithms=list(settings.identity_jwt_algorithms),
            options={"verify_aud": False},
        )
    except JWTError as exc:
        logger.info("session_token_rejected", reason=str(exc))
        raise Unauthorized("Invalid or expired session.")

    subject = claims.get("sub")
    if not subject:
        raise Unauthorized("Invalid or expired session.")

    return Identity(
        subject=subject,
        email=claims.get("email"),
        first_name=claims.get("first_name") or claims.get("given_name"),
        last_name=claims.get("last_name") or claims.get("family_name"),
        image_url=claims.get("image_url") or claims.get("picture"),
        phone=claims.get("phone_number"),
    )


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_identity(authorization: str | None = Header(default=None)) -> Identity:
    """FastAPI dependency: the caller's identity, or 401."""
    token = _bearer_token(authorization)
    if token is None:
        raise Unauthorized()
    return decode_session_token(token)
