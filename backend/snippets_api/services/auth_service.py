"""
Snippets API — Bearer Token Resolution
=======================================

What:  Resolves the caller's identity from the `Authorization` header.
How:   Verifies the identity provider's HS256 access token with python-jose
       and reads the user id from the `sub` claim.
Who:   `get_identity` is a FastAPI dependency evaluated once per request;
       the resulting Optional[Identity] is passed by value to the snippet
       service.

A missing, malformed, expired or wrongly signed token is not an error here:
it simply yields no identity (anonymous caller). Operations that need an
identity raise AuthenticationError themselves.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt

from snippets_api.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """An authenticated caller."""

    user_id: uuid.UUID


class AuthService:
    """Verifies bearer tokens issued by the external identity provider."""

    def __init__(self, secret: str, algorithm: str = "HS256", audience: Optional[str] = None):
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience

    def resolve(self, authorization: Optional[str]) -> Optional[Identity]:
        """
        Turn an Authorization header value into an Identity.

        Args:
            authorization: Raw header value, e.g. "Bearer eyJ...". May be None.

        Returns:
            The caller's Identity, or None for an anonymous/invalid caller.
        """
        if not authorization:
            return None

        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            return None

        if not self.secret:
            logger.warning("Bearer token received but no verification secret is configured")
            return None

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                # no configured audience: accept whatever `aud` the provider set
                options=None if self.audience else {"verify_aud": False},
            )
        except JWTError as exc:
            logger.info("Rejected bearer token: %s", exc)
            return None

        try:
            return Identity(user_id=uuid.UUID(str(claims.get("sub"))))
        except ValueError:
            # e.g. the provider's anon key, which has no user subject
            return None


auth_service = AuthService(
    secret=settings.auth_jwt_secret,
    algorithm=settings.auth_jwt_algorithm,
    audience=settings.auth_jwt_audience or None,
)


async def get_identity(request: Request) -> Optional[Identity]:
    """FastAPI dependency: the caller's identity, resolved once per request."""
    return auth_service.resolve(request.headers.get("Authorization"))
