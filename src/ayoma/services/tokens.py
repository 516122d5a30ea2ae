"""Issue and verify time-bounded bearer tokens.

Tokens are HS256 JWTs carrying the user id (``sub``) and username. There is
no revocation list: a token stays valid until it expires even if the account
changes afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from ayoma.core.errors import (
    TokenExpiredError,
    TokenMalformedError,
    TokenMissingError,
    TokenSignatureError,
)
from ayoma.core.settings import settings
from ayoma.db.time import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims carried by a verified token."""

    user_id: str
    username: str
    expires_at: datetime


class TokenService:
    """Signs and checks bearer tokens with a shared secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: str, username: str, now: datetime | None = None) -> str:
        """Return a signed token for ``user_id`` expiring ``ttl`` from now."""
        issued_at = now or utcnow()
        claims: dict[str, Any] = {
            "sub": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str | None) -> TokenClaims:
        """Return the claims of a valid token.

        Raises:
            TokenMissingError: No token was presented.
            TokenMalformedError: The token is not a JWT or lacks identity claims.
            TokenExpiredError: The expiry has passed.
            TokenSignatureError: The signature does not verify.
        """
        if not token:
            logger.warning("Rejected request without bearer token")
            raise TokenMissingError()

        try:
            jwt.get_unverified_header(token)
        except JWTError as err:
            logger.warning("Rejected malformed bearer token: %s", err)
            raise TokenMalformedError() from err

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError as err:
            logger.warning("Rejected expired bearer token")
            raise TokenExpiredError() from err
        except JWTError as err:
            logger.warning("Rejected bearer token with bad signature or claims: %s", err)
            raise TokenSignatureError() from err

        user_id = payload.get("sub")
        username = payload.get("username")
        exp = payload.get("exp")
        if not isinstance(user_id, str) or not isinstance(username, str) or exp is None:
            logger.warning("Rejected bearer token without identity claims")
            raise TokenMalformedError()

        return TokenClaims(
            user_id=user_id,
            username=username,
            expires_at=datetime.fromtimestamp(int(exp), tz=UTC),
        )


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Return the token service configured from settings."""
    return TokenService(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )
