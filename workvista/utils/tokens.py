"""Signed, expiring session tokens carrying the caller's identity claim."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

JWT_ALGORITHM = "HS256"
SESSION_TTL_SECONDS = 60 * 60

# Registered claims added on issue and stripped again on verify.
_TIME_CLAIMS = ("iat", "exp")

# Names PyJWT interprets on decode; an identity claim may not carry them.
REGISTERED_CLAIMS = frozenset(("exp", "iat", "nbf", "aud", "iss", "sub", "jti"))


class TokenError(Exception):
    """Raised when a session token cannot be trusted."""


class InvalidSignature(TokenError):
    """The token was not signed with the server secret."""


class Expired(TokenError):
    """The token's embedded expiry has passed."""


class MalformedToken(TokenError):
    """The token cannot be decoded or carries no identity."""


class TokenCodec:
    """Issue and verify HS256 session tokens with a fixed lifetime."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        algorithm: str = JWT_ALGORITHM,
    ) -> None:
        if not secret:
            raise ValueError("A signing secret is required.")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm

    def issue(self, claim: Dict[str, Any], now: Optional[datetime] = None) -> str:
        """Return a token embedding ``claim`` that expires ``ttl_seconds`` after ``now``."""
        reserved = REGISTERED_CLAIMS.intersection(claim)
        if reserved:
            raise ValueError(f"Identity claim may not set {sorted(reserved)}.")

        issued_at = now or datetime.now(timezone.utc)
        payload = dict(claim)
        payload["iat"] = issued_at
        payload["exp"] = issued_at + timedelta(seconds=self.ttl_seconds)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Decode ``token`` and return the identity claim it was issued with.

        Raises InvalidSignature, Expired or MalformedToken.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignature("Token signature does not match.") from exc
        except jwt.ExpiredSignatureError as exc:
            raise Expired("Token has expired.") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedToken(f"Invalid token: {exc}") from exc

        email = payload.get("email")
        if not isinstance(email, str) or not email:
            raise MalformedToken("Token carries no identity.")

        for name in _TIME_CLAIMS:
            payload.pop(name, None)
        return payload
