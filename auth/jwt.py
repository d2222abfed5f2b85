"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256.
The secret is injected (see ``config.jwt_secret``, env var ``JWT_SECRET``);
tokens expire ``jwt_expiry_seconds`` after issue (24h by default).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from dataclasses import dataclass
from typing import Optional


class AuthError(Exception):
    """Raised for every kind of token failure; the cause is not exposed."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str


class TokenSigner:
    def __init__(self, secret: str, expiry_seconds: int = 86400) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, user_id: str, email: str, now: Optional[float] = None) -> str:
        """Create a signed token containing ``user_id``, ``email`` and expiry."""
        issued_at = int(time.time() if now is None else now)
        payload = {
            "user_id": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str, now: Optional[float] = None) -> TokenClaims:
        """
        Verify token and return its claims.

        Raises ``AuthError`` on malformed, tampered, wrongly-signed or
        expired tokens, without saying which.
        """
        current = time.time() if now is None else now
        try:
            encoded, sig = token.split(".", 1)
            raw = urlsafe_b64decode(encoded.encode())
            if not hmac.compare_digest(sig, self._sign(raw)):
                raise ValueError("bad signature")
            payload = json.loads(raw)
            if not isinstance(payload.get("exp"), int) or payload["exp"] <= current:
                raise ValueError("token expired")
            return TokenClaims(user_id=str(payload["user_id"]), email=str(payload["email"]))
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise AuthError("invalid token") from exc
