"""
FastAPI dependencies for authentication.

``get_current_user`` is the auth gate for every protected route: it turns
the ``Authorization: Bearer …`` header into an ``AuthenticatedUser`` that
handlers receive as an explicit argument.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request

from api.dependencies import get_user_store
from auth.jwt import AuthError, TokenSigner
from database.users import UserStore
from utils.errors import Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: uuid.UUID
    email: str


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    signer: TokenSigner = Depends(get_token_signer),
    users: UserStore = Depends(get_user_store),
) -> AuthenticatedUser:
    """
    Verify the Bearer token and re-resolve it to a live user.

    Raises ``Unauthenticated`` (401) when the header is missing, the token
    does not verify, or the user it names no longer exists.
    """
    token = _extract_bearer(authorization)
    if token is None:
        raise Unauthenticated("No token, authorization denied")

    try:
        claims = signer.verify(token)
        user_id = uuid.UUID(claims.user_id)
    except (AuthError, ValueError):
        logger.info("Rejected invalid token")
        raise Unauthenticated("Token is not valid") from None

    user = await users.find_by_id(user_id)
    if user is None:
        logger.info("Rejected token for missing user %s", user_id)
        raise Unauthenticated("User not found")

    return AuthenticatedUser(user_id=user.id, email=user.email)
