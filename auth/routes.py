"""
Auth API routes — signup, login, profile, change-password.

Route prefix: config.api_prefix (default /api)
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session, get_settings, get_user_store
from auth.dependencies import AuthenticatedUser, get_current_user, get_token_signer
from auth.jwt import TokenSigner
from auth.password import hash_password_async, verify_password_async
from config.settings import Settings
from database.models import User
from database.users import UserStore
from utils.errors import DuplicateEmailError, InternalError, NotFound, ValidationError
from utils.schemas import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    ProfileOut,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    SignupRequest,
)
from utils.validators import (
    FieldError,
    validate_full_name,
    validate_login,
    validate_password,
    validate_signup,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _user_payload(user: User) -> Dict[str, Any]:
    return {"id": user.id, "full_name": user.full_name, "email": user.email}


async def _hash(password: str, settings: Settings) -> str:
    try:
        return await hash_password_async(password, settings.bcrypt_rounds)
    except Exception as exc:
        logger.exception("Password hashing failed")
        raise InternalError() from exc


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
    users: UserStore = Depends(get_user_store),
    signer: TokenSigner = Depends(get_token_signer),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Register a new user and log them in."""
    errors = validate_signup(req.full_name, req.email, req.password)
    if errors:
        raise ValidationError(errors=errors)

    if await users.find_by_email(req.email) is not None:
        raise DuplicateEmailError()

    password_hash = await _hash(req.password, settings)
    user = await users.create(req.full_name, req.email, password_hash)
    await session.commit()

    token = signer.issue(str(user.id), user.email)
    logger.info("Registered user %s (%s)", user.email, user.id)

    return {
        "message": "User created successfully",
        "token": token,
        "user": _user_payload(user),
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    users: UserStore = Depends(get_user_store),
    signer: TokenSigner = Depends(get_token_signer),
) -> Dict[str, Any]:
    """Login with email + password."""
    errors = validate_login(req.email, req.password)
    if errors:
        raise ValidationError("Email and password are required", errors)

    user = await users.find_by_email(req.email)
    if user is None or not await verify_password_async(req.password, user.password_hash):
        logger.info("Failed login for %s", req.email.strip().lower())
        raise ValidationError("Invalid email or password")

    token = signer.issue(str(user.id), user.email)
    logger.info("Login: %s (%s)", user.email, user.id)

    return {
        "message": "Login successful",
        "token": token,
        "user": _user_payload(user),
    }


@router.get("/profile", response_model=ProfileOut)
async def get_profile(
    current: AuthenticatedUser = Depends(get_current_user),
    users: UserStore = Depends(get_user_store),
) -> User:
    user = await users.find_by_id(current.user_id)
    if user is None:
        raise NotFound("User not found")
    return user


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    req: ProfileUpdateRequest,
    session: AsyncSession = Depends(db_session),
    current: AuthenticatedUser = Depends(get_current_user),
    users: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    error = validate_full_name(req.full_name)
    if error:
        raise ValidationError(errors=[error])

    user = await users.update_name(current.user_id, req.full_name)
    if user is None:
        raise NotFound("User not found")
    await session.commit()

    logger.info("Profile updated for user %s", user.id)
    return {"message": "Profile updated successfully", "user": _user_payload(user)}


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    req: ChangePasswordRequest,
    session: AsyncSession = Depends(db_session),
    current: AuthenticatedUser = Depends(get_current_user),
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    if not req.old_password or not req.new_password:
        missing = [
            FieldError(name, "This field is required")
            for name, value in (("oldPassword", req.old_password), ("newPassword", req.new_password))
            if not value
        ]
        raise ValidationError("Current password and new password are required", missing)

    errors = validate_password(req.new_password, field="newPassword")
    if errors:
        raise ValidationError(errors=errors)

    user = await users.find_by_id(current.user_id)
    if user is None:
        raise NotFound("User not found")

    if not await verify_password_async(req.old_password, user.password_hash):
        raise ValidationError(
            errors=[FieldError("oldPassword", "Current password is incorrect")]
        )
    if await verify_password_async(req.new_password, user.password_hash):
        raise ValidationError(
            errors=[FieldError("newPassword", "New password cannot be the same as current password")]
        )

    new_hash = await _hash(req.new_password, settings)
    if not await users.update_password_hash(user.id, new_hash):
        raise NotFound("User not found")
    await session.commit()

    logger.info("Password changed for user %s", user.id)
    return {"message": "Password changed successfully"}
