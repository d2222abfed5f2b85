"""
Field-level validation rules applied before anything touches the database.

All functions are pure: they take raw strings and return ``FieldError``
values, never raise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 128      # users.full_name column width
MAX_EMAIL_LENGTH = 255     # users.email column width
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72    # bcrypt input limit


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def validate_full_name(full_name: Optional[str]) -> Optional[FieldError]:
    if not full_name or len(full_name.strip()) < MIN_NAME_LENGTH:
        return FieldError("fullName", "Name must be at least 2 characters")
    if len(full_name.strip()) > MAX_NAME_LENGTH:
        return FieldError("fullName", "Name must be at most 128 characters")
    return None


def validate_email(email: Optional[str]) -> Optional[FieldError]:
    if not email or not email.strip():
        return FieldError("email", "Email is required")
    if len(email.strip()) > MAX_EMAIL_LENGTH:
        return FieldError("email", "Email must be at most 255 characters")
    if not _EMAIL_RE.match(email.strip()):
        return FieldError("email", "Invalid email format")
    return None


def validate_password(password: Optional[str], field: str = "password") -> List[FieldError]:
    """Length and character-class rules for a new password."""
    label = "New password" if field == "newPassword" else "Password"
    if not password:
        return [FieldError(field, f"{label} is required")]

    errors: List[FieldError] = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(FieldError(field, f"{label} must be at least 8 characters"))
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        errors.append(FieldError(field, f"{label} must be at most 72 bytes"))
    if not (
        re.search(r"[a-z]", password)
        and re.search(r"[A-Z]", password)
        and re.search(r"\d", password)
    ):
        errors.append(
            FieldError(
                field,
                f"{label} must contain at least one uppercase letter, "
                "one lowercase letter, and one number",
            )
        )
    return errors


def validate_signup(full_name: Optional[str], email: Optional[str], password: Optional[str]) -> List[FieldError]:
    errors: List[FieldError] = []
    name_error = validate_full_name(full_name)
    if name_error:
        errors.append(name_error)
    email_error = validate_email(email)
    if email_error:
        errors.append(email_error)
    errors.extend(validate_password(password))
    return errors


def validate_login(email: Optional[str], password: Optional[str]) -> List[FieldError]:
    errors: List[FieldError] = []
    if not email or not email.strip():
        errors.append(FieldError("email", "Email is required"))
    if not password:
        errors.append(FieldError("password", "Password is required"))
    return errors


def validate_task_title(title: Optional[str]) -> Optional[FieldError]:
    if not title or not title.strip():
        return FieldError("title", "Title is required")
    return None
