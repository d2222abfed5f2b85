"""
Application error taxonomy.

Each error carries the HTTP status it maps to; ``api.errors`` renders them.
"""

from __future__ import annotations

from typing import Iterable, Optional

from utils.validators import FieldError


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"

    def __init__(self, message: Optional[str] = None, errors: Iterable[FieldError] = ()) -> None:
        self.errors = list(errors)
        if message is None and self.errors:
            message = self.errors[0].message
        super().__init__(message)


class DuplicateEmailError(AppError):
    status_code = 400
    default_message = "User already exists with this email"


class Unauthenticated(AppError):
    status_code = 401
    default_message = "Token is not valid"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"
