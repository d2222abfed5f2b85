"""
Pydantic schemas for the Task Manager API.

Wire format is camelCase (``fullName``, ``dueDate`` …); Python attributes
stay snake_case.  Defaults for ``status`` / ``priority`` are applied here,
when the request body is parsed, not at the database layer.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Auth / profile
# ═══════════════════════════════════════════════════════════════════════════════


class SignupRequest(CamelModel):
    # Missing fields are reported by utils.validators, not by pydantic.
    full_name: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(CamelModel):
    email: str = ""
    password: str = ""


class ProfileUpdateRequest(CamelModel):
    full_name: str = ""


class ChangePasswordRequest(CamelModel):
    old_password: str = ""
    new_password: str = ""


class UserOut(CamelModel):
    id: uuid.UUID
    full_name: str
    email: str


class ProfileOut(UserOut):
    created_at: datetime


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserOut


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserOut


class MessageResponse(CamelModel):
    message: str


# ═══════════════════════════════════════════════════════════════════════════════
# Tasks
# ═══════════════════════════════════════════════════════════════════════════════


class TaskCreate(CamelModel):
    title: str = ""
    description: Optional[str] = ""
    status: Optional[TaskStatus] = TaskStatus.PENDING
    priority: Optional[TaskPriority] = TaskPriority.MEDIUM
    due_date: Optional[date] = None

    @field_validator("status", mode="after")
    @classmethod
    def _default_status(cls, value: Optional[TaskStatus]) -> TaskStatus:
        return value or TaskStatus.PENDING

    @field_validator("priority", mode="after")
    @classmethod
    def _default_priority(cls, value: Optional[TaskPriority]) -> TaskPriority:
        return value or TaskPriority.MEDIUM


class TaskUpdate(CamelModel):
    """
    Full replacement of the editable fields.

    ``status`` / ``priority`` left out of the body keep their stored value;
    ``dueDate`` left out (or null) clears the due date.
    """

    title: str = ""
    description: Optional[str] = ""
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None


class TaskOut(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[date] = None
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class TaskResponse(CamelModel):
    message: str
    task: TaskOut


class DashboardStats(CamelModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0


class HealthResponse(CamelModel):
    message: str
    database: str
    timestamp: datetime
