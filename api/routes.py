"""
REST API routes — tasks, dashboard, health.

Every task route takes the ``AuthenticatedUser`` produced by the auth gate
and passes its ``user_id`` to the repository as the owner scope.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session, get_task_repository
from auth.dependencies import AuthenticatedUser, get_current_user
from database.models import Task
from database.tasks import TaskRepository
from utils.errors import ValidationError
from utils.schemas import (
    DashboardStats,
    HealthResponse,
    MessageResponse,
    TaskCreate,
    TaskOut,
    TaskPriority,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)
from utils.validators import FieldError, validate_task_title

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_filter(value: Optional[str], enum_cls, field: str):
    """``None``, empty and ``"all"`` mean no filter."""
    if value is None or value == "" or value == "all":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            errors=[FieldError(field, f"Invalid {field}; expected one of: {allowed}, all")]
        ) from None


def _require_title(title: str) -> None:
    error = validate_task_title(title)
    if error:
        raise ValidationError(errors=[error])


# ── Health ─────────────────────────────────────────────────────────────


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health(request: Request) -> Dict[str, Any]:
    connected = await request.app.state.db.ping()
    return {
        "message": "Server is running",
        "database": "Connected" if connected else "Disconnected",
        "timestamp": datetime.now(timezone.utc),
    }


# ── Tasks ──────────────────────────────────────────────────────────────


@router.get("/tasks", response_model=List[TaskOut], tags=["tasks"])
async def list_tasks(
    status_filter: Optional[str] = Query(None, alias="status"),
    priority_filter: Optional[str] = Query(None, alias="priority"),
    current: AuthenticatedUser = Depends(get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> List[Task]:
    status_value = _parse_filter(status_filter, TaskStatus, "status")
    priority_value = _parse_filter(priority_filter, TaskPriority, "priority")
    rows = await tasks.list(current.user_id, status=status_value, priority=priority_value)
    logger.debug("Fetched %d tasks for user %s", len(rows), current.user_id)
    return rows


@router.get("/tasks/{task_id}", response_model=TaskOut, tags=["tasks"])
async def get_task(
    task_id: str,
    current: AuthenticatedUser = Depends(get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> Task:
    return await tasks.get(current.user_id, task_id)


@router.post(
    "/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["tasks"],
)
async def create_task(
    req: TaskCreate,
    session: AsyncSession = Depends(db_session),
    current: AuthenticatedUser = Depends(get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> Dict[str, Any]:
    _require_title(req.title)
    task = await tasks.create(current.user_id, req.model_dump())
    await session.commit()
    return {"message": "Task created successfully", "task": task}


@router.put("/tasks/{task_id}", response_model=TaskResponse, tags=["tasks"])
async def update_task(
    task_id: str,
    req: TaskUpdate,
    session: AsyncSession = Depends(db_session),
    current: AuthenticatedUser = Depends(get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> Dict[str, Any]:
    _require_title(req.title)
    fields = req.model_dump()
    # Omitted status / priority keep their stored value; due_date is always replaced.
    if fields["status"] is None:
        del fields["status"]
    if fields["priority"] is None:
        del fields["priority"]
    task = await tasks.update(current.user_id, task_id, fields)
    await session.commit()
    return {"message": "Task updated successfully", "task": task}


@router.delete("/tasks/{task_id}", response_model=MessageResponse, tags=["tasks"])
async def delete_task(
    task_id: str,
    session: AsyncSession = Depends(db_session),
    current: AuthenticatedUser = Depends(get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> Dict[str, Any]:
    await tasks.delete(current.user_id, task_id)
    await session.commit()
    return {"message": "Task deleted successfully"}


# ── Dashboard ──────────────────────────────────────────────────────────


@router.get("/dashboard/stats", response_model=DashboardStats, tags=["dashboard"])
async def dashboard_stats(
    current: AuthenticatedUser = Depends(get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> Dict[str, int]:
    counts = await tasks.stats(current.user_id)
    stats = {"total_tasks": sum(counts.values())}
    for task_status, count in counts.items():
        if task_status is TaskStatus.COMPLETED:
            stats["completed_tasks"] = count
        elif task_status is TaskStatus.PENDING:
            stats["pending_tasks"] = count
        elif task_status is TaskStatus.IN_PROGRESS:
            stats["in_progress_tasks"] = count
        else:
            raise AssertionError(f"unhandled task status {task_status!r}")
    logger.debug("Dashboard stats for user %s: %s", current.user_id, stats)
    return stats
