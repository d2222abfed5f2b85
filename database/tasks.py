"""
Task repository — every query is scoped to the owning user.

The owner filter is always part of the same SQL statement as the task id
(``WHERE id = :id AND owner_id = :owner``), so a task that exists under a
different owner behaves exactly like a task that does not exist.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Task, utcnow
from utils.errors import NotFound
from utils.schemas import TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = ("title", "description", "status", "priority", "due_date")


def parse_task_id(value: str | uuid.UUID) -> uuid.UUID:
    """Malformed ids are reported exactly like missing ones."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise NotFound("Task not found") from None


class TaskRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(
        self,
        owner_id: uuid.UUID,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> List[Task]:
        """All of the owner's tasks, newest first, optionally filtered."""
        stmt = select(Task).where(Task.owner_id == owner_id)
        if status is not None:
            stmt = stmt.where(Task.status == status)
        if priority is not None:
            stmt = stmt.where(Task.priority == priority)
        stmt = stmt.order_by(Task.created_at.desc(), Task.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, owner_id: uuid.UUID, task_id: str | uuid.UUID) -> Task:
        tid = parse_task_id(task_id)
        result = await self.session.execute(
            select(Task).where(Task.id == tid, Task.owner_id == owner_id)
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFound("Task not found")
        return task

    async def create(self, owner_id: uuid.UUID, fields: Dict[str, Any]) -> Task:
        now = utcnow()
        values = {k: v for k, v in fields.items() if k in _MUTABLE_FIELDS and v is not None}
        task = Task(
            id=uuid.uuid4(),
            owner_id=owner_id,
            title=values.pop("title").strip(),
            description=(values.pop("description", "") or "").strip(),
            status=values.pop("status", TaskStatus.PENDING),
            priority=values.pop("priority", TaskPriority.MEDIUM),
            due_date=values.pop("due_date", None),
            created_at=now,
            updated_at=now,
        )
        self.session.add(task)
        await self.session.flush()
        logger.info("Task %s created for user %s", task.id, owner_id)
        return task

    async def update(
        self,
        owner_id: uuid.UUID,
        task_id: str | uuid.UUID,
        fields: Dict[str, Any],
    ) -> Task:
        """
        Apply ``fields`` to the owner's task in one UPDATE … RETURNING.

        ``owner_id`` is never writable; unknown keys are ignored.
        """
        tid = parse_task_id(task_id)
        values = {k: v for k, v in fields.items() if k in _MUTABLE_FIELDS}
        if "title" in values:
            values["title"] = values["title"].strip()
        if "description" in values:
            values["description"] = (values["description"] or "").strip()
        values["updated_at"] = utcnow()

        result = await self.session.execute(
            update(Task)
            .where(Task.id == tid, Task.owner_id == owner_id)
            .values(**values)
            .returning(Task)
            .execution_options(populate_existing=True)
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFound("Task not found")
        logger.info("Task %s updated for user %s", tid, owner_id)
        return task

    async def delete(self, owner_id: uuid.UUID, task_id: str | uuid.UUID) -> None:
        tid = parse_task_id(task_id)
        result = await self.session.execute(
            delete(Task)
            .where(Task.id == tid, Task.owner_id == owner_id)
            .returning(Task.id)
        )
        if result.scalar_one_or_none() is None:
            raise NotFound("Task not found")
        logger.info("Task %s deleted for user %s", tid, owner_id)

    async def stats(self, owner_id: uuid.UUID) -> Dict[TaskStatus, int]:
        """Task counts per status for one owner; every status is present."""
        result = await self.session.execute(
            select(Task.status, func.count(Task.id))
            .where(Task.owner_id == owner_id)
            .group_by(Task.status)
        )
        counts = {status: 0 for status in TaskStatus}
        for status, count in result.all():
            counts[TaskStatus(status)] = count
        return counts
