"""
SQLAlchemy ORM models for users and their tasks.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, relationship

from utils.schemas import TaskPriority, TaskStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    full_name = Column(String(128), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(
        Enum(TaskStatus, name="task_status", native_enum=False, length=16,
             values_callable=_enum_values),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    priority = Column(
        Enum(TaskPriority, name="task_priority", native_enum=False, length=16,
             values_callable=_enum_values),
        nullable=False,
        default=TaskPriority.MEDIUM,
    )
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    owner = relationship("User", back_populates="tasks")

    __table_args__ = (
        Index("ix_tasks_owner_created", "owner_id", "created_at"),
    )
