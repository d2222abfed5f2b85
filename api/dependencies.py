"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import Settings
from database.session import get_db_session
from database.tasks import TaskRepository
from database.users import UserStore


async def db_session(session: AsyncSession = Depends(get_db_session)) -> AsyncGenerator[AsyncSession, None]:
    """Re-export so routes import from a single place."""
    yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return UserStore(session)


def get_task_repository(session: AsyncSession = Depends(db_session)) -> TaskRepository:
    return TaskRepository(session)
