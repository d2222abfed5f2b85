"""
Credential store — persistence for ``User`` rows.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from utils.errors import DuplicateEmailError

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, full_name: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises ``DuplicateEmailError`` when the email is taken, whether the
        caller's pre-check missed it or a concurrent signup won the race.
        """
        user = User(
            id=uuid.uuid4(),
            full_name=full_name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.info("Duplicate email rejected: %s", user.email)
            raise DuplicateEmailError() from exc
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def update_name(self, user_id: uuid.UUID, full_name: str) -> Optional[User]:
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(full_name=full_name.strip())
            .returning(User)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update_password_hash(self, user_id: uuid.UUID, password_hash: str) -> bool:
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(password_hash=password_hash)
            .returning(User.id)
        )
        return result.scalar_one_or_none() is not None
