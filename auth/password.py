"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  The ``*_async`` variants push the
(deliberately slow) bcrypt work onto a worker thread.
"""

from __future__ import annotations

import asyncio

import bcrypt

DEFAULT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt (fresh salt on every call)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return await asyncio.to_thread(hash_password, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
