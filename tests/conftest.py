"""
Shared fixtures: a throwaway SQLite database per test and an in-process
HTTP client bound to the ASGI app.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from config.settings import Settings
from database.session import Database
from main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret-0123456789abcdef0123456789",
        bcrypt_rounds=4,
        api_prefix="/api",
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.database_url)
    await db.connect(create_tables=True)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
