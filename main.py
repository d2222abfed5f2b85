"""
Task Manager API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from auth.jwt import TokenSigner
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import Database

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio", "aiosqlite"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Connecting to database…")
        await app.state.db.connect(create_tables=settings.auto_create_tables)
        logger.info("Application ready to accept requests.")
        try:
            yield
        finally:
            await app.state.db.dispose()
            logger.info("Shutdown complete.")

    app = FastAPI(
        title="Task Manager API",
        version="1.0.0",
        description="Personal task management with per-user data isolation.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = Database(settings.database_url, echo=settings.database_echo)
    app.state.token_signer = TokenSigner(settings.jwt_secret, settings.jwt_expiry_seconds)

    if not settings.is_production and settings.jwt_secret == Settings.model_fields["jwt_secret"].default:
        logger.warning("JWT_SECRET is the development default; set it before deploying.")

    register_middleware(app, settings)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
