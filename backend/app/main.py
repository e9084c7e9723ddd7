"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI

from app.config import get_settings
from app.application.services import IdentityService
from app.infrastructure.database import Base, engine
from app.infrastructure.database.repositories import SQLAlchemyUserRepository
from app.infrastructure.database.session import async_session_factory, sqlite_file_path
from app.infrastructure.logging.log_config import setup_logging
from app.presentation.api.error_handlers import register_error_handlers
from app.presentation.api.router import router as api_router
from app.presentation.middleware.cors import apply_cors

logger = logging.getLogger(__name__)


async def _seed_admin_users(identities: list[str]) -> None:
    """Ensure every configured admin identity exists with the admin role.

    Roles cannot be changed through the HTTP API, so this is the only way
    administrators come into being. Idempotent — safe on every startup.
    """
    if not identities:
        return
    try:
        async with async_session_factory() as session:
            service = IdentityService(SQLAlchemyUserRepository(session))
            for identity in identities:
                await service.ensure_admin(identity)
        logger.info("Seeded %d admin identities", len(identities))
    except Exception as exc:
        logger.warning("Could not seed admin users: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, seed admins, prepare storage."""
    settings = get_settings()
    setup_logging()

    # 1. Make sure a file-backed SQLite database has a directory to live in
    db_file = sqlite_file_path(settings.database_url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    # 2. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 3. Seed administrators
    await _seed_admin_users(settings.admin_identities)

    # 4. Ensure document storage directory exists
    Path(settings.storage_dir).mkdir(parents=True, exist_ok=True)

    logger.info("%s %s ready (env=%s)", settings.app_title, settings.app_version, settings.app_env)
    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    apply_cors(app, origins=settings.cors_origins)
    register_error_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=get_settings().app_env == "development",
    )
