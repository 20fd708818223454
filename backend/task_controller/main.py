"""Task Controller API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskControllerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and its pool disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema creation is opt-in (database_create_schema) for local development only
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from task_controller.api.error_handlers import register_error_handlers
from task_controller.api.routes import health, tags, tasks
from task_controller.config import get_settings
from task_controller.infrastructure.database import init_db
from task_controller.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.sqlalchemy_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_recycle=settings.database_pool_recycle_seconds,
        pool_timeout=settings.database_pool_timeout_seconds,
        connect_args=settings.connect_args,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info("Task Controller API started")
    yield
    logger.info("Task Controller API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Task Controller API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(tasks.router)
app.include_router(tags.router)

register_error_handlers(app)
