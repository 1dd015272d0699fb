"""
FastAPI application for the NU Schedule API
Provides endpoints for courses, sections, student accounts and schedules
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from ..core.cache import ResponseCache
from ..core.config import Settings, get_settings
from ..database.base import Storage
from ..models.schema import HealthCheck
from ..pipelines.seed import SeedError, seed_from_file
from .routers import courses, schedules, students

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def run_startup_seed(app: FastAPI) -> None:
    """Seed the catalog if it is empty; failures only warn"""
    settings: Settings = app.state.settings
    try:
        report = seed_from_file(
            app.state.storage,
            settings.seed_csv_path,
            email_domain=settings.professor_email_domain,
        )
    except SeedError as e:
        logger.warning(f"Failed to seed database: {e}")
        return

    if not report.skipped and app.state.cache is not None:
        await app.state.cache.invalidate("api:/api/courses*")


def create_app(
    settings: Optional[Settings] = None, storage: Optional[Storage] = None
) -> FastAPI:
    """
    Build the API.

    Args:
        settings: Defaults to the environment-backed settings
        storage: Pre-built storage (tests); otherwise one is created for
            settings.database_url and disposed on shutdown
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_storage = storage is None
        app.state.storage = storage or Storage(settings.database_url, echo=settings.debug)
        app.state.cache = None
        if settings.redis_url:
            app.state.cache = await ResponseCache.connect(settings.redis_url)

        # Unreachable storage here is fatal to startup
        app.state.storage.create_tables()
        if settings.reset_db_on_start:
            app.state.storage.reset_course_data()
        if settings.seed_on_startup:
            await run_startup_seed(app)

        yield

        if app.state.cache is not None:
            await app.state.cache.close()
        if owns_storage:
            app.state.storage.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="API for managing student schedules and course registration",
        version=settings.version,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
        expose_headers=["Content-Length", "Authorization"],
        max_age=86400,
    )

    @app.get("/", summary="/", description="API root endpoint. Returns welcome message.", tags=["General"])
    async def root():
        return {"message": "Welcome to NU Schedule API"}

    @app.get(
        "/api/health",
        response_model=HealthCheck,
        summary="/api/health",
        description="Returns system health status including database connectivity.",
        tags=["System Health"],
    )
    async def health_check(request: Request):
        db_health = request.app.state.storage.check_health()
        status = "healthy" if db_health["status"] == "healthy" else "unhealthy"
        return {"status": status, "database": db_health, "api_version": settings.version}

    @app.get(
        "/api/db-status",
        summary="/api/db-status",
        description="Returns database connection pool status.",
        tags=["System Health"],
    )
    async def database_status(request: Request):
        db_health = request.app.state.storage.check_health()
        if db_health["status"] != "healthy":
            raise HTTPException(
                status_code=500,
                detail=f"Database status check failed: {db_health.get('error')}",
            )
        return db_health

    app.include_router(courses.router)
    app.include_router(students.router)
    app.include_router(schedules.router)

    return app


app = create_app()
