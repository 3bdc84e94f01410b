import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv


# Settings are read on import below, so the project .env must be loaded first
load_dotenv(Path(__file__).parent.parent / ".env")

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import OperationalError

from .activity.router import router as activity_router
from .analytics.router import router as analytics_router
from .auth.router import router as auth_router
from .behavior.router import router as behavior_router
from .config.logging import setup_logging
from .config.settings import get_settings
from .courses.router import router as courses_router
from .database.init import init_database
from .database.session import async_session_maker, engine
from .middleware.error_handlers import register_exception_handlers
from .middleware.security import SimpleSecurityMiddleware, limiter
from .personalisation.router import router as personalisation_router
from .personalisation.service import load_catalog


setup_logging(get_settings().LOG_LEVEL)
logger = logging.getLogger(__name__)


def _register_routers(app: FastAPI) -> None:
    """Mount the feature routers under /api/v1."""
    app.include_router(auth_router)
    app.include_router(courses_router)
    app.include_router(activity_router)
    app.include_router(behavior_router)
    app.include_router(analytics_router)  # Dashboards and aggregates
    app.include_router(personalisation_router)


STARTUP_DB_ATTEMPTS = 5


async def _startup_database() -> None:
    """Create missing tables, waiting for the database to come up."""
    delay = 1  # seconds, doubled after each failed attempt

    for attempt in range(1, STARTUP_DB_ATTEMPTS + 1):
        try:
            await init_database(engine)
        except OperationalError:
            if attempt == STARTUP_DB_ATTEMPTS:
                logger.exception(f"Database unavailable after {attempt} attempts")
                raise
            logger.warning(f"Database not ready (attempt {attempt}/{STARTUP_DB_ATTEMPTS}), retrying in {delay}s")
            await asyncio.sleep(delay)
            delay *= 2
        else:
            logger.info("Database ready")
            return


async def _startup_validation() -> None:
    """Check the stored feedback templates."""
    strict = get_settings().FEEDBACK_STRICT_RANGES
    async with async_session_maker() as session:
        # Raises OverlappingFeedbackRangesError in strict mode
        catalog = await load_catalog(session, strict=strict)
    logger.info(f"Loaded {len(catalog.templates)} feedback templates (strict ranges: {strict})")


async def _shutdown_cleanup() -> None:
    """Close pooled database connections."""
    await engine.dispose()
    logger.info("Database engine disposed, shutdown complete")


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup checks before serving, cleanup after."""
    await _startup_database()
    await _startup_validation()

    yield

    await _shutdown_cleanup()


def create_app() -> FastAPI:
    """Build the API application with middleware, error handlers and routers."""
    settings = get_settings()

    app = FastAPI(
        title="Academy Analytics API",
        description="Course content, learner behaviour tracking and analytics dashboards",
        version="0.1.0",
        debug=settings.DEBUG,
        lifespan=lifespan if settings.ENVIRONMENT != "test" else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Security headers
    app.add_middleware(SimpleSecurityMiddleware)

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Check application health status."""
        return {"status": "healthy"}

    _register_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
