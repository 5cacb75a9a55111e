"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import load_config
from core.health import HealthChecker, check_event_loop, create_clock_check, create_entropy_check
from internal.logging import LogLevel, StructuredLogger
from service.routes import countries, health, ids
from utils.crash import create_async_handler

VERSION = "1.0.0"


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    logger = StructuredLogger.configure(min_level=LogLevel[config.logging.level.upper()])
    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("entropy", create_entropy_check(), critical=True)
    health_checker.register("clock", create_clock_check(), critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application starting", version=VERSION)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger))
        yield
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="Country UUIDv8",
        version=VERSION,
        description="issue and inspect country-tagged UUIDv8 identifiers",
        lifespan=lifespan,
    )

    ids.init(config.issuer)
    health.init(health_checker)

    app.include_router(ids.router)
    app.include_router(countries.router)
    app.include_router(health.router)

    return app
