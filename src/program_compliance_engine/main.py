"""Program compliance engine service entry point.

Initializes the FastAPI application with structured logging and mounts the
maturity router under /api/v1. The engine holds no connections, so startup
and shutdown only log.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from program_compliance_engine.api.router import get_settings, router
from program_compliance_engine.observability import configure_logging, get_logger
from program_compliance_engine.settings import Settings

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Compliance engine startup complete",
            service=settings.service_name,
            pillar_weight=settings.pillar_weight,
        )
        yield
        logger.info("Compliance engine shutdown complete", service=settings.service_name)

    app = FastAPI(title=settings.service_name, version=settings.version, lifespan=lifespan)
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings
    app.include_router(router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "service": settings.service_name}

    return app


app: FastAPI = create_app()
