# user_directory/adapters/api/main.py
"""
FastAPI application factory.

Intended usage:
    uvicorn user_directory.adapters.api.main:create_app --factory --port 3000
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_directory import __version__
from user_directory.adapters.api.errors import register_exception_handlers
from user_directory.adapters.api.routers import health, users
from user_directory.bootstrap import Components, build_components
from user_directory.shared.config import AppEnv, Settings, get_settings
from user_directory.shared.logging_config import configure_logging
from user_directory.shared.telemetry import instrument_fastapi, setup_telemetry

logger = structlog.get_logger()


def create_app(
    settings: Optional[Settings] = None,
    components: Optional[Components] = None,
) -> FastAPI:
    """
    Factory function to create the FastAPI application.

    When ``components`` is omitted they are built from ``settings`` and
    disposed on shutdown; components passed in stay owned by the caller.
    """
    settings = settings or (components.settings if components else get_settings())
    configure_logging(settings)

    owns_components = components is None
    components = components or build_components(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application Lifecycle Manager.
        Handles startup (Telemetry) and shutdown (connection pool).
        """
        setup_telemetry(settings)
        logger.info("app_startup", app=settings.APP_NAME, env=settings.APP_ENV.value, version=__version__)

        yield

        logger.info("app_shutdown")
        if owns_components:
            components.dispose()

    docs_enabled = settings.DOCS_ENABLED and settings.APP_ENV != AppEnv.PRODUCTION

    app = FastAPI(
        title="User Directory API",
        version=__version__,
        description="Layered CRUD service for user accounts (Hexagonal Architecture).",
        openapi_url="/openapi.json" if docs_enabled else None,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.user_repository = components.repository
    app.state.user_directory = components.service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    instrument_fastapi(app, settings)
    register_exception_handlers(app)

    @app.get("/", tags=["system"])
    def root() -> Dict[str, str]:
        return {"message": "User Directory API", "version": __version__}

    app.include_router(health.router)
    app.include_router(users.router, prefix=settings.api_root)

    return app
