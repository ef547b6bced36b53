"""
Speadwear API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
    ┌──────────────────────────────────────────────────────────────┐
    │                        SPEADWEAR API                         │
    ├──────────────────────────────────────────────────────────────┤
    │  Middleware:  CORS → RequestLogging → Exception handlers     │
    │                              │                               │
    │                              ▼                               │
    │  Routers:  Health │ Auth │ Users │ Items │ Coordinates       │
    │            Comments │ Follow │ Blocks │ Notifications        │
    │                              │                               │
    │                              ▼                               │
    │  Dependencies:  DbSession │ CurrentUser │ Services           │
    │                                                              │
    │  Static:  /uploads  → UPLOAD_PATH (item/coordinate pictures) │
    └──────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection verified
3. Application serves requests
4. Application stops → lifespan shutdown
5. Database connection pool disposed

Usage:
======
    # Run with uvicorn
    uvicorn src.api.main:app --host 0.0.0.0 --port 8080 --reload

    # Or programmatically
    from src.api.main import create_application
    app = create_application()
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.config.settings import settings
from src.shared.db import init_db, close_db
from src.shared.core.logging import logger
from src.api.middleware import RequestLoggingMiddleware, setup_exception_handlers
from src.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify the database is reachable

    Shutdown:
    - Close database connections
    """
    logger.info(
        "Starting Speadwear API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()
    logger.info("Speadwear API started successfully")

    yield

    logger.info("Shutting down Speadwear API")
    await close_db()
    logger.info("Speadwear API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Fashion coordination and wardrobe sharing",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(RequestLoggingMiddleware)

    # Added last so it is the outermost layer
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # UPLOADED PICTURES
    # ═══════════════════════════════════════════════════════════════════════════

    os.makedirs(settings.UPLOAD_PATH, exist_ok=True)
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=settings.UPLOAD_PATH),
        name="uploads",
    )

    return app


# Create the application instance
app = create_application()
