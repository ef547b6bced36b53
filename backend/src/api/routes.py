"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live      → Health check endpoints (root level)
    /api/v1/auth                → Signup, login, refresh, current user
    /api/v1/users               → Profiles, password reset, activation
    /api/v1/items               → Wardrobe items
    /api/v1/coordinates         → Outfits, timeline, likes
    /api/v1/comments            → Comments on coordinates
    /api/v1/follow              → Follow edges
    /api/v1/blocks              → Block edges
    /api/v1/notifications       → Notification inbox

Usage:
======
    from src.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from src.api.handlers import (
    auth_handler,
    block_handler,
    comment_handler,
    coordinate_handler,
    follow_handler,
    health_handler,
    item_handler,
    notification_handler,
    user_handler,
)
from src.config.settings import settings


API_ROUTERS = (
    (auth_handler.router, "/auth", "Authentication"),
    (user_handler.router, "/users", "Users"),
    (item_handler.router, "/items", "Items"),
    (coordinate_handler.router, "/coordinates", "Coordinates"),
    (comment_handler.router, "/comments", "Comments"),
    (follow_handler.router, "/follow", "Follow"),
    (block_handler.router, "/blocks", "Blocks"),
    (notification_handler.router, "/notifications", "Notifications"),
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    for router, prefix, tag in API_ROUTERS:
        app.include_router(
            router,
            prefix=f"{settings.API_PREFIX}{prefix}",
            tags=[tag],
        )
