"""
Configuration Module

Usage:
======
    from src.config.settings import settings

    db_url = settings.DATABASE_URL
    per_user = settings.TIMELINE_PER_USER_LIMIT
"""

from src.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
