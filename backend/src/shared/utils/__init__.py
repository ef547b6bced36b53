"""
Shared Utilities

Usage:
======
    from src.shared.utils import SecurityUtils
"""

from src.shared.utils.security import SecurityUtils

__all__ = [
    "SecurityUtils",
]
