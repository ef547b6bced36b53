"""
Business Logic Services

Services encapsulate business rules and coordinate between repositories.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ LocalImageStorage

Services should:
- Contain business rules (ownership, block gates, uniqueness)
- Coordinate multiple repositories on one session
- Open SAVEPOINTs for units that must be atomic on their own
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: signup, login, token refresh, activation, password reset
- UserService: profile and account management
- ItemService: wardrobe items, search, batch delete, statistics
- CoordinateService: coordinates, likes, timeline, statistics
- SocialService: comments, follows, blocks, notifications
"""

from src.shared.services.auth_service import AuthService
from src.shared.services.user_service import UserService
from src.shared.services.item_service import ItemService
from src.shared.services.coordinate_service import CoordinateService
from src.shared.services.social_service import SocialService

__all__ = [
    "AuthService",
    "UserService",
    "ItemService",
    "CoordinateService",
    "SocialService",
]
