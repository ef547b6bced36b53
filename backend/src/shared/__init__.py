"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, error kinds and exceptions
- Adapters: Picture storage

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← Local image storage
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← Password hashing and tokens

Usage:
======
    from src.shared.models import User, Coordinate
    from src.shared.repositories import UserRepository
    from src.shared.services import AuthService
    from src.shared.core import logger, SpeadwearException
"""
