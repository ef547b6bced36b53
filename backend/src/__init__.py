"""
Speadwear Backend

Wardrobe items, outfit coordinates and the social layer around them.

Package Structure:
==================
    src/
    ├── api/        ← FastAPI application
    ├── shared/     ← Models, repositories, services, schemas
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn src.api.main:app --reload

    # Migrations (from backend/)
    alembic upgrade head
"""
