"""
MyGram Backend - Application Package Initializer
=================================================

What: Marks the `mygram` directory as a Python package.
Who:  Imported by uvicorn (`mygram.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Ownership-checked CRUD) │  ← Validation, authorization
    ├─────────────────────────────────────┤
    │   Repositories (Persistence Port)   │  ← CRUD over the four entities
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Engine/Sessions)   │  ← Async SQLAlchemy
    └─────────────────────────────────────┘

    Identity (JWT) and password hashing live in `mygram.security` and are
    injected into services by the route layer.
"""

__version__ = "1.0.0"
