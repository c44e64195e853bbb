"""
Shared Module

Everything below the HTTP layer, also used by the command line scripts:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- DB: Engine and session lifecycle

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database class (engine, sessions)
    ├── migrations/     ← Alembic environment and revisions
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    └── utils/          ← Passwords, tokens, slugs

Usage:
======
    from bloghub.shared.models import User, Post
    from bloghub.shared.repositories import PostRepository
    from bloghub.shared.services import AuthService
    from bloghub.shared.schemas import UserCreate, AuthResponse
    from bloghub.shared.core import logger, BlogHubException
"""
