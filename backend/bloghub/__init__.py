"""
BlogHub Backend

Multi-user blogging platform API: accounts, posts, comments and likes.

Package Structure:
==================
    bloghub/
    ├── api/        ← FastAPI application
    ├── scripts/    ← Operational command line tools
    ├── shared/     ← Models, repositories, services, schemas
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn bloghub.api.main:app --reload

    # Promote the first administrator
    python -m bloghub.scripts.promote_admin admin@example.com
"""
