"""
Portfolio API — Package Initializer
====================================

What: The backend for a single-photographer portfolio site.
Who:  Imported by uvicorn (`portfolio.main:app`), Alembic and pytest.

Layout:

    ┌─────────────────────────────────────┐
    │   Routes (public / admin / health)  │  ← HTTP surface under /api
    ├─────────────────────────────────────┤
    │   Dependencies (auth gate, session) │  ← FastAPI Depends()
    ├─────────────────────────────────────┤
    │   Services (projects, bookings,     │  ← Data access + collaborators
    │   identity, media signature)        │
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database                          │  ← Async engine built in lifespan
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
