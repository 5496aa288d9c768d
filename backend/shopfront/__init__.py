"""
Shopfront Backend: Application Package
======================================

What: Product catalogue API (products, categories, tags) over a relational store.
Who:  Imported by uvicorn (shopfront.main:app), Alembic, the seed loader and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← path/body extraction, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, store calls, error mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async engine + per-request sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
