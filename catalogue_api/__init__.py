"""
Catalogue API - Application Package Initializer
================================================

What: Marks the `catalogue_api` directory as a Python package.
Who:  Imported by uvicorn (`catalogue_api.main:app`), Alembic and pytest.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Repository + Export)    │  ← Queries, integrity rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Injected async store client
    └─────────────────────────────────────┘

    Routes translate HTTP to service calls; services own every query and
    raise application exceptions that the handlers in `main.py` map to
    status codes.
"""

__version__ = "1.0.0"
