"""
Biodex Backend — Application Package Initializer
=================================================

What: Species and profile registry with owner-gated record editing.
Who:  Imported by uvicorn (`biodex.main:app`), Alembic, pytest and the card component.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Cards (client-side component)   │  ← RecordEditCard + collaborators
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Ownership checks, CRUD
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The card never touches the database directly. It talks to a DataStore,
    which is either the REST API (HttpDataStore) or the service layer
    (SqlDataStore). Both paths end in the same ownership-enforcing service.
"""

__version__ = "1.0.0"
