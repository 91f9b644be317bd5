"""
Noteful Backend — Application Package Initializer
==================================================

What: Marks the `noteful` directory as a Python package.
Why:  Enables module imports like `from noteful.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The notes API is a thin call chain of layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← Status codes, headers
    ├─────────────────────────────────────┤
    │     Services (Request Handling)     │  ← Validation, resolve-or-404, sanitize
    ├─────────────────────────────────────┤
    │    Repositories (Storage Access)    │  ← Select / insert / update / delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Each layer only talks to the one below it. The repository and the
    sanitizer are handed to the service at construction, so the service can be
    tested with fakes and neither has to be looked up from global state.
"""

__version__ = "1.0.0"
