"""
Blog API: Application Package Initializer
=========================================

What: Marks the `blog_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │      Routes (route table, HTTP)     │  ← parameter extraction, envelopes
    ├─────────────────────────────────────┤
    │     Services (blog operations)      │  ← validation, error conversion
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (storage handle)       │  ← engine + session factory
    └─────────────────────────────────────┘

    Routes never touch SQLAlchemy; services never build HTTP responses.
"""

__version__ = "1.0.0"
