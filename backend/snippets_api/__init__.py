"""
Snippets API — Application Package Initializer
===============================================

What: Marks the `snippets_api` directory as a Python package.
Who:  Imported by uvicorn (`snippets_api.main:app`), Alembic and pytest.

Architecture Note:
    The service is a thin REST layer over a relational store and an external
    identity provider:

    ┌─────────────────────────────────────┐
    │     Routes + Request Router         │  ← method/path → operation
    ├─────────────────────────────────────┤
    │  Snippet Service (Authorization)    │  ← visibility, ownership
    ├─────────────────────────────────────┤
    │  Filter Composer │ Error Translator │  ← list filters, public messages
    ├─────────────────────────────────────┤
    │   Snippet Store (SQLAlchemy async)  │  ← snippets ⟕ profiles
    └─────────────────────────────────────┘

    Every request is independent: identity is resolved from the bearer token,
    a store handle is built from a fresh session, and both are passed down
    explicitly to the operation being served.
"""

__version__ = "1.0.0"
