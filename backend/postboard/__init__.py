"""
Postboard Backend — Application Package
=========================================

What: CRUD service for blog-style posts backed by an async SQL store.
Who:  Imported by uvicorn (postboard.main:app), pytest, and PostsClient users.

Layering:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     PostService (response mapping)  │  ← not-found → 404, logging
    ├─────────────────────────────────────┤
    │     PostStore (store adapter)       │  ← one statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
