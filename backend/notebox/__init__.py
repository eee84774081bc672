"""
Notebox Backend — Application Package Initializer
==================================================

What: Marks the `notebox` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Auth + Note operations) │  ← Orchestration
    ├─────────────────────────────────────┤
    │      Stores (entity-scoped access)  │  ← find / insert / update / delete
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services never touch the database directly. They receive store handles
    at construction, so tests can hand them in-memory stores instead.
"""

__version__ = "1.0.0"
