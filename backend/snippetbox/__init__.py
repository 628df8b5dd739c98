"""
Snippetbox — Application Package Initializer
=============================================

What: Marks the `snippetbox` directory as a Python package.
Who:  Imported by uvicorn (`snippetbox.main:app`), Alembic and pytest.

Architecture Note:
    The application follows a layered layout:

    ┌─────────────────────────────────────┐
    │     Routes + Templates (Web)        │  ← HTTP and HTML concerns only
    ├─────────────────────────────────────┤
    │  Forms + Validation (Input)         │  ← Decode and check form posts
    ├─────────────────────────────────────┤
    │   Services + Sessions (Logic)       │  ← Snippets, users, session state
    ├─────────────────────────────────────┤
    │   Models + Database (Persistence)   │  ← Async SQLAlchemy
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
