"""
StackIt Backend: Application Package
=====================================

What: The Q&A service package (questions, answers, votes, notifications).
Who:  Imported by uvicorn (`stackit.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Query, Detail, Votes)   │  ← Pure domain rules + orchestration
    ├─────────────────────────────────────┤
    │    Repositories (memory | SQL)      │  ← {list, get_by_id, append, update}
    ├─────────────────────────────────────┤
    │   Schemas (pydantic) / Models (ORM) │
    └─────────────────────────────────────┘

    The filter/sort layer and the question aggregate never import a storage
    backend; they operate on the pydantic entities in `stackit.schemas.entities`.
"""

__version__ = "1.0.0"
