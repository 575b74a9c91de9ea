"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Async engine owned by DatabaseSessionManager (infrastructure/database.py)
    - All sessions are async (AsyncSession)
"""
