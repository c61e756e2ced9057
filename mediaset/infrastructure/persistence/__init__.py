"""
Couche de persistance SQLite (SQLModel).
"""

from mediaset.infrastructure.persistence.database import get_engine, get_session, init_db

__all__ = ["get_engine", "get_session", "init_db"]
