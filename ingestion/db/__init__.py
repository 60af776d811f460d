"""Database utilities for the article store."""

from .models import ArticleRow, Base  # noqa: F401
from .session import get_engine, get_sessionmaker, session_scope  # noqa: F401

__all__ = [
    "ArticleRow",
    "Base",
    "get_engine",
    "get_sessionmaker",
    "session_scope",
]
