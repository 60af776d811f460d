"""Engine and session plumbing for the SQL article store.

One engine is kept per process and rebuilt when ``DATABASE_URL`` changes, so
tests pointing settings at a fresh sqlite file get a fresh engine.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ingestion.settings import Settings, get_settings

_ENGINE: Engine | None = None
_SESSIONMAKER: sessionmaker[Session] | None = None
_CURRENT_URL: str | None = None


def _connect_args(url: str) -> dict:
    # route handlers run in a threadpool; sqlite connections must be shareable
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


def get_engine(settings: Settings | None = None) -> Engine:
    """Engine for the configured article database."""
    global _ENGINE, _SESSIONMAKER, _CURRENT_URL

    config = settings or get_settings()
    if _ENGINE is None or _CURRENT_URL != config.database_url:
        _ENGINE = create_engine(config.database_url, future=True, connect_args=_connect_args(config.database_url))
        _SESSIONMAKER = sessionmaker(bind=_ENGINE, expire_on_commit=False, autoflush=False, future=True)
        _CURRENT_URL = config.database_url
    return _ENGINE


def get_sessionmaker(settings: Settings | None = None) -> sessionmaker[Session]:
    get_engine(settings)
    assert _SESSIONMAKER is not None  # for mypy
    return _SESSIONMAKER


@contextmanager
def session_scope(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """One repository call, one transaction: commit on success, roll back on error."""
    session = (factory or get_sessionmaker())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
