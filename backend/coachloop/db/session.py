"""
Engine and sessions for the coaching store.

Postgres in deployment; SQLite (file or in-memory) for local runs and tests.
Both objects are created on first use so importing this module never connects.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from coachloop.core.config import Settings, get_settings

Base = declarative_base()

_engine = None
_SessionLocal = None


def _engine_options(settings: Settings) -> dict[str, Any]:
    if settings.is_sqlite():
        # Sync endpoints run on worker threads; the SQLite pool takes no size arguments
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_size": settings.pool_size, "max_overflow": settings.max_overflow}


def get_engine():
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(settings.database_url, echo=False, **_engine_options(settings))
    return _engine


def get_session_factory():
    global _SessionLocal
    if _SessionLocal is None:
        # Rows are translated to schemas after the repositories commit
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)
    return _SessionLocal


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """One store session per request or script step.

    Commits whatever is still pending on exit, rolls back if the block raises.
    """
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
