"""Store error translation shared by the repositories."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coachloop.core.errors import PersistenceFailure

logger = logging.getLogger("coachloop.repositories")


@contextmanager
def store_errors(db: Session, action: str) -> Generator[None, None, None]:
    """
    Roll back and re-raise store errors as PersistenceFailure.
    The underlying error is logged, never shown to the caller.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store error while trying to %s: %s", action, exc, exc_info=True)
        raise PersistenceFailure(f"Could not {action}.") from exc
