"""HTTP status for each failure kind."""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException

from coachloop.core.errors import (
    CoachingError,
    EmptyResultFailure,
    ExtractionFailure,
    NotFoundFailure,
    PersistenceFailure,
    ValidationFailure,
)

_STATUS = {
    ValidationFailure: 422,
    NotFoundFailure: 404,
    EmptyResultFailure: 422,
    ExtractionFailure: 502,
    PersistenceFailure: 500,
}


def status_for(error: Optional[CoachingError]) -> int:
    for kind, status in _STATUS.items():
        if isinstance(error, kind):
            return status
    return 500


def http_error(error: CoachingError) -> HTTPException:
    detail: object = error.message
    if isinstance(error, ValidationFailure):
        detail = {"message": error.message, "issues": error.issues}
    return HTTPException(status_code=status_for(error), detail=detail)
