"""Failure kinds surfaced by the coaching workflows.

Every step maps whatever went wrong into one of these before it reaches a
router; routers translate them to HTTP status codes.
"""
from __future__ import annotations

from typing import Iterable, Optional


class CoachingError(Exception):
    """Base class; ``message`` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailure(CoachingError):
    """Bad caller input. Carries one message per violated field."""

    def __init__(self, issues: Iterable[str], message: Optional[str] = None) -> None:
        self.issues = list(issues)
        super().__init__(message or "; ".join(self.issues) or "Invalid input.")


class NotFoundFailure(CoachingError):
    pass


class ExtractionFailure(CoachingError):
    """The model call errored; ``message`` carries the underlying reason."""


class EmptyResultFailure(CoachingError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message
            or "AI processing returned no insights. The transcript might be too short or unclear."
        )


class PersistenceFailure(CoachingError):
    """Store read/write error. The message is generic; detail goes to the log."""
