"""SQLAlchemy models only; no business logic."""
from coachloop.models.base import CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin
from coachloop.models.coaching_session import CoachingSessionRecord
from coachloop.models.team_member import TeamMemberRecord

__all__ = [
    "CoachingSessionRecord",
    "CreatedAtMixin",
    "TeamMemberRecord",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
]
