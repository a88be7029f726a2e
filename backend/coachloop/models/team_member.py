"""Team member: the person being coached. Created once, never renamed or deleted."""
from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coachloop.db.session import Base
from coachloop.models.base import CreatedAtMixin, UUIDPrimaryKeyMixin


class TeamMemberRecord(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "team_members"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    sessions: Mapped[list] = relationship("CoachingSessionRecord", back_populates="team_member")
