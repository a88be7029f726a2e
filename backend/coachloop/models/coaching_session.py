"""Coaching session: transcript, model insights, and the editable action-item list."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coachloop.db.session import Base
from coachloop.models.base import JSONDocument, TimestampMixin, UUIDPrimaryKeyMixin


class CoachingSessionRecord(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "coaching_sessions"

    team_member_id: Mapped[str] = mapped_column(
        ForeignKey("team_members.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    # Snapshot of the name at creation time; not re-synced
    team_member_name: Mapped[str] = mapped_column(String(255), nullable=False)
    session_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    transcript: Mapped[str] = mapped_column(Text, nullable=False)

    # Written once at creation
    growth_themes: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)
    skills_to_develop: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)
    suggested_coaching_questions: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)

    # Sub-records {id, description, status, due_date}; older rows may hold plain strings.
    # Replaced as a whole, never merged per item.
    action_items: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)

    team_member: Mapped["TeamMemberRecord"] = relationship("TeamMemberRecord", back_populates="sessions")
