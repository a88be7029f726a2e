"""Team member repository: create, list by name, fetch by id."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from coachloop.core.errors import ValidationFailure
from coachloop.core.timeutil import as_utc
from coachloop.models import TeamMemberRecord
from coachloop.repositories.store import store_errors
from coachloop.schemas import TeamMember

logger = logging.getLogger("coachloop.repositories.team_members")


def _to_team_member(row: TeamMemberRecord) -> TeamMember:
    return TeamMember(
        id=str(row.id),
        name=row.name,
        created_at=as_utc(row.created_at) if row.created_at else None,
    )


def create_team_member(db: Session, name: str) -> TeamMember:
    """Insert a team member with the trimmed name; committed before returning."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationFailure(["Team member name must be a non-empty string."])
    with store_errors(db, "add team member"):
        row = TeamMemberRecord(name=cleaned)
        db.add(row)
        db.commit()
        db.refresh(row)
    logger.info("Team member created id=%s", row.id)
    return _to_team_member(row)


def list_team_members(db: Session) -> list[TeamMember]:
    with store_errors(db, "fetch team members"):
        rows = db.execute(
            select(TeamMemberRecord).order_by(TeamMemberRecord.name.asc())
        ).scalars().all()
    return [_to_team_member(r) for r in rows]


def get_team_member(db: Session, team_member_id: str) -> Optional[TeamMember]:
    if not team_member_id or not team_member_id.strip():
        raise ValidationFailure(["Team member ID must be a non-empty string."])
    with store_errors(db, "fetch team member"):
        row = db.get(TeamMemberRecord, team_member_id.strip())
    return _to_team_member(row) if row is not None else None
