"""
Coaching session repository.

Owns the translation between the stored row and the domain shape:
session dates are stored as timestamps, action items as a JSON list of
{id, description, status, due_date} sub-records (no owner; the session's
team_member_name is the owner label on read).
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from coachloop.core.errors import NotFoundFailure, ValidationFailure
from coachloop.core.timeutil import as_utc
from coachloop.models import CoachingSessionRecord
from coachloop.repositories.store import store_errors
from coachloop.schemas import ActionItem, CoachingSession, CoachingSessionResult
from coachloop.services.action_items import normalize_action_items

logger = logging.getLogger("coachloop.repositories.sessions")


def action_item_to_record(item: ActionItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "description": item.description,
        "status": item.status.value,
        "due_date": item.due_date.isoformat() if item.due_date else None,
    }


def _strings(values: Any) -> list[str]:
    # JSON columns are not type-checked by the store; keep the text entries only
    if not isinstance(values, list):
        return []
    return [v for v in values if isinstance(v, str)]


def _to_session(row: CoachingSessionRecord) -> CoachingSession:
    return CoachingSession(
        id=str(row.id),
        team_member_id=str(row.team_member_id),
        team_member_name=row.team_member_name,
        session_date=as_utc(row.session_date),
        transcript=row.transcript,
        growth_themes=_strings(row.growth_themes),
        skills_to_develop=_strings(row.skills_to_develop),
        suggested_coaching_questions=_strings(row.suggested_coaching_questions),
        action_items=normalize_action_items(row.action_items, row.team_member_name, str(row.id)),
        created_at=as_utc(row.created_at) if row.created_at else None,
    )


def _require_id(value: Optional[str], label: str) -> str:
    if not value or not value.strip():
        raise ValidationFailure([f"{label} must be a non-empty string."])
    return value.strip()


def list_sessions(
    db: Session,
    team_member_id: str,
    limit: Optional[int] = None,
) -> list[CoachingSession]:
    """Sessions of one team member, newest session date first; at most ``limit`` if given."""
    member_id = _require_id(team_member_id, "Team member ID")
    if limit is not None and limit <= 0:
        raise ValidationFailure(["Session limit must be a positive integer."])
    stmt = (
        select(CoachingSessionRecord)
        .where(CoachingSessionRecord.team_member_id == member_id)
        .order_by(
            CoachingSessionRecord.session_date.desc(),
            CoachingSessionRecord.created_at.desc(),
        )
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    with store_errors(db, "fetch coaching sessions"):
        rows = db.execute(stmt).scalars().all()
    return [_to_session(r) for r in rows]


def get_session(db: Session, session_id: str) -> Optional[CoachingSession]:
    sid = _require_id(session_id, "Session ID")
    with store_errors(db, "fetch coaching session"):
        row = db.get(CoachingSessionRecord, sid)
    return _to_session(row) if row is not None else None


def create_session(db: Session, session: CoachingSessionResult, team_member_id: str) -> str:
    """Insert the whole session document in one write; returns the new id."""
    member_id = _require_id(team_member_id, "Team member ID")
    if session is None:
        raise ValidationFailure(["Session data cannot be empty."])
    with store_errors(db, "add coaching session"):
        row = CoachingSessionRecord(
            team_member_id=member_id,
            team_member_name=session.team_member_name,
            session_date=as_utc(session.session_date),
            transcript=session.transcript,
            growth_themes=list(session.growth_themes),
            skills_to_develop=list(session.skills_to_develop),
            suggested_coaching_questions=list(session.suggested_coaching_questions),
            action_items=[action_item_to_record(i) for i in session.action_items],
        )
        db.add(row)
        db.commit()
        session_id = str(row.id)
    logger.info("Coaching session created id=%s team_member_id=%s", session_id, member_id)
    return session_id


def update_session_action_items(
    db: Session,
    session_id: str,
    items: Optional[Sequence[ActionItem]],
) -> None:
    """Replace the session's whole action-item list in a single column write.

    An empty sequence clears the list.
    """
    sid = _require_id(session_id, "Session ID")
    if items is None:
        raise ValidationFailure(["Action items are required."])
    records = [action_item_to_record(i) for i in items]
    with store_errors(db, "update action items"):
        row = db.get(CoachingSessionRecord, sid)
        if row is None:
            raise NotFoundFailure(f"Coaching session {sid} not found.")
        row.action_items = records
        db.commit()
    logger.info("Action items replaced session_id=%s count=%d", sid, len(records))
