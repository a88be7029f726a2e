"""Digest of recent sessions that is fed back into the extraction prompt."""
from __future__ import annotations

from typing import Optional, Sequence

from coachloop.core.timeutil import as_utc
from coachloop.schemas import CoachingSession
from coachloop.services.action_items import action_item_description


def _non_blank(values: Sequence[str]) -> list[str]:
    return [v.strip() for v in values or [] if v and v.strip()]


def _session_line(session: CoachingSession) -> Optional[str]:
    parts: list[str] = []
    themes = _non_blank(session.growth_themes)
    if themes:
        parts.append(f"Growth Themes: {', '.join(themes)}")
    skills = _non_blank(session.skills_to_develop)
    if skills:
        parts.append(f"Skills to Develop: {', '.join(skills)}")
    descriptions = [
        text
        for text in (action_item_description(item) for item in session.action_items or [])
        if text
    ]
    if descriptions:
        parts.append(f"Previous Action Items: {', '.join(descriptions)}")
    if not parts:
        return None
    date_str = as_utc(session.session_date).date().isoformat()
    return f"On {date_str}: {'; '.join(parts)}."


def format_historical_context(sessions: Sequence[CoachingSession]) -> Optional[str]:
    """
    One line per session that has themes, skills or action items, in the
    order given (callers pass newest first). Returns None rather than an
    empty string when there is nothing to say.
    """
    if not sessions:
        return None
    lines = [line for line in (_session_line(s) for s in sessions) if line]
    return "\n".join(lines) if lines else None
