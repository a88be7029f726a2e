"""Plain-text export of one session's insights."""
from __future__ import annotations

import re

from coachloop.core.timeutil import as_utc
from coachloop.schemas import CoachingSession

_RULE = "-" * 25


def _section(title: str, lines: list[str], rule: str = _RULE) -> str:
    body = "".join(f"- {line}\n" for line in lines)
    return f"{rule}\n{title}:\n{rule}\n{body}\n"


def format_session_export(session: CoachingSession) -> str:
    date_str = as_utc(session.session_date).date().isoformat()
    content = "CoachLoop Session Summary\n"
    content += "=========================\n\n"
    content += f"Team Member: {session.team_member_name}\n"
    content += f"Session Date: {date_str}\n\n"
    content += _section("Key Growth Themes", session.growth_themes)
    content += _section("Skills to Develop", session.skills_to_develop)
    content += _section(
        "Suggested Coaching Questions (for next 1:1)",
        session.suggested_coaching_questions,
        rule="-" * 45,
    )

    items = []
    for item in session.action_items:
        line = f"[{item.status.value}] {item.description}"
        if item.due_date:
            line += f" (Due: {item.due_date.isoformat()})"
        items.append(line)
    content += _section("Action Items", items)
    return content


def export_filename(session: CoachingSession) -> str:
    safe_name = re.sub(r"[^a-z0-9]", "_", session.team_member_name, flags=re.IGNORECASE).lower()
    date_str = as_utc(session.session_date).date().isoformat()
    return f"coachloop_insights_{safe_name}_{date_str}.txt"
