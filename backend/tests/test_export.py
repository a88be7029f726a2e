"""Tests for the plain-text session export."""
from datetime import date, datetime, timezone

from coachloop.schemas import ActionItem, ActionItemStatus, CoachingSession
from coachloop.services.export import export_filename, format_session_export


def _session():
    return CoachingSession(
        id="s1",
        team_member_id="tm1",
        team_member_name="Ada Lovelace",
        session_date=datetime(2024, 3, 1, 9, tzinfo=timezone.utc),
        transcript="...",
        growth_themes=["Ownership"],
        skills_to_develop=["Delegation"],
        suggested_coaching_questions=["What would you hand off?"],
        action_items=[
            ActionItem(id="a1", description="Write plan", due_date=date(2024, 3, 8)),
            ActionItem(id="a2", description="Pair on review", status=ActionItemStatus.DONE),
        ],
    )


def test_export_text():
    text = format_session_export(_session())
    assert text.startswith("CoachLoop Session Summary\n=========================\n\n")
    assert "Team Member: Ada Lovelace\nSession Date: 2024-03-01\n" in text
    assert "Key Growth Themes:\n-------------------------\n- Ownership\n" in text
    assert "Skills to Develop:\n-------------------------\n- Delegation\n" in text
    assert "- What would you hand off?\n" in text
    assert "- [open] Write plan (Due: 2024-03-08)\n" in text
    assert "- [done] Pair on review\n" in text


def test_export_with_empty_sections():
    session = _session().model_copy(update={"action_items": [], "growth_themes": []})
    text = format_session_export(session)
    assert "Action Items:\n-------------------------\n\n" in text


def test_export_filename():
    assert export_filename(_session()) == "coachloop_insights_ada_lovelace_2024-03-01.txt"
