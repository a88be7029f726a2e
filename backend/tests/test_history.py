"""Tests for the history digest fed into the extraction prompt."""
from datetime import datetime, timedelta, timezone

from coachloop.schemas import ActionItem, CoachingSession
from coachloop.services.history import format_historical_context


def _session(day, themes=(), skills=(), items=()):
    return CoachingSession(
        id=f"s-{day}",
        team_member_id="tm1",
        team_member_name="Ada",
        session_date=datetime(2024, 3, day, 15, 30, tzinfo=timezone.utc),
        transcript="...",
        growth_themes=list(themes),
        skills_to_develop=list(skills),
        action_items=[ActionItem(id=f"a{i}", description=d) for i, d in enumerate(items)],
    )


class TestFormatHistoricalContext:
    def test_no_sessions_gives_none(self):
        assert format_historical_context([]) is None
        assert format_historical_context(None) is None

    def test_single_session_line(self):
        digest = format_historical_context(
            [_session(1, themes=["Ownership", "Focus"], skills=["Delegation"], items=["Write plan"])]
        )
        assert digest == (
            "On 2024-03-01: Growth Themes: Ownership, Focus; "
            "Skills to Develop: Delegation; Previous Action Items: Write plan."
        )

    def test_lines_keep_caller_order(self):
        digest = format_historical_context(
            [_session(9, themes=["Newer"]), _session(2, themes=["Older"])]
        )
        assert digest.split("\n") == [
            "On 2024-03-09: Growth Themes: Newer.",
            "On 2024-03-02: Growth Themes: Older.",
        ]

    def test_only_present_parts_are_written(self):
        digest = format_historical_context([_session(4, items=["Ship the RFC"])])
        assert digest == "On 2024-03-04: Previous Action Items: Ship the RFC."

    def test_sessions_without_content_are_skipped(self):
        digest = format_historical_context([_session(5), _session(3, skills=["Estimation"])])
        assert digest == "On 2024-03-03: Skills to Develop: Estimation."

    def test_all_empty_gives_none(self):
        assert format_historical_context([_session(5, themes=["  ", ""])]) is None

    def test_date_is_rendered_in_utc(self):
        late = CoachingSession(
            id="s-late",
            team_member_id="tm1",
            team_member_name="Ada",
            session_date=datetime(2024, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5))),
            transcript="...",
            growth_themes=["Focus"],
        )
        assert format_historical_context([late]).startswith("On 2024-03-02:")
