"""Tests for action-item normalization across stored shapes."""
import uuid
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from coachloop.schemas import ActionItem, ActionItemStatus
from coachloop.services.action_items import (
    MISSING_DESCRIPTION,
    action_item_description,
    normalize_action_items,
)


def _is_uuid(value):
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


class TestPlainStrings:
    def test_string_becomes_open_item_with_fresh_id(self):
        [item] = normalize_action_items(["Write a plan"], "Ada")
        assert item.description == "Write a plan"
        assert item.status is ActionItemStatus.OPEN
        assert item.due_date is None
        assert item.owner_name == "Ada"
        assert _is_uuid(item.id)

    def test_each_string_gets_a_distinct_id(self):
        items = normalize_action_items(["One", "Two"], "Ada")
        assert items[0].id != items[1].id

    def test_blank_strings_and_unknown_shapes_are_dropped(self):
        items = normalize_action_items(["  ", "", 42, None, ["nested"], "Keep me"], "Ada")
        assert [i.description for i in items] == ["Keep me"]

    def test_none_gives_empty_list(self):
        assert normalize_action_items(None, "Ada") == []


class TestRecords:
    def test_complete_record_is_kept(self):
        [item] = normalize_action_items(
            [{"id": "a1", "description": "Ship", "status": "done", "due_date": "2024-04-01"}],
            "Ada",
        )
        assert item == ActionItem(
            id="a1",
            description="Ship",
            status=ActionItemStatus.DONE,
            due_date=date(2024, 4, 1),
            owner_name="Ada",
        )

    def test_missing_id_falls_back_to_session_position(self):
        items = normalize_action_items(
            ["first", {"description": "second"}], "Ada", session_id="s1"
        )
        assert items[1].id == "s1-item-1"

    def test_fallback_id_is_stable_across_reads(self):
        raw = [{"description": "no id here"}]
        first = normalize_action_items(raw, "Ada", session_id="s1")
        second = normalize_action_items(raw, "Ada", session_id="s1")
        assert first[0].id == second[0].id

    def test_missing_id_without_session_gets_uuid(self):
        [item] = normalize_action_items([{"description": "x"}], "Ada")
        assert _is_uuid(item.id)

    def test_missing_description_gets_placeholder(self):
        [item] = normalize_action_items([{"id": "a1", "description": "   "}], "Ada")
        assert item.description == MISSING_DESCRIPTION

    def test_status_spellings(self):
        raw = [
            {"id": "1", "description": "a", "status": "in progress"},
            {"id": "2", "description": "b", "status": "IN_PROGRESS"},
            {"id": "3", "description": "c", "status": "Done"},
            {"id": "4", "description": "d", "status": "blocked"},
            {"id": "5", "description": "e"},
        ]
        statuses = [i.status for i in normalize_action_items(raw, "Ada")]
        assert statuses == [
            ActionItemStatus.IN_PROGRESS,
            ActionItemStatus.IN_PROGRESS,
            ActionItemStatus.DONE,
            ActionItemStatus.OPEN,
            ActionItemStatus.OPEN,
        ]

    def test_due_date_shapes(self):
        raw = [
            {"id": "1", "description": "a", "dueDate": "2024-05-02"},
            {"id": "2", "description": "b", "due_date": "2024-05-03T10:00:00Z"},
            {"id": "3", "description": "c", "due_date": datetime(2024, 5, 4, 8, tzinfo=timezone.utc)},
            {"id": "4", "description": "d", "due_date": "next tuesday"},
            {"id": "5", "description": "e", "due_date": ""},
        ]
        dues = [i.due_date for i in normalize_action_items(raw, "Ada")]
        assert dues == [date(2024, 5, 2), date(2024, 5, 3), date(2024, 5, 4), None, None]

    def test_owner_is_always_the_fallback(self):
        [item] = normalize_action_items(
            [{"id": "a1", "description": "x", "ownerName": "Someone else"}], "Ada"
        )
        assert item.owner_name == "Ada"

    def test_action_item_instances_pass_through(self):
        original = ActionItem(id="a9", description="Keep", status=ActionItemStatus.DONE)
        [item] = normalize_action_items([original], "Ada")
        assert item.id == "a9"
        assert item.status is ActionItemStatus.DONE
        assert item.owner_name == "Ada"


class TestActionItemDescription:
    def test_shapes(self):
        assert action_item_description(" plain ") == "plain"
        assert action_item_description({"description": "rec"}) == "rec"
        assert action_item_description(ActionItem(id="a", description="model")) == "model"

    def test_missing_or_blank(self):
        assert action_item_description({"id": "a"}) is None
        assert action_item_description("   ") is None
        assert action_item_description(7) is None


def test_normalizing_twice_changes_nothing():
    raw = [
        "Plain",
        {"id": "a1", "description": "Rec", "status": "in progress", "dueDate": "2024-05-02"},
        {"description": "No id"},
    ]
    once = normalize_action_items(raw, "Ada", session_id="s1")
    assert normalize_action_items(once, "Ada", session_id="s1") == once


def test_action_item_description_is_trimmed_and_required():
    assert ActionItem(id="a", description="  Ship  ").description == "Ship"
    with pytest.raises(ValidationError):
        ActionItem(id="a", description="   ")
