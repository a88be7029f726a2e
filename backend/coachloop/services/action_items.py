"""
Action-item normalization.

Stored sessions hold action items in two shapes: plain description strings
(older rows) and {id, description, status, due_date} sub-records. Everything
that needs a canonical ActionItem goes through normalize_action_items; nothing
else branches on the stored shape.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional
from uuid import uuid4

from coachloop.core.timeutil import coerce_date
from coachloop.schemas import ActionItem, ActionItemStatus

MISSING_DESCRIPTION = "No description provided"


def _parse_status(value: Any) -> ActionItemStatus:
    if isinstance(value, ActionItemStatus):
        return value
    if isinstance(value, str):
        # "in progress" is the spelling used by older records
        key = value.strip().lower().replace(" ", "-").replace("_", "-")
        try:
            return ActionItemStatus(key)
        except ValueError:
            pass
    return ActionItemStatus.OPEN


def _fallback_id(session_id: Optional[str], position: int) -> str:
    if session_id:
        return f"{session_id}-item-{position}"
    return str(uuid4())


def _complete(
    fields: Mapping,
    position: int,
    owner_name: str,
    session_id: Optional[str],
) -> ActionItem:
    raw_id = fields.get("id")
    item_id = str(raw_id).strip() if raw_id is not None else ""

    description = fields.get("description")
    if not isinstance(description, str) or not description.strip():
        description = MISSING_DESCRIPTION

    due = fields.get("due_date", fields.get("dueDate"))

    return ActionItem(
        id=item_id or _fallback_id(session_id, position),
        description=description.strip(),
        status=_parse_status(fields.get("status")),
        due_date=coerce_date(due),
        owner_name=owner_name,
    )


def normalize_action_items(
    raw: Optional[Iterable[Any]],
    fallback_owner_name: str,
    session_id: Optional[str] = None,
) -> list[ActionItem]:
    """Turn plain strings and partial records into canonical ActionItems.

    Plain strings get a fresh id and default status. Records keep their valid
    fields; a missing id falls back to ``<session_id>-item-<position>`` so
    repeated reads of the same row agree. The owner label is always
    ``fallback_owner_name``. Blank strings and entries that are neither
    strings nor records are dropped.
    """
    items: list[ActionItem] = []
    for position, entry in enumerate(raw or []):
        if isinstance(entry, str):
            description = entry.strip()
            if not description:
                continue
            items.append(
                ActionItem(
                    id=str(uuid4()),
                    description=description,
                    owner_name=fallback_owner_name,
                )
            )
        elif isinstance(entry, ActionItem):
            items.append(_complete(entry.model_dump(), position, fallback_owner_name, session_id))
        elif isinstance(entry, Mapping):
            items.append(_complete(entry, position, fallback_owner_name, session_id))
    return items


def action_item_description(item: Any) -> Optional[str]:
    """Description of a stored or normalized action item, or None if it has none."""
    if isinstance(item, str):
        text = item
    elif isinstance(item, ActionItem):
        text = item.description
    elif isinstance(item, Mapping):
        text = item.get("description")
    else:
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text.strip()
