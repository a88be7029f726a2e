"""Domain shapes exchanged between the workflow, the repositories and the API."""
from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from coachloop.core.timeutil import coerce_date


class ActionItemStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TeamMember(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None


class ActionItem(BaseModel):
    id: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    status: ActionItemStatus = ActionItemStatus.OPEN
    due_date: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("due_date", "dueDate")
    )
    # Display label only; stored once on the session, not per item
    owner_name: str = Field(default="", validation_alias=AliasChoices("owner_name", "ownerName"))

    @field_validator("description")
    @classmethod
    def _non_blank_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Description cannot be blank.")
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def _lenient_due_date(cls, value: Any) -> Any:
        if value == "":
            return None
        if isinstance(value, (str, datetime)):
            return coerce_date(value) or value
        return value


class ExtractedInsights(BaseModel):
    """Model output. Missing lists read as empty."""

    growth_themes: list[str] = Field(default_factory=list, alias="growthThemes")
    skills_to_develop: list[str] = Field(default_factory=list, alias="skillsToDevelop")
    suggested_coaching_questions: list[str] = Field(
        default_factory=list, alias="suggestedCoachingQuestions"
    )
    action_items: list[str] = Field(default_factory=list, alias="actionItems")

    model_config = {"populate_by_name": True}

    def is_empty(self) -> bool:
        return not (
            self.growth_themes
            or self.skills_to_develop
            or self.suggested_coaching_questions
            or self.action_items
        )


class CoachingSessionResult(BaseModel):
    """A freshly extracted session; ``id`` is set once it has been stored."""

    id: Optional[str] = None
    team_member_name: str
    session_date: datetime
    transcript: str
    growth_themes: list[str] = Field(default_factory=list)
    skills_to_develop: list[str] = Field(default_factory=list)
    suggested_coaching_questions: list[str] = Field(default_factory=list)
    action_items: list[ActionItem] = Field(default_factory=list)


class CoachingSession(BaseModel):
    id: str
    team_member_id: str
    team_member_name: str
    session_date: datetime
    transcript: str
    growth_themes: list[str] = Field(default_factory=list)
    skills_to_develop: list[str] = Field(default_factory=list)
    suggested_coaching_questions: list[str] = Field(default_factory=list)
    action_items: list[ActionItem] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class TeamMemberDetails(BaseModel):
    team_member: Optional[TeamMember] = None
    sessions: list[CoachingSession] = Field(default_factory=list)
