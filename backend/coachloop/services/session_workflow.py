"""
Session submission workflow.

validating -> resolving_team_member -> gathering_history -> extracting
-> normalizing -> persisting -> done, with failed reachable from every step.
The session row is written once, as the last step, so a failure anywhere
earlier leaves nothing half-saved. Team-member creation is committed on its
own before extraction starts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy.orm import Session

from coachloop.core.errors import (
    CoachingError,
    NotFoundFailure,
    PersistenceFailure,
    ValidationFailure,
)
from coachloop.core.timeutil import parse_iso_datetime
from coachloop.repositories import (
    create_session,
    create_team_member,
    get_team_member,
    list_sessions,
    list_team_members,
    update_session_action_items,
)
from coachloop.schemas import (
    ActionItem,
    CoachingSessionResult,
    TeamMember,
    TeamMemberDetails,
)
from coachloop.services.action_items import normalize_action_items
from coachloop.services.history import format_historical_context
from coachloop.services.insights import InsightExtractionGateway

NEW_TEAM_MEMBER = "new"

logger = logging.getLogger("coachloop.workflow")


class WorkflowState(str, Enum):
    VALIDATING = "validating"
    RESOLVING_TEAM_MEMBER = "resolving_team_member"
    GATHERING_HISTORY = "gathering_history"
    EXTRACTING = "extracting"
    NORMALIZING = "normalizing"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class TranscriptSubmission:
    transcript: str
    team_member_id: str
    session_date: str
    new_team_member_name: Optional[str] = None


@dataclass
class SubmissionOutcome:
    state: WorkflowState
    message: str
    session: Optional[CoachingSessionResult] = None
    issues: list[str] = field(default_factory=list)
    error: Optional[CoachingError] = None
    failed_at: Optional[WorkflowState] = None

    @property
    def succeeded(self) -> bool:
        return self.state is WorkflowState.DONE


@dataclass
class ActionItemUpdateOutcome:
    success: bool
    message: str
    error: Optional[CoachingError] = None


class SessionWorkflow:
    """Turns one transcript submission into a stored coaching session."""

    def __init__(
        self,
        gateway: InsightExtractionGateway,
        history_limit: int = 3,
        min_transcript_length: int = 10,
    ) -> None:
        self._gateway = gateway
        self._history_limit = history_limit
        self._min_transcript_length = min_transcript_length

    def _validate(self, submission: TranscriptSubmission):
        issues: list[str] = []
        transcript = (submission.transcript or "").strip()
        if len(transcript) < self._min_transcript_length:
            issues.append(
                f"Transcript must be at least {self._min_transcript_length} characters long."
            )
        selector = (submission.team_member_id or "").strip()
        if not selector:
            issues.append("Team member selection is required.")
        elif selector == NEW_TEAM_MEMBER and not (submission.new_team_member_name or "").strip():
            issues.append("New team member name is required when 'Add New' is selected.")
        session_date = None
        if not (submission.session_date or "").strip():
            issues.append("Session date cannot be empty.")
        else:
            try:
                session_date = parse_iso_datetime(submission.session_date)
            except ValueError:
                issues.append("Session date must be an ISO-8601 date.")
        if issues:
            raise ValidationFailure(
                issues, "Invalid form data. Please check the fields and try again."
            )
        return selector, session_date

    def _resolve_team_member(
        self, db: Session, selector: str, new_name: Optional[str]
    ) -> tuple[TeamMember, bool]:
        if selector == NEW_TEAM_MEMBER:
            return create_team_member(db, new_name or ""), True
        member = get_team_member(db, selector)
        if member is None:
            raise NotFoundFailure(f"Selected team member with ID {selector} not found.")
        return member, False

    def _gather_history(self, db: Session, team_member_id: str) -> Optional[str]:
        # History only enriches the prompt; extraction goes ahead without it
        try:
            past = list_sessions(db, team_member_id, limit=self._history_limit)
            return format_historical_context(past)
        except PersistenceFailure as exc:
            logger.warning(
                "History unavailable for team_member_id=%s, continuing without it: %s",
                team_member_id,
                exc.message,
            )
        except CoachingError:
            raise
        except Exception:
            logger.exception(
                "Could not build history for team_member_id=%s, continuing without it",
                team_member_id,
            )
        return None

    def submit(self, db: Session, submission: TranscriptSubmission) -> SubmissionOutcome:
        state = WorkflowState.VALIDATING
        try:
            selector, session_date = self._validate(submission)

            state = WorkflowState.RESOLVING_TEAM_MEMBER
            member, created = self._resolve_team_member(
                db, selector, submission.new_team_member_name
            )

            historical_summary = None
            if not created:
                state = WorkflowState.GATHERING_HISTORY
                historical_summary = self._gather_history(db, member.id)

            state = WorkflowState.EXTRACTING
            insights = self._gateway.extract(submission.transcript, historical_summary)

            state = WorkflowState.NORMALIZING
            result = CoachingSessionResult(
                team_member_name=member.name,
                session_date=session_date,
                transcript=submission.transcript,
                growth_themes=insights.growth_themes,
                skills_to_develop=insights.skills_to_develop,
                suggested_coaching_questions=insights.suggested_coaching_questions,
                action_items=normalize_action_items(insights.action_items, member.name),
            )

            state = WorkflowState.PERSISTING
            result.id = create_session(db, result, member.id)
        except CoachingError as exc:
            return self._failed(state, exc)
        except Exception as exc:
            logger.exception("Unexpected error in state=%s", state.value)
            return self._failed(
                state, CoachingError("An unexpected error occurred. Please try again.")
            )

        logger.info("Session stored id=%s team_member_id=%s", result.id, member.id)
        return SubmissionOutcome(
            state=WorkflowState.DONE,
            message="Transcript processed and session saved successfully!",
            session=result,
        )

    @staticmethod
    def _failed(state: WorkflowState, exc: CoachingError) -> SubmissionOutcome:
        logger.warning("Submission failed in state=%s: %s", state.value, exc.message)
        if isinstance(exc, ValidationFailure):
            message = exc.message
        else:
            message = f"Failed to process transcript: {exc.message}"
        return SubmissionOutcome(
            state=WorkflowState.FAILED,
            message=message,
            issues=list(getattr(exc, "issues", [])),
            error=exc,
            failed_at=state,
        )


def _coerce_items(items: Sequence[Any]) -> list[ActionItem]:
    coerced: list[ActionItem] = []
    issues: list[str] = []
    for position, item in enumerate(items):
        if isinstance(item, ActionItem):
            coerced.append(item)
            continue
        try:
            coerced.append(ActionItem.model_validate(item))
        except ValidationError as exc:
            for err in exc.errors():
                loc = ".".join(str(part) for part in err["loc"]) or "item"
                issues.append(f"Action item {position + 1}: {loc}: {err['msg']}")
    if issues:
        raise ValidationFailure(issues)
    return coerced


def update_action_items(
    db: Session, session_id: str, items: Optional[Sequence[Any]]
) -> ActionItemUpdateOutcome:
    """Persist an edited action-item list for an existing session. Never calls the model."""
    try:
        if not session_id or not session_id.strip():
            raise ValidationFailure(["Session ID is required."])
        if items is None:
            raise ValidationFailure(["Action items are required."])
        update_session_action_items(db, session_id, _coerce_items(items))
    except CoachingError as exc:
        logger.warning("Action item update failed session_id=%s: %s", session_id, exc.message)
        return ActionItemUpdateOutcome(success=False, message=exc.message, error=exc)
    return ActionItemUpdateOutcome(success=True, message="Action items updated.")


def fetch_team_member_details(db: Session, team_member_id: str) -> TeamMemberDetails:
    """A team member and all of their sessions; empty details when the id is unknown."""
    member = get_team_member(db, team_member_id)
    if member is None:
        return TeamMemberDetails()
    return TeamMemberDetails(team_member=member, sessions=list_sessions(db, member.id))


def fetch_team_overview(db: Session) -> list[TeamMemberDetails]:
    return [
        TeamMemberDetails(team_member=member, sessions=list_sessions(db, member.id))
        for member in list_team_members(db)
    ]
