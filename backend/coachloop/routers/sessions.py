"""Thin API layer: transcript submission, session reads, action-item edits, export."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from coachloop.core.config import get_settings
from coachloop.core.errors import CoachingError
from coachloop.db.session import get_db
from coachloop.repositories import get_session
from coachloop.routers.errors import http_error, status_for
from coachloop.schemas import CoachingSession, CoachingSessionResult
from coachloop.services.export import export_filename, format_session_export
from coachloop.services.insights import InsightExtractionGateway
from coachloop.services.llm import LLMProviderError, build_provider
from coachloop.services.session_workflow import (
    SessionWorkflow,
    TranscriptSubmission,
    update_action_items,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


class SubmitTranscriptRequest(BaseModel):
    transcript: str = ""
    # "new" or an existing team member id
    team_member_id: str = ""
    new_team_member_name: Optional[str] = None
    session_date: str = ""


class SubmissionResponse(BaseModel):
    message: str
    data: Optional[CoachingSessionResult] = None
    issues: Optional[list[str]] = None


class UpdateActionItemsRequest(BaseModel):
    action_items: list[dict[str, Any]]


class UpdateActionItemsResponse(BaseModel):
    success: bool
    message: Optional[str] = None


def get_workflow() -> SessionWorkflow:
    settings = get_settings()
    try:
        provider = build_provider(settings)
    except LLMProviderError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return SessionWorkflow(
        InsightExtractionGateway(provider),
        history_limit=settings.history_session_limit,
        min_transcript_length=settings.min_transcript_length,
    )


@router.post("", response_model=SubmissionResponse, status_code=201)
def submit_transcript(
    body: SubmitTranscriptRequest,
    workflow: SessionWorkflow = Depends(get_workflow),
):
    """Extract insights from a transcript and store the session."""
    with get_db() as db:
        outcome = workflow.submit(
            db,
            TranscriptSubmission(
                transcript=body.transcript,
                team_member_id=body.team_member_id,
                new_team_member_name=body.new_team_member_name,
                session_date=body.session_date,
            ),
        )
    response = SubmissionResponse(
        message=outcome.message,
        data=outcome.session,
        issues=outcome.issues or None,
    )
    status = 201 if outcome.succeeded else status_for(outcome.error)
    return JSONResponse(status_code=status, content=response.model_dump(mode="json"))


@router.get("/{session_id}", response_model=CoachingSession)
def read_session(session_id: str):
    try:
        with get_db() as db:
            session = get_session(db, session_id)
    except CoachingError as e:
        raise http_error(e) from e
    if session is None:
        raise HTTPException(status_code=404, detail="Coaching session not found")
    return session


@router.put("/{session_id}/action-items", response_model=UpdateActionItemsResponse)
def replace_action_items(session_id: str, body: UpdateActionItemsRequest):
    """Overwrite the session's action items (status and due-date edits)."""
    with get_db() as db:
        outcome = update_action_items(db, session_id, body.action_items)
    response = UpdateActionItemsResponse(success=outcome.success, message=outcome.message)
    status = 200 if outcome.success else status_for(outcome.error)
    return JSONResponse(status_code=status, content=response.model_dump(mode="json"))


@router.get("/{session_id}/export", response_class=PlainTextResponse)
def export_session(session_id: str):
    try:
        with get_db() as db:
            session = get_session(db, session_id)
    except CoachingError as e:
        raise http_error(e) from e
    if session is None:
        raise HTTPException(status_code=404, detail="Coaching session not found")
    return PlainTextResponse(
        format_session_export(session),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(session)}"'},
    )
