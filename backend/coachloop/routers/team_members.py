"""Thin API layer: team members, their sessions, and the team overview."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from coachloop.core.errors import CoachingError
from coachloop.db.session import get_db
from coachloop.repositories import create_team_member, list_team_members
from coachloop.routers.errors import http_error
from coachloop.schemas import TeamMember, TeamMemberDetails
from coachloop.services.session_workflow import fetch_team_member_details, fetch_team_overview

router = APIRouter(prefix="/team-members", tags=["team-members"])


class CreateTeamMemberRequest(BaseModel):
    name: str


@router.get("", response_model=list[TeamMember])
def list_members():
    try:
        with get_db() as db:
            return list_team_members(db)
    except CoachingError as e:
        raise http_error(e) from e


@router.post("", response_model=TeamMember, status_code=201)
def add_member(body: CreateTeamMemberRequest):
    try:
        with get_db() as db:
            return create_team_member(db, body.name)
    except CoachingError as e:
        raise http_error(e) from e


@router.get("/overview", response_model=list[TeamMemberDetails])
def overview():
    """Every team member with all of their sessions, newest first."""
    try:
        with get_db() as db:
            return fetch_team_overview(db)
    except CoachingError as e:
        raise http_error(e) from e


@router.get("/{team_member_id}", response_model=TeamMemberDetails)
def member_details(team_member_id: str):
    try:
        with get_db() as db:
            details = fetch_team_member_details(db, team_member_id)
    except CoachingError as e:
        raise http_error(e) from e
    if details.team_member is None:
        raise HTTPException(status_code=404, detail=f'Team member with ID "{team_member_id}" not found.')
    return details
