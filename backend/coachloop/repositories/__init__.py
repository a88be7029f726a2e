from coachloop.repositories.session_repo import (
    create_session,
    get_session,
    list_sessions,
    update_session_action_items,
)
from coachloop.repositories.team_member_repo import (
    create_team_member,
    get_team_member,
    list_team_members,
)

__all__ = [
    "create_session",
    "create_team_member",
    "get_session",
    "get_team_member",
    "list_sessions",
    "list_team_members",
    "update_session_action_items",
]
