from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from gradedraft.exceptions import LeagueNotDrafting, NotAParticipant
from gradedraft.models.league import (
    DraftSettings,
    League,
    LeagueStatus,
    Participant,
    PickRecord,
    same_id,
)
from gradedraft.services.draft_logic import available_player_ids, is_draft_complete

VISIBLE_STATUSES = {LeagueStatus.DRAFTING, LeagueStatus.ACTIVE}


class DraftStateView(BaseModel):
    is_active: bool
    current_round: int
    current_pick: int
    current_turn_user_id: Optional[str]
    current_turn_start_time: Optional[datetime]
    seconds_remaining: Optional[float]
    draft_order: List[str]
    pick_history: List[PickRecord]
    is_draft_complete: bool
    completed_early: bool


class DraftStatus(BaseModel):
    league_id: str
    league_status: LeagueStatus
    draft_state: DraftStateView
    available_players: List[Dict[str, Any]]
    participants: List[Participant]
    user_team_id: Optional[str]
    is_user_turn: bool
    draft_settings: DraftSettings


def seconds_remaining(league: League, now: datetime) -> Optional[float]:
    state = league.draft_state
    if not state.is_active or state.current_turn_start_time is None:
        return None
    elapsed = (now - state.current_turn_start_time).total_seconds()
    return max(0.0, league.draft_settings.time_limit_per_pick - elapsed)


def project_draft_status(league: League, requesting_user, now: datetime, catalog=None) -> DraftStatus:
    participant = league.participant_for(requesting_user)
    if participant is None:
        raise NotAParticipant("You are not a participant in this league")

    if league.status not in VISIBLE_STATUSES:
        raise LeagueNotDrafting(
            f"League is not in drafting mode. Current status: {league.status.value}"
        )

    state = league.draft_state
    available = available_player_ids(league)
    if catalog is not None:
        players = catalog.describe(available)
    else:
        players = [{"player_id": pid} for pid in available]

    return DraftStatus(
        league_id=league.league_id,
        league_status=league.status,
        draft_state=DraftStateView(
            is_active=state.is_active,
            current_round=state.current_round,
            current_pick=state.current_pick,
            current_turn_user_id=state.current_turn_user_id,
            current_turn_start_time=state.current_turn_start_time,
            seconds_remaining=seconds_remaining(league, now),
            draft_order=state.draft_order,
            pick_history=state.pick_history,
            is_draft_complete=is_draft_complete(league),
            completed_early=state.completed_early,
        ),
        available_players=players,
        participants=league.participants,
        user_team_id=participant.team_id,
        is_user_turn=same_id(state.current_turn_user_id, requesting_user),
        draft_settings=league.draft_settings,
    )
