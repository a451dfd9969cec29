import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from gradedraft.api.deps import current_user, get_catalog, get_controller, get_store
from gradedraft.exceptions import AccessDenied, AlreadyJoined, InvalidLeagueTransition, LeagueFull
from gradedraft.models.league import (
    DraftSettings,
    League,
    LeagueStatus,
    Participant,
    Team,
    same_id,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leagues", tags=["leagues"])

# -----------------------
# API models
# -----------------------


class CreateLeagueRequest(BaseModel):
    name: str
    class_code: str = ""
    max_participants: int = Field(default=10, ge=2)
    max_players_per_team: int = Field(default=5, ge=1)
    draft_settings: DraftSettings = Field(default_factory=DraftSettings)
    draft_pool: Optional[List[str]] = None


class JoinLeagueRequest(BaseModel):
    team_name: str


# -----------------------
# Helpers
# -----------------------


def require_creator(league: League, user_id):
    if not same_id(league.created_by, user_id):
        raise AccessDenied("Only the league creator can do that")


# -----------------------
# API endpoints
# -----------------------


@router.post("")
def create_league(
    req: CreateLeagueRequest,
    user_id: str = Depends(current_user),
    store=Depends(get_store),
    catalog=Depends(get_catalog),
):
    pool = req.draft_pool if req.draft_pool is not None else catalog.class_pool(req.class_code)
    league = League(
        name=req.name,
        created_by=user_id,
        class_code=req.class_code,
        max_participants=req.max_participants,
        max_players_per_team=req.max_players_per_team,
        draft_settings=req.draft_settings,
        draft_pool=[str(pid) for pid in pool],
    )
    saved = store.commit(league, expected_version=0)
    logger.info("League %s created by %s with %d players in pool", saved.league_id, user_id, len(pool))
    return saved


@router.get("/{league_id}")
def get_league(league_id: str, store=Depends(get_store)):
    return store.require_league(league_id)


@router.post("/{league_id}/open")
def open_league(league_id: str, user_id: str = Depends(current_user), store=Depends(get_store)):
    league = store.require_league(league_id)
    require_creator(league, user_id)
    expected_version = league.version

    league.transition_to(LeagueStatus.OPEN)
    return store.commit(league, expected_version)


@router.post("/{league_id}/join")
def join_league(
    league_id: str,
    req: JoinLeagueRequest,
    user_id: str = Depends(current_user),
    store=Depends(get_store),
):
    league = store.require_league(league_id)
    expected_version = league.version

    if league.status != LeagueStatus.OPEN:
        raise InvalidLeagueTransition(
            f"League must be open to join. Current status: {league.status.value}"
        )
    if league.participant_for(user_id) is not None:
        raise AlreadyJoined("You have already joined this league")
    if len(league.active_participants()) >= league.max_participants:
        raise LeagueFull("League is full")

    team = Team(team_name=req.team_name, owner_id=user_id, league_id=league.league_id)
    league.participants.append(Participant(user_id=user_id, team_id=team.team_id))
    store.commit(league, expected_version, teams=[team])

    logger.info("User %s joined league %s as %s", user_id, league_id, req.team_name)
    return team


@router.post("/{league_id}/start-draft")
def start_draft(league_id: str, user_id: str = Depends(current_user), controller=Depends(get_controller)):
    league = controller.start_draft(league_id, user_id)
    return {
        "success": True,
        "message": "Draft started successfully",
        "league": league,
    }


@router.post("/{league_id}/end")
def end_league(league_id: str, user_id: str = Depends(current_user), store=Depends(get_store)):
    league = store.require_league(league_id)
    require_creator(league, user_id)
    expected_version = league.version

    league.transition_to(LeagueStatus.COMPLETED)
    return store.commit(league, expected_version)
