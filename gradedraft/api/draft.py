import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from gradedraft.api.deps import current_user, get_catalog, get_controller, get_store
from gradedraft.services.draft_controller import PickResult, utcnow
from gradedraft.services.draft_status import project_draft_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/draft", tags=["draft"])

# -----------------------
# API models
# -----------------------


class PickRequest(BaseModel):
    player_id: str


# -----------------------
# Helpers
# -----------------------


def pick_response(result: PickResult, catalog):
    if result.pick is None:
        return {
            "success": True,
            "message": "Draft completed early - no more players available",
            "pick": None,
            "next_turn": {
                "current_round": result.next_round,
                "current_pick": result.next_pick,
                "current_turn_user_id": None,
                "is_draft_complete": True,
                "completed_early": True,
            },
        }

    player = catalog.describe([result.pick.player_id])[0]
    return {
        "success": True,
        "message": "Player drafted successfully",
        "pick": {
            "player": player,
            "round": result.pick.round,
            "pick": result.pick.pick,
            "team": result.team_name,
            "auto": result.pick.auto,
        },
        "next_turn": {
            "current_round": result.next_round,
            "current_pick": result.next_pick,
            "current_turn_user_id": result.next_turn_user_id,
            "is_draft_complete": result.draft_complete,
            "completed_early": result.completed_early,
        },
    }


# -----------------------
# API endpoints
# -----------------------


@router.get("/players/{player_id}")
def get_player(player_id: str, catalog=Depends(get_catalog)):
    return catalog.get(player_id)


@router.get("/{league_id}/status")
def draft_status(
    league_id: str,
    user_id: str = Depends(current_user),
    store=Depends(get_store),
    catalog=Depends(get_catalog),
):
    league = store.require_league(league_id)
    return project_draft_status(league, user_id, utcnow(), catalog=catalog)


@router.post("/{league_id}/pick")
async def pick_player(
    league_id: str,
    req: PickRequest,
    user_id: str = Depends(current_user),
    controller=Depends(get_controller),
    catalog=Depends(get_catalog),
):
    logger.info("User %s attempting to draft player %s in league %s", user_id, req.player_id, league_id)
    result = await controller.submit_pick(league_id, user_id, req.player_id)
    return pick_response(result, catalog)


@router.post("/{league_id}/auto-pick")
async def auto_pick(
    league_id: str,
    user_id: str = Depends(current_user),
    controller=Depends(get_controller),
    catalog=Depends(get_catalog),
):
    result = await controller.auto_pick(league_id, user_id)
    return pick_response(result, catalog)


@router.get("/{league_id}/debug")
def draft_debug(league_id: str, user_id: str = Depends(current_user), store=Depends(get_store)):
    league = store.require_league(league_id)
    state = league.draft_state

    return {
        "league_id": league.league_id,
        "status": league.status,
        "version": league.version,
        "draft_state": {
            "is_active": state.is_active,
            "current_round": state.current_round,
            "current_pick": state.current_pick,
            "current_turn_user_id": state.current_turn_user_id,
            "draft_order_length": len(state.draft_order),
            "pick_history_length": len(state.pick_history),
        },
        "participants": len(league.participants),
        "max_players_per_team": league.max_players_per_team,
        "draft_pool_size": len(league.draft_pool),
    }
