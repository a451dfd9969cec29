import logging

from gradedraft.exceptions import RosterFull
from gradedraft.models.league import RosterEntry, Team

logger = logging.getLogger(__name__)


def add_player_to_team(team: Team, player_id, draft_round, draft_pick, drafted_at, roster_limit) -> Team:
    """Return a copy of ``team`` with the drafted player appended."""
    if team.active_roster_count >= roster_limit:
        raise RosterFull(f"Team {team.team_name} roster is full")

    updated = team.model_copy(deep=True)
    updated.roster.append(
        RosterEntry(
            player_id=str(player_id),
            draft_round=draft_round,
            draft_pick=draft_pick,
            drafted_at=drafted_at,
        )
    )
    return updated


def notify_roster_changed(listeners, team: Team):
    """Run score/ranking recompute hooks; they never undo a committed pick."""
    for listener in listeners:
        try:
            listener(team)
        except Exception:
            logger.exception(
                "Roster listener %r failed for team %s", listener, team.team_id
            )
