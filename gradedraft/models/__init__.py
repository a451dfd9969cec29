from gradedraft.models.league import (
    DraftSettings,
    DraftState,
    DraftType,
    League,
    LeagueStatus,
    Participant,
    PickRecord,
    RosterEntry,
    Team,
    same_id,
)
from gradedraft.models.league_store import LeagueStore

__all__ = [
    "DraftSettings",
    "DraftState",
    "DraftType",
    "League",
    "LeagueStatus",
    "LeagueStore",
    "Participant",
    "PickRecord",
    "RosterEntry",
    "Team",
    "same_id",
]
