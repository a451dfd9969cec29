from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from gradedraft.exceptions import InvalidLeagueTransition


def new_id() -> str:
    return uuid4().hex


def same_id(a, b) -> bool:
    """Identity comparison for user/player/team references of any representation."""
    if a is None or b is None:
        return False
    return str(a) == str(b)


# -----------------------
# Enums
# -----------------------


class LeagueStatus(str, Enum):
    SETUP = "setup"
    OPEN = "open"
    DRAFTING = "drafting"
    ACTIVE = "active"
    COMPLETED = "completed"


class DraftType(str, Enum):
    SNAKE = "snake"
    LINEAR = "linear"


# setup → open → drafting → active → completed
NEXT_STATUS = {
    LeagueStatus.SETUP: LeagueStatus.OPEN,
    LeagueStatus.OPEN: LeagueStatus.DRAFTING,
    LeagueStatus.DRAFTING: LeagueStatus.ACTIVE,
    LeagueStatus.ACTIVE: LeagueStatus.COMPLETED,
}


# -----------------------
# Draft records
# -----------------------


class DraftSettings(BaseModel):
    draft_type: DraftType = DraftType.SNAKE
    time_limit_per_pick: int = Field(default=60, gt=0)  # seconds


class PickRecord(BaseModel):
    user_id: str
    player_id: str
    round: int
    pick: int
    timestamp: datetime
    auto: bool = False


class DraftState(BaseModel):
    is_active: bool = False
    current_round: int = 1
    current_pick: int = 1
    current_turn_user_id: Optional[str] = None
    current_turn_start_time: Optional[datetime] = None
    draft_order: List[str] = Field(default_factory=list)
    pick_history: List[PickRecord] = Field(default_factory=list)
    completed_early: bool = False

    def drafted_player_ids(self):
        return {str(p.player_id) for p in self.pick_history}


class Participant(BaseModel):
    user_id: str
    team_id: Optional[str] = None
    is_active: bool = True


# -----------------------
# League
# -----------------------


class League(BaseModel):
    league_id: str = Field(default_factory=new_id)
    name: str
    created_by: str
    class_code: str = ""
    status: LeagueStatus = LeagueStatus.SETUP
    max_participants: int = Field(default=10, ge=2)
    max_players_per_team: int = Field(default=5, ge=1)
    draft_settings: DraftSettings = Field(default_factory=DraftSettings)
    draft_state: DraftState = Field(default_factory=DraftState)
    draft_pool: List[str] = Field(default_factory=list)
    participants: List[Participant] = Field(default_factory=list)
    version: int = 0

    @field_validator("draft_pool")
    @classmethod
    def unique_pool(cls, pool):
        # the pool is a set; keep first-seen order
        return list(dict.fromkeys(pool))

    def active_participants(self):
        return [p for p in self.participants if p.is_active]

    def participant_for(self, user_id) -> Optional[Participant]:
        for participant in self.active_participants():
            if same_id(participant.user_id, user_id):
                return participant
        return None

    def total_picks(self) -> int:
        return len(self.active_participants()) * self.max_players_per_team

    def transition_to(self, status: LeagueStatus):
        if NEXT_STATUS.get(self.status) != status:
            raise InvalidLeagueTransition(
                f"League cannot move from {self.status.value} to {status.value}"
            )
        self.status = status


# -----------------------
# Team
# -----------------------


class RosterEntry(BaseModel):
    player_id: str
    draft_round: int
    draft_pick: int
    drafted_at: datetime
    is_active: bool = True


class Team(BaseModel):
    team_id: str = Field(default_factory=new_id)
    team_name: str
    owner_id: str
    league_id: str
    roster: List[RosterEntry] = Field(default_factory=list)

    @property
    def active_roster_count(self) -> int:
        return sum(1 for entry in self.roster if entry.is_active)
