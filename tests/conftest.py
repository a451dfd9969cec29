import random
from datetime import datetime, timedelta, timezone

import pytest

from gradedraft.models.league import (
    DraftSettings,
    DraftType,
    League,
    LeagueStatus,
    Participant,
    Team,
)
from gradedraft.models.league_store import LeagueStore
from gradedraft.services.draft_controller import DraftController
from gradedraft.services.pick_mutex import PickMutex

CREATOR = "ms-okafor"
START = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now = self.now + timedelta(seconds=seconds)


# -----------------------
# Helpers
# -----------------------


def seed_league(
    store,
    users=("A", "B", "C"),
    max_players_per_team=2,
    draft_type=DraftType.LINEAR,
    pool_size=10,
    time_limit=60,
    status=LeagueStatus.OPEN,
):
    league = League(
        name="Period 3 Chemistry",
        created_by=CREATOR,
        class_code="CHEM3",
        status=status,
        max_participants=max(len(users), 2),
        max_players_per_team=max_players_per_team,
        draft_settings=DraftSettings(draft_type=draft_type, time_limit_per_pick=time_limit),
        draft_pool=[f"P{i}" for i in range(1, pool_size + 1)],
    )
    for user in users:
        team = Team(team_id=f"team-{user}", team_name=f"Team {user}", owner_id=user, league_id=league.league_id)
        store.add_team(team)
        league.participants.append(Participant(user_id=user, team_id=team.team_id))
    store.add_league(league)
    return league


class InOrderRng(random.Random):
    """Leaves the draft order as given and picks the first available player."""

    def randrange(self, stop):
        return stop - 1

    def choice(self, seq):
        return seq[0]


# -----------------------
# Fixtures
# -----------------------


@pytest.fixture
def store():
    return LeagueStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def controller(store, clock):
    return DraftController(store, PickMutex(), rng=InOrderRng(), clock=clock)
