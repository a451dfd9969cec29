import logging
import threading

from gradedraft.exceptions import DraftStateConflict, LeagueNotFound
from gradedraft.models.league import League, LeagueStatus, Team

logger = logging.getLogger(__name__)


class LeagueStore:
    """In-process league and team store.

    Reads hand out deep copies so callers can mutate freely. Writes go through
    ``commit``, which checks the league version read by the caller and applies
    the league together with any changed teams, or nothing at all.
    """

    def __init__(self):
        self._leagues = {}
        self._teams = {}
        self._lock = threading.Lock()

    # -----------------------
    # Reads
    # -----------------------

    def get_league(self, league_id):
        with self._lock:
            league = self._leagues.get(str(league_id))
            return league.model_copy(deep=True) if league else None

    def require_league(self, league_id) -> League:
        league = self.get_league(league_id)
        if league is None:
            raise LeagueNotFound(f"League {league_id} not found")
        return league

    def get_team(self, team_id):
        with self._lock:
            team = self._teams.get(str(team_id))
            return team.model_copy(deep=True) if team else None

    def teams_for_league(self, league_id):
        with self._lock:
            return [
                team.model_copy(deep=True)
                for team in self._teams.values()
                if team.league_id == str(league_id)
            ]

    def drafting_leagues(self):
        with self._lock:
            return [
                league.model_copy(deep=True)
                for league in self._leagues.values()
                if league.status == LeagueStatus.DRAFTING and league.draft_state.is_active
            ]

    # -----------------------
    # Writes
    # -----------------------

    def add_league(self, league: League) -> League:
        with self._lock:
            self._leagues[league.league_id] = league.model_copy(deep=True)
        return league

    def add_team(self, team: Team) -> Team:
        with self._lock:
            self._teams[team.team_id] = team.model_copy(deep=True)
        return team

    def commit(self, league: League, expected_version: int, teams=()) -> League:
        """Compare-and-swap the league (plus teams) against ``expected_version``."""
        with self._lock:
            current = self._leagues.get(league.league_id)
            current_version = current.version if current else 0
            if current_version != expected_version:
                logger.info(
                    "Rejected stale write for league %s (expected v%s, found v%s)",
                    league.league_id,
                    expected_version,
                    current_version,
                )
                raise DraftStateConflict(
                    f"League {league.league_id} changed while the request was processed"
                )

            stored = league.model_copy(deep=True)
            stored.version = current_version + 1
            self._leagues[stored.league_id] = stored
            for team in teams:
                self._teams[team.team_id] = team.model_copy(deep=True)

            league.version = stored.version
            return stored.model_copy(deep=True)
