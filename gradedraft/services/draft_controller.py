import logging
import random
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from gradedraft.exceptions import (
    AccessDenied,
    DraftNotActive,
    DraftOrderInvalid,
    NotAParticipant,
    NotEnoughParticipants,
    NotYourTurn,
    PlayerUnavailable,
    RosterFull,
)
from gradedraft.models.league import DraftState, LeagueStatus, PickRecord, same_id
from gradedraft.services.draft_logic import (
    available_player_ids,
    complete_draft,
    generate_draft_order,
    next_turn,
    picks_exhausted,
)
from gradedraft.services.pick_mutex import PickMutex
from gradedraft.services.roster import add_player_to_team, notify_roster_changed

logger = logging.getLogger(__name__)


def utcnow():
    return datetime.now(timezone.utc)


class PickResult(NamedTuple):
    pick: Optional[PickRecord]
    team_name: Optional[str]
    next_round: int
    next_pick: int
    next_turn_user_id: Optional[str]
    draft_complete: bool
    completed_early: bool = False


class DraftController:
    """Runs draft starts and picks against a ``LeagueStore``.

    Manual picks, auto-picks and the timeout sweeper all go through
    ``submit_pick`` so they share the same validation and commit path.
    """

    def __init__(self, store, mutex=None, rng=None, clock=None, roster_listeners=()):
        self.store = store
        self.mutex = mutex or PickMutex()
        self.rng = rng or random.Random()
        self.clock = clock or utcnow
        self.roster_listeners = list(roster_listeners)

    # -----------------------
    # Draft start
    # -----------------------

    def start_draft(self, league_id, requesting_user):
        league = self.store.require_league(league_id)
        expected_version = league.version

        if not same_id(league.created_by, requesting_user):
            raise AccessDenied("Only the league creator can start the draft")

        # only open leagues may move to drafting
        league.transition_to(LeagueStatus.DRAFTING)

        participants = league.active_participants()
        if len(participants) < 2:
            raise NotEnoughParticipants(
                f"Need at least 2 participants to start draft. Current participants: {len(participants)}"
            )

        order = generate_draft_order([p.user_id for p in participants], rng=self.rng)
        league.draft_state = DraftState(
            is_active=True,
            current_round=1,
            current_pick=1,
            current_turn_user_id=order[0],
            current_turn_start_time=self.clock(),
            draft_order=order,
        )

        saved = self.store.commit(league, expected_version)
        logger.info(
            "Draft started for league %s (%s, order %s)",
            league_id,
            league.draft_settings.draft_type.value,
            order,
        )
        return saved

    # -----------------------
    # Picks
    # -----------------------

    async def auto_pick(self, league_id, acting_user) -> PickResult:
        return await self.submit_pick(league_id, acting_user, None, auto=True)

    async def submit_pick(self, league_id, acting_user, player_id=None, auto=False) -> PickResult:
        with self.mutex.hold(acting_user):
            return self._pick(league_id, acting_user, player_id, auto or player_id is None)

    def _pick(self, league_id, acting_user, player_id, auto) -> PickResult:
        league = self.store.require_league(league_id)
        expected_version = league.version
        state = league.draft_state

        if not state.is_active:
            raise DraftNotActive("Draft is not currently active")

        if not same_id(state.current_turn_user_id, acting_user):
            raise NotYourTurn("It is not your turn to pick")

        available = available_player_ids(league)
        if player_id is not None:
            if str(player_id) not in available:
                raise PlayerUnavailable(f"Player {player_id} is not available in this league")
        elif not available:
            return self._finish_early(league, expected_version)
        else:
            player_id = self.rng.choice(available)

        participant = league.participant_for(acting_user)
        team = self.store.get_team(participant.team_id) if participant and participant.team_id else None
        if team is None:
            raise NotAParticipant("User team not found")
        if team.active_roster_count >= league.max_players_per_team:
            raise RosterFull("Team roster is full")

        now = self.clock()
        record = PickRecord(
            user_id=str(acting_user),
            player_id=str(player_id),
            round=state.current_round,
            pick=state.current_pick,
            timestamp=now,
            auto=auto,
        )
        team = add_player_to_team(
            team, player_id, state.current_round, state.current_pick, now, league.max_players_per_team
        )
        state.pick_history.append(record)

        if picks_exhausted(league):
            complete_draft(league)
        else:
            self._advance(league, now)

        self.store.commit(league, expected_version, teams=[team])

        logger.info(
            "%s player %s for user %s in league %s (R%sP%s, %s/%s picks)",
            "Auto-picked" if auto else "Drafted",
            player_id,
            acting_user,
            league_id,
            record.round,
            record.pick,
            len(state.pick_history),
            league.total_picks(),
        )
        if not state.is_active:
            logger.info("Draft completed for league %s", league_id)

        notify_roster_changed(self.roster_listeners, team)

        return PickResult(
            pick=record,
            team_name=team.team_name,
            next_round=state.current_round,
            next_pick=state.current_pick,
            next_turn_user_id=state.current_turn_user_id,
            draft_complete=not state.is_active,
        )

    def _advance(self, league, now):
        state = league.draft_state
        try:
            position = next_turn(
                state.current_round,
                state.current_pick,
                state.draft_order,
                league.draft_settings.draft_type,
                len(league.active_participants()),
                league.max_players_per_team,
            )
            if position.is_complete:
                raise DraftOrderInvalid(
                    f"Rounds exhausted after {len(state.pick_history)} of {league.total_picks()} picks"
                )
        except DraftOrderInvalid:
            logger.error(
                "Aborting pick in league %s, draft state is inconsistent: %s",
                league.league_id,
                state.model_dump(mode="json"),
            )
            raise

        state.current_round = position.round
        state.current_pick = position.pick
        state.current_turn_user_id = position.turn_holder
        state.current_turn_start_time = now

    def _finish_early(self, league, expected_version) -> PickResult:
        state = league.draft_state
        logger.info(
            "No players available in league %s, ending draft early at %s/%s picks",
            league.league_id,
            len(state.pick_history),
            league.total_picks(),
        )
        complete_draft(league, early=True)
        self.store.commit(league, expected_version)

        return PickResult(
            pick=None,
            team_name=None,
            next_round=state.current_round,
            next_pick=state.current_pick,
            next_turn_user_id=None,
            draft_complete=True,
            completed_early=True,
        )
