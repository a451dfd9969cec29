import random
from typing import List, NamedTuple, Optional

from gradedraft.exceptions import DraftOrderInvalid
from gradedraft.models.league import DraftType, League, LeagueStatus

# -----------------------
# Helpers
# -----------------------


class TurnPosition(NamedTuple):
    round: int
    pick: int
    turn_holder: Optional[str]
    is_complete: bool


def generate_draft_order(user_ids, rng=None) -> List[str]:
    """Fisher-Yates shuffle of the participants; the input is left untouched."""
    rng = rng or random
    order = [str(u) for u in user_ids]
    if len(order) < 2:
        raise DraftOrderInvalid(f"Need at least 2 participants, got {len(order)}")

    for i in range(len(order) - 1, 0, -1):
        j = rng.randrange(i + 1)
        order[i], order[j] = order[j], order[i]
    return order


def turn_index(round_number, pick_number, total_participants, draft_type) -> int:
    if DraftType(draft_type) == DraftType.SNAKE and round_number % 2 == 0:
        return total_participants - pick_number
    return pick_number - 1


def available_player_ids(league: League) -> List[str]:
    drafted = league.draft_state.drafted_player_ids()
    pool = dict.fromkeys(str(pid) for pid in league.draft_pool)
    return [pid for pid in pool if pid not in drafted]


# -----------------------
# Core engine
# -----------------------


def next_turn(
    current_round,
    current_pick,
    draft_order,
    draft_type,
    total_participants,
    total_rounds,
) -> TurnPosition:
    if total_participants < 2:
        raise DraftOrderInvalid(f"Draft needs at least 2 participants, got {total_participants}")
    if len(draft_order) != total_participants:
        raise DraftOrderInvalid(
            f"Draft order has {len(draft_order)} entries for {total_participants} participants"
        )

    next_pick = current_pick + 1
    next_round = current_round
    if next_pick > total_participants:
        next_round += 1
        next_pick = 1

    if next_round > total_rounds:
        return TurnPosition(next_round, next_pick, None, True)

    index = turn_index(next_round, next_pick, total_participants, draft_type)
    if not 0 <= index < total_participants:
        raise DraftOrderInvalid(
            f"Turn index {index} out of range for R{next_round}P{next_pick} "
            f"with {total_participants} participants"
        )

    return TurnPosition(next_round, next_pick, draft_order[index], False)


def expected_turn_holder(league: League) -> Optional[str]:
    state = league.draft_state
    total = len(state.draft_order)
    if not state.is_active or total == 0:
        return None

    index = turn_index(
        state.current_round, state.current_pick, total, league.draft_settings.draft_type
    )
    if not 0 <= index < total:
        raise DraftOrderInvalid(f"Turn index {index} out of range for a {total}-team order")
    return state.draft_order[index]


def picks_exhausted(league: League) -> bool:
    return len(league.draft_state.pick_history) >= league.total_picks()


def rounds_exhausted(league: League) -> bool:
    return league.draft_state.current_round > league.max_players_per_team


def is_draft_complete(league: League) -> bool:
    return (
        not league.draft_state.is_active
        or picks_exhausted(league)
        or rounds_exhausted(league)
    )


def complete_draft(league: League, early=False):
    league.transition_to(LeagueStatus.ACTIVE)
    state = league.draft_state
    state.is_active = False
    state.current_turn_user_id = None
    state.current_turn_start_time = None
    state.completed_early = early
