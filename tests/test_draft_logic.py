"""Tests for draft order generation, turn advancement and completion checks."""

import random
from collections import Counter

import pytest

from gradedraft.exceptions import DraftOrderInvalid
from gradedraft.models.league import DraftType, League, LeagueStatus, PickRecord
from gradedraft.services.draft_logic import (
    available_player_ids,
    complete_draft,
    expected_turn_holder,
    generate_draft_order,
    is_draft_complete,
    next_turn,
    turn_index,
)

from conftest import START, seed_league


def _round_order(draft_type, round_number, total=4):
    return [turn_index(round_number, pick, total, draft_type) for pick in range(1, total + 1)]


# -----------------------
# Draft order
# -----------------------


def test_draft_order_is_a_permutation():
    users = ["u1", "u2", "u3", "u4", "u5"]
    order = generate_draft_order(users, rng=random.Random(7))

    assert sorted(order) == sorted(users)
    assert users == ["u1", "u2", "u3", "u4", "u5"]


def test_draft_order_is_reproducible_with_seed():
    users = ["a", "b", "c", "d"]
    assert generate_draft_order(users, rng=random.Random(42)) == generate_draft_order(
        users, rng=random.Random(42)
    )


def test_draft_order_requires_two_participants():
    with pytest.raises(DraftOrderInvalid):
        generate_draft_order(["solo"])


def test_draft_order_first_slot_is_roughly_uniform():
    rng = random.Random(1234)
    counts = Counter(generate_draft_order(["a", "b", "c"], rng=rng)[0] for _ in range(3000))
    for user in "abc":
        assert 850 < counts[user] < 1150


# -----------------------
# Turn advancement
# -----------------------


def test_snake_round_orders():
    assert _round_order(DraftType.SNAKE, 1) == [0, 1, 2, 3]
    assert _round_order(DraftType.SNAKE, 2) == [3, 2, 1, 0]
    assert _round_order(DraftType.SNAKE, 3) == [0, 1, 2, 3]


def test_linear_round_orders():
    for round_number in (1, 2, 3):
        assert _round_order(DraftType.LINEAR, round_number) == [0, 1, 2, 3]


def test_next_turn_wraps_to_next_round():
    order = ["A", "B", "C"]
    position = next_turn(1, 3, order, DraftType.LINEAR, 3, 2)
    assert position == (2, 1, "A", False)


def test_next_turn_snake_reverses_even_round():
    order = ["A", "B"]
    position = next_turn(1, 2, order, DraftType.SNAKE, 2, 3)
    assert position.round == 2
    assert position.pick == 1
    assert position.turn_holder == "B"


def test_next_turn_reports_round_overflow():
    position = next_turn(2, 3, ["A", "B", "C"], DraftType.LINEAR, 3, 2)
    assert position.is_complete
    assert position.turn_holder is None


def test_next_turn_is_deterministic():
    args = (2, 1, ["A", "B", "C", "D"], DraftType.SNAKE, 4, 5)
    assert {next_turn(*args) for _ in range(20)} == {next_turn(*args)}


def test_next_turn_rejects_single_participant():
    with pytest.raises(DraftOrderInvalid):
        next_turn(1, 1, ["A"], DraftType.SNAKE, 1, 3)


def test_next_turn_rejects_order_length_mismatch():
    with pytest.raises(DraftOrderInvalid):
        next_turn(1, 1, ["A", "B"], DraftType.LINEAR, 3, 3)


# -----------------------
# Availability and completion
# -----------------------


def test_available_players_subtracts_history(store):
    league = seed_league(store, pool_size=4)
    league.draft_state.pick_history.append(
        PickRecord(user_id="A", player_id="P2", round=1, pick=1, timestamp=START)
    )

    assert available_player_ids(league) == ["P1", "P3", "P4"]
    assert league.draft_pool == ["P1", "P2", "P3", "P4"]


def test_draft_pool_drops_duplicates():
    league = League(name="Dupes", created_by="t", draft_pool=["s1", "s1", "s1", "s2"])

    assert league.draft_pool == ["s1", "s2"]
    assert available_player_ids(league) == ["s1", "s2"]


def test_available_players_unique_after_pool_edit(store):
    league = seed_league(store, pool_size=2)
    league.draft_pool = ["P1", "P1", "P1", "P2"]

    assert available_player_ids(league) == ["P1", "P2"]


def test_auto_pick_choice_is_uniform_over_unique_players():
    league = League(name="Dupes", created_by="t", draft_pool=["s1", "s1", "s1", "s2"])
    rng = random.Random(5)
    counts = Counter(rng.choice(available_player_ids(league)) for _ in range(4000))

    assert 1800 < counts["s1"] < 2200


def test_expected_turn_holder_follows_round_and_pick(store):
    league = seed_league(store, users=("A", "B", "C"), draft_type=DraftType.SNAKE)
    state = league.draft_state
    state.is_active = True
    state.draft_order = ["A", "B", "C"]
    state.current_round, state.current_pick = 2, 1

    assert expected_turn_holder(league) == "C"


def test_complete_draft_clears_turn(store):
    league = seed_league(store, status=LeagueStatus.DRAFTING)
    league.draft_state.is_active = True
    league.draft_state.current_turn_user_id = "A"
    league.draft_state.current_turn_start_time = START

    complete_draft(league, early=True)

    assert league.status == LeagueStatus.ACTIVE
    assert league.draft_state.current_turn_user_id is None
    assert league.draft_state.current_turn_start_time is None
    assert league.draft_state.completed_early
    assert is_draft_complete(league)
