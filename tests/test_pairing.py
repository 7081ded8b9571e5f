import random

import pytest

from tagpairing.models import Team
from tagpairing.pairing import (
    create_schedule,
    create_swiss_pairings,
    number_of_rounds,
    official_swiss_rounds,
    schedule_exhausted,
)
from tagpairing.pairing.round_robin import scheduled_round
from tagpairing.pairing.swiss import pair_first_fit


def _build_teams(count):
    return [Team(i, f"Team {i}", f"P{i}a", f"P{i}b") for i in range(1, count + 1)]


def _unused_selector(teams):
    raise AssertionError("round 1 must not use the bye selector")


def _ids(pairings):
    return [(a.id, b.id) for a, b in pairings]


@pytest.mark.parametrize(
    "team_count, rounds",
    [(2, 3), (8, 3), (9, 4), (10, 4), (16, 4), (17, 5), (64, 6), (65, 7),
     (256, 8), (512, 9), (1024, 10), (1025, 11), (5000, 11)],
)
def test_official_swiss_rounds(team_count, rounds):
    assert official_swiss_rounds(team_count) == rounds


def test_first_fit_skips_previous_opponents():
    teams = _build_teams(4)
    teams[0].opponent_ids.append(2)
    teams[1].opponent_ids.append(1)

    pairings, repeats, unpaired = pair_first_fit(teams)

    assert _ids(pairings) == [(1, 3), (2, 4)]
    assert repeats == 0
    assert unpaired == []


def test_first_fit_falls_back_to_repeat_pairing():
    teams = _build_teams(2)
    teams[0].opponent_ids.append(2)
    teams[1].opponent_ids.append(1)

    pairings, repeats, unpaired = pair_first_fit(teams)

    assert _ids(pairings) == [(1, 2)]
    assert repeats == 1
    assert unpaired == []


def test_round_one_odd_field_gets_one_random_bye():
    teams = _build_teams(5)
    result = create_swiss_pairings(
        teams, 1, random.Random(7), _unused_selector, lambda pool: pool
    )

    assert result.bye_team in teams
    assert len(result.pairings) == 2
    paired = {t.id for pair in result.pairings for t in pair}
    assert result.bye_team.id not in paired
    assert len(paired) == 4


def test_round_one_even_field_has_no_bye():
    teams = _build_teams(6)
    result = create_swiss_pairings(
        teams, 1, random.Random(7), _unused_selector, lambda pool: pool
    )

    assert result.bye_team is None
    assert len(result.pairings) == 3


def test_round_one_is_reproducible_with_seed():
    teams = _build_teams(7)

    first = create_swiss_pairings(teams, 1, random.Random(99), _unused_selector, list)
    second = create_swiss_pairings(teams, 1, random.Random(99), _unused_selector, list)

    assert first.bye_team is second.bye_team
    assert _ids(first.pairings) == _ids(second.pairings)


def test_later_rounds_use_selector_and_ordering():
    teams = _build_teams(5)
    chosen = teams[2]

    result = create_swiss_pairings(
        teams,
        2,
        random.Random(1),
        bye_selector=lambda pool: chosen,
        pool_ordering=lambda pool: list(reversed(pool)),
    )

    assert result.bye_team is chosen
    assert _ids(result.pairings) == [(5, 4), (2, 1)]


def test_number_of_rounds():
    assert number_of_rounds(1) == 1
    assert number_of_rounds(2) == 1
    assert number_of_rounds(4) == 3
    assert number_of_rounds(7) == 6


def test_schedule_meets_every_pair_once():
    teams = _build_teams(5)
    schedule = create_schedule(teams)

    pairs = {frozenset((a.id, b.id)) for _, a, b in schedule}
    assert len(schedule) == 10
    assert len(pairs) == 10
    assert {scheduled for scheduled, _, _ in schedule} == {1, 2, 3, 4}


def test_scheduled_round_is_circular():
    assert [scheduled_round(i, 4) for i in range(6)] == [1, 2, 3, 1, 2, 3]


def test_schedule_exhausted():
    assert not schedule_exhausted(2, 4)
    assert schedule_exhausted(3, 4)
