import pytest

from tagpairing.constants import GAME_A, GAME_B, MIN_WIN_RATE
from tagpairing.controllers.tournament import MatchEngine, RankingCalculator
from tagpairing.models import Team, Tournament


def _build_tournament():
    teams = [
        Team(1, "Alpha", "Ace", "Sabo"),
        Team(2, "Bravo", "Buggy", "Mohji"),
        Team(3, "Charlie", "Crocodile", "Daz"),
        Team(4, "Delta", "Doflamingo", "Trebol"),
    ]
    return Tournament(teams=teams), MatchEngine()


def _play(tournament, engine, team1, team2, round_number, winner_a, winner_b):
    match = engine.create_match(team1, team2, round_number)
    engine.record_result(match, GAME_A, winner_a)
    engine.record_result(match, GAME_B, winner_b)
    engine.settle(match, tournament)
    tournament.matches.append(match)
    return match


def test_team_without_matches_gets_floor_values():
    tournament, _ = _build_tournament()
    calculator = RankingCalculator(tournament)
    team = tournament.teams[0]

    assert calculator.calculate_omw(team) == MIN_WIN_RATE
    assert calculator.calculate_oomw(team) == MIN_WIN_RATE


def test_omw_and_oomw_after_one_round():
    tournament, engine = _build_tournament()
    alpha, bravo, charlie, delta = tournament.teams
    _play(tournament, engine, alpha, bravo, 1, "team1", "team1")
    _play(tournament, engine, charlie, delta, 1, "team1", "team1")
    calculator = RankingCalculator(tournament)

    # Winners faced opponents with no wins, floored to 33.3%
    assert calculator.calculate_omw(alpha) == MIN_WIN_RATE
    assert calculator.calculate_omw(bravo) == 1.0
    assert calculator.calculate_oomw(alpha) == 1.0
    assert calculator.calculate_oomw(bravo) == MIN_WIN_RATE


def test_omw_counts_every_match_of_every_opponent():
    tournament, engine = _build_tournament()
    alpha, bravo, charlie, delta = tournament.teams
    _play(tournament, engine, alpha, bravo, 1, "team1", "team1")
    _play(tournament, engine, charlie, delta, 1, "team1", "team1")
    _play(tournament, engine, alpha, charlie, 2, "team1", "team1")
    _play(tournament, engine, bravo, delta, 2, "team1", "team1")
    calculator = RankingCalculator(tournament)

    records = calculator.match_records()
    assert records[alpha.id] == (2, 2)
    assert records[charlie.id] == (1, 2)
    # Alpha's opponents: Bravo 1/2 and Charlie 1/2
    assert calculator.calculate_omw(alpha, records) == pytest.approx(0.5)
    # Delta's opponents: Charlie 1/2 and Bravo 1/2
    assert calculator.calculate_omw(delta, records) == pytest.approx(0.5)


def test_repeat_opponent_counted_per_meeting():
    tournament, engine = _build_tournament()
    alpha, bravo, charlie, delta = tournament.teams
    _play(tournament, engine, alpha, bravo, 1, "team1", "team1")
    _play(tournament, engine, charlie, delta, 1, "team1", "team1")
    _play(tournament, engine, alpha, bravo, 2, "team2", "team2")
    calculator = RankingCalculator(tournament)

    # Bravo twice: 1 win in 2 matches, counted once per meeting
    assert alpha.opponent_ids == [bravo.id, bravo.id]
    assert calculator.calculate_omw(alpha) == pytest.approx(0.5)


def test_match_win_requires_more_points():
    tournament, engine = _build_tournament()
    alpha, bravo, _, _ = tournament.teams
    _play(tournament, engine, alpha, bravo, 1, "team1", "team2")

    records = RankingCalculator(tournament).match_records()

    assert (alpha.points, bravo.points) == (3, 2)
    assert records[alpha.id] == (1, 1)
    assert records[bravo.id] == (0, 1)


def test_byes_do_not_count_as_matches():
    tournament, engine = _build_tournament()
    alpha = tournament.teams[0]
    alpha.add_bye(3)
    tournament.matches.append(engine.create_bye(alpha, 1, 3))

    calculator = RankingCalculator(tournament)

    assert calculator.match_records() == {}
    assert calculator.calculate_omw(alpha) == MIN_WIN_RATE


def test_standings_order_points_then_tiebreaks_then_name():
    tournament, engine = _build_tournament()
    alpha, bravo, charlie, delta = tournament.teams
    _play(tournament, engine, charlie, delta, 1, "team1", "team1")
    _play(tournament, engine, alpha, bravo, 1, "team1", "team1")

    standings = RankingCalculator(tournament).standings()

    assert [r.team.name for r in standings] == ["Alpha", "Charlie", "Bravo", "Delta"]
    assert [r.points for r in standings] == [5, 5, 0, 0]


def test_bye_key_prefers_fewest_byes_then_lowest_standing():
    tournament, engine = _build_tournament()
    alpha, bravo, charlie, delta = tournament.teams
    _play(tournament, engine, alpha, bravo, 1, "team1", "team1")
    _play(tournament, engine, charlie, delta, 1, "team1", "team1")
    bravo.add_bye(3)
    calculator = RankingCalculator(tournament)

    candidates = sorted(calculator.rankings(), key=calculator.bye_key)

    assert candidates[0].team is delta
    assert candidates[-1].team is bravo
