import pytest

from tagpairing.constants import GAME_A, GAME_B, NON_PLAYER_NAME, PLAYER1, PLAYER2
from tagpairing.controllers.tournament import MatchEngine, priority_player
from tagpairing.exceptions import InvalidResultException
from tagpairing.models import Team, Tournament
from tagpairing.utils import IdGenerator


def _build_pair():
    crew = Team(1, "Straw Hats", "Luffy", "Zoro")
    rivals = Team(2, "Heart Pirates", "Law", "Bepo")
    return crew, rivals


def test_priority_player_alternates_by_round():
    team = Team(1, "Straw Hats", "Luffy", "Zoro")
    assert priority_player(team, 1) == PLAYER1
    assert priority_player(team, 2) == PLAYER2
    assert priority_player(team, 3) == PLAYER1


def test_odd_round_priority_on_player_one_table():
    crew, rivals = _build_pair()
    match = MatchEngine().create_match(crew, rivals, 1)

    game_a, game_b = match.games
    assert (game_a.player1_name, game_a.player2_name) == ("Luffy", "Law")
    assert (game_b.player1_name, game_b.player2_name) == ("Zoro", "Bepo")
    assert game_a.is_priority and not game_b.is_priority


def test_even_round_priority_on_player_two_table():
    crew, rivals = _build_pair()
    match = MatchEngine().create_match(crew, rivals, 2)

    assert not match.games[GAME_A].is_priority
    assert match.games[GAME_B].is_priority


def test_match_holds_team_snapshots():
    crew, rivals = _build_pair()
    match = MatchEngine().create_match(crew, rivals, 1)

    crew.points = 99
    assert match.team1 is not crew
    assert match.team1.id == crew.id
    assert match.team1.points == 0


def test_match_ids_come_from_injected_generator():
    crew, rivals = _build_pair()
    engine = MatchEngine(IdGenerator(start=40))

    first = engine.create_match(crew, rivals, 1)
    bye = engine.create_bye(crew, 1, 3)

    assert first.id == "match_40"
    assert bye.id == "bye_41"


def test_winning_both_games_scores_five():
    crew, rivals = _build_pair()
    engine = MatchEngine()
    match = engine.create_match(crew, rivals, 1)

    first = engine.record_result(match, GAME_A, "team1")
    second = engine.record_result(match, GAME_B, "team1")

    assert first.applied and first.points == 3 and not first.match_completed
    assert second.applied and second.points == 2 and second.match_completed
    assert match.is_complete
    assert (match.team1_points, match.team2_points) == (5, 0)


def test_split_match_is_won_at_priority_table():
    crew, rivals = _build_pair()
    engine = MatchEngine()
    match = engine.create_match(crew, rivals, 2)

    engine.record_result(match, GAME_A, "team1")
    engine.record_result(match, GAME_B, "team2")

    assert (match.team1_points, match.team2_points) == (2, 3)
    assert match.winner_side == "team2"
    assert match.won_by(rivals.id)
    assert not match.won_by(crew.id)


def test_solo_team_forfeits_non_player_game_at_creation():
    solo = Team(1, "Lone Captain", "Luffy", is_solo=True)
    crew = Team(2, "Heart Pirates", "Law", "Bepo")
    match = MatchEngine().create_match(solo, crew, 1)

    game_a, game_b = match.games
    assert game_a.player1_name == "Luffy"
    assert game_b.player1_name == NON_PLAYER_NAME
    assert game_a.is_priority and not game_b.is_priority
    assert game_b.winner == "team2"
    assert game_a.winner is None
    assert (match.team1_points, match.team2_points) == (0, 2)
    assert not match.is_complete


def test_solo_override_applies_in_even_rounds():
    crew = Team(1, "Heart Pirates", "Law", "Bepo")
    solo = Team(2, "Lone Captain", "Luffy", is_solo=True)
    match = MatchEngine().create_match(crew, solo, 2)

    assert match.games[GAME_A].is_priority
    assert not match.games[GAME_B].is_priority
    assert match.games[GAME_B].winner == "team1"
    assert match.team1_points == 2


def test_solo_player_win_is_worth_priority_points():
    solo = Team(1, "Lone Captain", "Luffy", is_solo=True)
    crew = Team(2, "Heart Pirates", "Law", "Bepo")
    engine = MatchEngine()
    match = engine.create_match(solo, crew, 2)

    outcome = engine.record_result(match, GAME_A, "team1")

    assert outcome.points == 3
    assert outcome.match_completed
    assert (match.team1_points, match.team2_points) == (3, 2)
    assert match.winner_side == "team1"


def test_two_solo_teams_both_receive_forfeit_points():
    first = Team(1, "Lone Captain", "Luffy", is_solo=True)
    second = Team(2, "Greatest Swordsman", "Mihawk", is_solo=True)
    match = MatchEngine().create_match(first, second, 1)

    assert (match.team1_points, match.team2_points) == (2, 2)
    assert match.games[GAME_B].winner == "team1"
    assert match.games[GAME_A].is_priority


def test_pre_decided_game_cannot_be_recorded_again():
    solo = Team(1, "Lone Captain", "Luffy", is_solo=True)
    crew = Team(2, "Heart Pirates", "Law", "Bepo")
    engine = MatchEngine()
    match = engine.create_match(solo, crew, 1)

    outcome = engine.record_result(match, GAME_B, "team2")

    assert not outcome.applied
    assert outcome.reason == "Game already decided"
    assert match.team2_points == 2


def test_recording_after_completion_changes_nothing():
    crew, rivals = _build_pair()
    engine = MatchEngine()
    match = engine.create_match(crew, rivals, 1)
    engine.record_result(match, GAME_A, "team1")
    engine.record_result(match, GAME_B, "team1")

    outcome = engine.record_result(match, GAME_A, "team2")

    assert not outcome.applied
    assert (match.team1_points, match.team2_points) == (5, 0)


def test_bye_ignores_results():
    crew, _ = _build_pair()
    engine = MatchEngine()
    bye = engine.create_bye(crew, 1, 3)

    assert bye.is_bye and bye.is_complete
    assert bye.team1_points == 3
    assert not engine.record_result(bye, GAME_A, "team1").applied


@pytest.mark.parametrize("game_index, winner", [(2, "team1"), (-1, "team1"), (0, "team3")])
def test_invalid_result_is_rejected(game_index, winner):
    crew, rivals = _build_pair()
    engine = MatchEngine()
    match = engine.create_match(crew, rivals, 1)

    with pytest.raises(InvalidResultException):
        engine.record_result(match, game_index, winner)
    assert all(game.winner is None for game in match.games)


def test_settle_updates_live_teams():
    crew, rivals = _build_pair()
    tournament = Tournament(teams=[crew, rivals])
    engine = MatchEngine()
    match = engine.create_match(crew, rivals, 1)
    engine.record_result(match, GAME_A, "team2")
    engine.record_result(match, GAME_B, "team1")

    assert engine.settle(match, tournament)

    assert (crew.points, rivals.points) == (2, 3)
    assert crew.opponent_ids == [rivals.id]
    assert rivals.match_ids == [match.id]
