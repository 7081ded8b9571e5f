import random

from tagpairing.constants import GAME_A, GAME_B
from tagpairing.controllers.tournament_controller import TournamentController
from tagpairing.ports import AutoConfirm, LogNotifier
from tagpairing.state import TournamentPhase, TournamentState


def _build_controller(*teams):
    controller = TournamentController(
        confirmation=AutoConfirm(), notifier=LogNotifier(), rng=random.Random(3)
    )
    controller.initialize_tournament("Grand Line Cup")
    for name, player1, player2, solo in teams:
        controller.register_team(name, player1, player2, is_solo=solo)
    return controller


def test_phases_follow_lifecycle():
    controller = TournamentController()
    assert controller.state().phase == TournamentPhase.NOT_CONFIGURED

    controller = _build_controller(
        ("Straw Hats", "Luffy", "Zoro", False), ("Heart Pirates", "Law", "Bepo", False)
    )
    state = controller.state()
    assert state.phase == TournamentPhase.REGISTRATION
    assert state.can_start and not state.can_generate_next

    controller.start_tournament()
    state = controller.state()
    assert state.phase == TournamentPhase.AWAITING_RESULTS
    assert not state.can_complete
    assert state.complete_blocker == "1 match(es) in current round still incomplete"

    match_id = controller.tournament.matches[0].id
    controller.record_result(match_id, GAME_A, "team1")
    controller.record_result(match_id, GAME_B, "team1")
    state = controller.state()
    assert state.phase == TournamentPhase.AWAITING_NEXT_ROUND
    assert state.can_generate_next and state.can_complete

    controller.complete_tournament()
    state = controller.state()
    assert state.phase == TournamentPhase.FINISHED
    assert not state.can_start and state.can_reset


def test_history_describes_games():
    controller = _build_controller(
        ("Lone Captain", "Luffy", None, True), ("Heart Pirates", "Law", "Bepo", False)
    )
    controller.start_tournament()
    match = controller.tournament.matches[0]
    solo_side = "team1" if match.team1.is_solo else "team2"
    controller.record_result(match.id, GAME_A, solo_side)

    (row,) = controller.state().history

    assert row.winner_name == "Lone Captain"
    assert "Luffy vs Law (Priority)" in row.game_results
    assert "Bepo vs NonPlayer" in row.game_results
    assert "Lone Captain: 3 pts" in row.points_summary


def test_bye_history_row_and_standings_display():
    controller = _build_controller(
        ("Alpha", "A1", "A2", False),
        ("Bravo", "B1", "B2", False),
        ("Charlie", "C1", "C2", False),
    )
    controller.start_tournament()

    state = controller.state()
    bye_rows = [row for row in state.history if row.is_bye]
    assert len(bye_rows) == 1
    bye_name = bye_rows[0].team1_name
    standing = next(row for row in state.standings if row.name == bye_name)
    assert standing.display_name == f"{bye_name} (1 BYE)"
    assert standing.points == 3
    assert standing.matches_played == 0
    assert standing.omw_percent == 33.3


def test_team_cards_show_priority_player():
    controller = _build_controller(
        ("Straw Hats", "Luffy", "Zoro", False), ("Heart Pirates", "Law", "Bepo", False)
    )
    cards = controller.state().teams
    assert [card.priority_player_name for card in cards] == ["Luffy", "Law"]
    assert all(card.can_remove for card in cards)

    controller.start_tournament()
    controller.tournament.current_round = 2
    cards = controller.state().teams
    assert [card.priority_player_name for card in cards] == ["Zoro", "Bepo"]
    assert not any(card.can_remove for card in cards)


def test_planned_rounds_prefer_custom_limit():
    controller = _build_controller(("Alpha", "A1", "A2", False), ("Bravo", "B1", "B2", False))
    controller.tournament.config.custom_round_limit = 6

    state = controller.state()

    assert state.official_rounds == 3
    assert state.planned_rounds == 6
    assert TournamentState.planned_rounds_for(controller.tournament) == 6
