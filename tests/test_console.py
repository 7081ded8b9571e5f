import argparse
import json

import pytest

from tagpairing.console.__main__ import (
    create_command_parser,
    execute_command,
    main,
    parse_game,
)
from tagpairing.controllers.tournament_controller import TournamentController
from tagpairing.ports import AutoConfirm, LogNotifier


@pytest.mark.parametrize("value, expected", [("a", 0), ("A", 0), ("1", 0), ("b", 1), ("2", 1)])
def test_parse_game(value, expected):
    assert parse_game(value) == expected


def test_parse_game_rejects_unknown():
    with pytest.raises(argparse.ArgumentTypeError):
        parse_game("c")


def test_command_parser_reads_quoted_names():
    args = create_command_parser("register").parse_args(["Straw Hats", "Luffy", "--solo"])
    assert args.team == "Straw Hats"
    assert args.player2 is None
    assert args.solo


def test_scripted_session_persists_to_file(tmp_path, capsys):
    save_file = str(tmp_path / "cup.json")
    base = ["--file", save_file, "--yes", "--seed", "5"]

    assert main(base + ["init", "Grand Line Cup", "--format", "swiss"]) == 0
    assert main(base + ["register", "Straw Hats", "Luffy", "Zoro"]) == 0
    assert main(base + ["register", "Lone Captain", "Law", "--solo"]) == 0
    assert main(base + ["start"]) == 0
    assert main(base + ["start"]) == 1

    with open(save_file, encoding="utf-8") as handle:
        saved = json.load(handle)
    assert saved["config"]["name"] == "Grand Line Cup"
    assert len(saved["teams"]) == 2
    assert saved["is_active"] is True

    output = capsys.readouterr().out
    assert "Tournament is already active!" in output


def test_views_print_projection(capsys):
    controller = TournamentController(confirmation=AutoConfirm(), notifier=LogNotifier())
    controller.initialize_tournament("Grand Line Cup")
    controller.register_team("Straw Hats", "Luffy", "Zoro")
    controller.register_team("Heart Pirates", "Law", "Bepo")
    controller.start_tournament()

    for view in ("status", "teams", "matches", "standings", "history"):
        assert execute_command(controller, view, argparse.Namespace()) == 0

    output = capsys.readouterr().out
    assert "Grand Line Cup" in output
    assert "match_1" in output
    assert "Straw Hats" in output


def test_result_command_records_game(capsys):
    controller = TournamentController(confirmation=AutoConfirm(), notifier=LogNotifier())
    controller.initialize_tournament("Grand Line Cup")
    controller.register_team("Straw Hats", "Luffy", "Zoro")
    controller.register_team("Heart Pirates", "Law", "Bepo")
    controller.start_tournament()

    args = create_command_parser("result").parse_args(["match_1", "a", "team2"])
    assert execute_command(controller, "result", args) == 0

    assert controller.tournament.matches[0].team2_points == 3
    assert "Game 1 recorded: +3 points" in capsys.readouterr().out
