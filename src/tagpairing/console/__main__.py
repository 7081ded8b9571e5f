"""Interactive console for running a Tag Pairing tournament.

Every command can be given once on the command line or typed at the
``tagpairing>`` prompt. The tournament is loaded from the save file at start
and saved after every change.
"""

# Tag Pairing
# Copyright (C) 2025  Tag Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import logging
import random
import shlex
import sys
from typing import Callable, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from tagpairing import APP_NAME, APP_VERSION
from tagpairing.constants import (
    DEFAULT_BYE_POINTS,
    DEFAULT_SAVE_FILE,
    GAME_A,
    GAME_B,
    TOURNAMENT_FORMATS,
    WINNER_SIDES,
)
from tagpairing.controllers.tournament_controller import (
    CommandResult,
    TournamentController,
)
from tagpairing.ports import AutoConfirm
from tagpairing.storage import InMemoryStore, JsonFileStore
from tagpairing.utils import set_log_level, setup_logger

from .adapters import Colors, ConsoleNotifier, PromptConfirmer
from .render import (
    print_history,
    print_matches,
    print_result,
    print_standings,
    print_status,
    print_teams,
)

logger = setup_logger(__name__)


# Command definitions with their options
COMMANDS = {
    "init": {
        "description": "Set up a new tournament (clears teams and matches)",
        "options": {
            "<name>": "Tournament name",
            "--format": "Pairing format (swiss/roundrobin, default: swiss)",
            "--bye-points": f"Points for a BYE (default: {DEFAULT_BYE_POINTS})",
            "--rounds": "Planned number of rounds (default: official table)",
        },
    },
    "register": {
        "description": "Register a team",
        "options": {
            "<team>": "Team name",
            "<player1>": "First player",
            "<player2>": "Second player (omit with --solo)",
            "--solo": "Team with a single player",
        },
    },
    "remove": {
        "description": "Remove a team before the tournament starts",
        "options": {"<team_id>": "Id shown by the teams command"},
    },
    "start": {"description": "Start the tournament and pair Round 1", "options": {}},
    "next": {"description": "Generate the next round", "options": {}},
    "result": {
        "description": "Record the winner of one game",
        "options": {
            "<match_id>": "Id shown by the matches command",
            "<game>": "a (player 1s) or b (player 2s)",
            "<winner>": "team1 or team2",
        },
    },
    "complete": {"description": "Mark the tournament as complete", "options": {}},
    "reset": {
        "description": "Clear all matches and points, keeping the teams",
        "options": {},
    },
    "standings": {"description": "Show the standings", "options": {}},
    "matches": {"description": "Show the current round", "options": {}},
    "history": {"description": "Show every completed match", "options": {}},
    "teams": {"description": "Show registered teams", "options": {}},
    "status": {"description": "Show the tournament overview", "options": {}},
    "clear-storage": {"description": "Delete the saved tournament", "options": {}},
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}{APP_NAME} {APP_VERSION}{Colors.ENDC}
Two-player team tournaments: Swiss or round-robin

Type {Colors.BOLD}help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer():
    """Create nested completer for commands and their options."""
    nested = {}
    for cmd, info in COMMANDS.items():
        options = {opt: None for opt in info["options"] if opt.startswith("--")}
        if cmd == "help":
            nested[cmd] = WordCompleter(list(COMMANDS))
        elif cmd == "init":
            options["--format"] = WordCompleter(list(TOURNAMENT_FORMATS))
            nested[cmd] = options
        else:
            nested[cmd] = options or None
    return NestedCompleter.from_nested_dict(nested)


# ========== Argument parsing ==========


def parse_game(value: str) -> int:
    """Accept a, b, 1 or 2 for the game index."""
    key = value.strip().lower()
    if key in ("a", "1"):
        return GAME_A
    if key in ("b", "2"):
        return GAME_B
    raise argparse.ArgumentTypeError(
        f"invalid game {value!r}, expected a or b"
    )


def add_command_arguments(command: str, parser: argparse.ArgumentParser) -> None:
    """Declare the arguments one command accepts."""
    if command == "init":
        parser.add_argument("name", help="Tournament name")
        parser.add_argument("--format", choices=TOURNAMENT_FORMATS, default="swiss")
        parser.add_argument("--bye-points", type=int, default=DEFAULT_BYE_POINTS)
        parser.add_argument("--rounds", type=int, help="Planned number of rounds")
    elif command == "register":
        parser.add_argument("team", help="Team name")
        parser.add_argument("player1", help="First player")
        parser.add_argument("player2", nargs="?", help="Second player")
        parser.add_argument("--solo", action="store_true", help="Single-player team")
    elif command == "remove":
        parser.add_argument("team_id", type=int, help="Team id")
    elif command == "result":
        parser.add_argument("match_id", help="Match id")
        parser.add_argument("game", type=parse_game, help="a or b")
        parser.add_argument("winner", choices=WINNER_SIDES, help="team1 or team2")
    elif command == "help":
        parser.add_argument("topic", nargs="?", help="Command name")


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Create the parser used for a command typed at the prompt."""
    parser = argparse.ArgumentParser(
        prog=command, description=COMMANDS[command]["description"]
    )
    add_command_arguments(command, parser)
    return parser


def create_main_parser():
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="tagpairing",
        description=f"{APP_NAME}: run a two-player team tournament",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  tagpairing

  # Set up and run from the shell
  tagpairing init "Sunday Cup" --format swiss
  tagpairing register "Straw Hats" Luffy Zoro
  tagpairing register "Lone Wolf" Mihawk --solo
  tagpairing start
  tagpairing result match_1 a team1
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )
    parser.add_argument(
        "--file", default=DEFAULT_SAVE_FILE, help="Save file (default: %(default)s)"
    )
    parser.add_argument(
        "--memory", action="store_true", help="Keep the tournament in memory only"
    )
    parser.add_argument("--seed", type=int, help="Random seed for Round 1 pairing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument(
        "--yes", "-y", action="store_true", help="Answer yes to every confirmation"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command, info in COMMANDS.items():
        if command in ("help", "exit"):
            continue
        add_command_arguments(command, subparsers.add_parser(command, help=info["description"]))
    return parser


# ========== Command execution ==========


def build_controller(args: argparse.Namespace) -> TournamentController:
    """Wire the controller to the terminal and the chosen storage."""
    store = InMemoryStore() if args.memory else JsonFileStore(args.file)
    confirmation = AutoConfirm() if args.yes else PromptConfirmer()
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    controller = TournamentController(
        store=store,
        confirmation=confirmation,
        notifier=ConsoleNotifier(),
        rng=rng,
    )
    restored = controller.restore()
    if restored.success:
        logger.info(restored.message)
    return controller


def _run_mutation(
    controller: TournamentController, command: str, args: argparse.Namespace
) -> CommandResult:
    if command == "init":
        return controller.initialize_tournament(
            args.name, args.format, args.bye_points, args.rounds
        )
    if command == "register":
        return controller.register_team(args.team, args.player1, args.player2, args.solo)
    if command == "remove":
        return controller.remove_team(args.team_id)
    if command == "start":
        return controller.start_tournament()
    if command == "next":
        return controller.generate_next_round()
    if command == "result":
        return controller.record_result(args.match_id, args.game, args.winner)
    if command == "complete":
        return controller.complete_tournament()
    if command == "reset":
        return controller.reset_matches()
    return controller.clear_storage()


VIEWS: Dict[str, Callable] = {
    "standings": print_standings,
    "matches": print_matches,
    "history": print_history,
    "teams": print_teams,
}

MUTATIONS = (
    "init",
    "register",
    "remove",
    "start",
    "next",
    "result",
    "complete",
    "reset",
    "clear-storage",
)


def execute_command(
    controller: TournamentController, command: str, args: argparse.Namespace
) -> int:
    """Run one parsed command and print its outcome.

    Returns:
        Process exit code: 0 on success, 1 if the command was refused
    """
    if command in VIEWS:
        VIEWS[command](controller.state())
        return 0
    if command == "status":
        print_status(controller.state(), controller.save_status)
        return 0
    if command in MUTATIONS:
        seen = len(controller.notifier.messages)
        result = _run_mutation(controller, command, args)
        print_result(result, controller.notifier.messages[seen:])
        if result.success and command in ("start", "next"):
            print_matches(controller.state())
        return 0 if result.success else 1

    print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
    return 1


def run_interactive_mode(controller: TournamentController) -> int:
    """Run the prompt loop until the operator exits."""
    print_banner()
    print_status(controller.state(), controller.save_status)

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )

    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = session.prompt("tagpairing> ").strip()

            if not user_input:
                continue

            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            try:
                parts = shlex.split(user_input)
            except ValueError as e:
                print(f"{Colors.FAIL}Could not read command: {e}{Colors.ENDC}")
                continue

            # Strip leading "/" if present (support both "/command" and "command")
            command = parts[0].lstrip("/")
            args_list: List[str] = parts[1:]

            if command in ["help", "?"]:
                if args_list:
                    print_command_help(args_list[0].lstrip("/"))
                else:
                    print_commands_list()
                continue

            if command not in COMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}help{Colors.ENDC} to see available commands")
                continue

            try:
                args = create_command_parser(command).parse_args(args_list)
                execute_command(controller, command, args)
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            except Exception as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the tagpairing console."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    controller = build_controller(args)

    if args.interactive or args.command is None:
        return run_interactive_mode(controller)
    return execute_command(controller, args.command, args)


if __name__ == "__main__":
    sys.exit(main())
