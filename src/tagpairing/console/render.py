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

"""Plain-text rendering of the tournament projection."""

from typing import Collection, Optional

from tagpairing.constants import TEAM1
from tagpairing.controllers.tournament_controller import CommandResult
from tagpairing.state import MatchCard, TournamentPhase, TournamentState

from .adapters import Colors


def print_result(result: CommandResult, shown: Collection[str] = ()) -> None:
    """Print the outcome of a command, skipping text already notified."""
    if result.success:
        if result.message and result.message not in shown:
            print(f"{Colors.OKGREEN}{result.message}{Colors.ENDC}")
    elif result.cancelled:
        print(f"{Colors.WARNING}Cancelled{Colors.ENDC}")
    elif result.error_message and result.error_message not in shown:
        print(f"{Colors.FAIL}{result.error_message}{Colors.ENDC}")


def print_status(state: TournamentState, save_status: Optional[str] = None) -> None:
    title = state.name or "(unnamed tournament)"
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}{title}{Colors.ENDC}")
    print(f"  Format:          {state.format_name}")
    print(f"  BYE points:      {state.bye_points}")
    print(f"  Teams:           {state.team_count}")
    print(f"  Official rounds: {state.official_rounds}")
    print(f"  Planned rounds:  {state.planned_rounds}")
    if state.phase not in (TournamentPhase.NOT_CONFIGURED, TournamentPhase.REGISTRATION):
        print(f"  Current round:   {state.current_round}")
    if save_status:
        print(f"  {save_status}")
    print(f"\n{state.status_message}\n")


def print_teams(state: TournamentState) -> None:
    if not state.teams:
        print("No teams registered yet.")
        return
    print(f"\n{Colors.BOLD}Registered Teams ({len(state.teams)}){Colors.ENDC}")
    for card in state.teams:
        solo = " [solo]" if card.is_solo else ""
        print(
            f"  #{card.team_id:<3} {card.name}{solo}: {card.player1_name} & "
            f"{card.player2_name}  ({card.points} pts, priority: "
            f"{card.priority_player_name})"
        )
    print()


def _game_line(label: str, card: MatchCard, index: int) -> str:
    game = card.games[index]
    priority = " (Priority)" if game.is_priority else ""
    if game.winner is None:
        outcome = "pending"
    elif game.winner == TEAM1:
        outcome = f"won by {card.team1_name}"
    else:
        outcome = f"won by {card.team2_name}"
    return f"    Game {label}: {game.player1_name} vs {game.player2_name}{priority} - {outcome}"


def print_matches(state: TournamentState) -> None:
    if not state.current_matches:
        print("No matches in the current round.")
        return
    print(f"\n{Colors.BOLD}Round {state.current_round}{Colors.ENDC}")
    for card in state.current_matches:
        if card.is_bye:
            print(f"  {card.match_id}: {card.team1_name} receives a BYE")
            continue
        status = (
            f"{Colors.OKGREEN}complete{Colors.ENDC}"
            if card.is_complete
            else f"{Colors.WARNING}in progress{Colors.ENDC}"
        )
        print(
            f"  {card.match_id}: {card.team1_name} ({card.team1_points}) vs "
            f"{card.team2_name} ({card.team2_points}) [{status}]"
        )
        for index, label in enumerate("AB"[: len(card.games)]):
            print(_game_line(label, card, index))
    print()


def print_standings(state: TournamentState) -> None:
    if not state.standings:
        print("No teams registered yet.")
        return
    header = f"  {'Rank':<5} {'Team':<28} {'Pts':>4} {'OMW%':>6} {'OOMW%':>6} {'MP':>3}"
    print(f"\n{Colors.BOLD}{header}{Colors.ENDC}")
    for row in state.standings:
        print(
            f"  {row.rank:<5} {row.display_name:<28} {row.points:>4} "
            f"{row.omw_percent:>6.1f} {row.oomw_percent:>6.1f} {row.matches_played:>3}"
        )
    print()


def print_history(state: TournamentState) -> None:
    if not state.history:
        print("No completed matches yet.")
        return
    current = None
    for row in state.history:
        if row.round != current:
            current = row.round
            print(f"\n{Colors.BOLD}Round {current}{Colors.ENDC}")
        if row.is_bye:
            print(f"  {row.team1_name} ({row.team1_players}): BYE")
            continue
        print(
            f"  {row.team1_name} ({row.team1_players}) vs "
            f"{row.team2_name} ({row.team2_players})"
        )
        for line in row.game_results:
            print(f"    {line}")
        print(f"    {row.points_summary}  Winner: {row.winner_name}")
    print()

