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

"""
Tournament business logic controller.

This module separates the tournament management business logic from any
front end. The TournamentController handles:
- Tournament set-up and team registration
- Starting the event and generating each round
- Result recording
- Completing and resetting the event
- Saving and restoring through the persistence port

The controller owns the Tournament and is its only mutator. Every command
resolves to a CommandResult; no error escapes a command call.
"""

import functools
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from tagpairing.constants import (
    DEFAULT_BYE_POINTS,
    DEFAULT_FORMAT,
    FORMAT_ROUND_ROBIN,
    FORMAT_SWISS,
    MIN_TEAMS_TO_START,
)
from tagpairing.controllers.tournament import (
    MatchEngine,
    PairingEngine,
    RankingCalculator,
    TeamRanking,
)
from tagpairing.exceptions import (
    CorruptPersistedState,
    FileSaveException,
    MatchNotFoundException,
    TagPairingException,
    TeamNotFoundException,
    TournamentStateException,
    ValidationRejection,
)
from tagpairing.models import Match, Team, Tournament, TournamentConfig
from tagpairing.pairing import schedule_exhausted
from tagpairing.ports import (
    AutoConfirm,
    ConfirmationPort,
    LogNotifier,
    NotificationPort,
    PersistencePort,
)
from tagpairing.state import TournamentState
from tagpairing.storage import tournament_from_snapshot
from tagpairing.utils import IdGenerator, setup_logger
from tagpairing.utils.validation import (
    validate_format,
    validate_non_negative,
    validate_team_entry,
    validate_tournament_name,
)

logger = setup_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of one operator command.

    Attributes
    ----------
    success : bool
        Whether the command was applied.
    message : str or None
        Status message for a successful command.
    error_message : str or None
        Why the command was rejected or ignored.
    error_kind : str or None
        Category of the rejection (``validation``, ``state``,
        ``not_found``, ``ignored``, ``internal``).
    cancelled : bool
        The operator declined the confirmation prompt.
    match_completed : bool
        A recorded result finished its match.
    round_complete : bool
        Every match of the current round is now complete.
    """

    success: bool
    message: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[str] = None
    cancelled: bool = False
    match_completed: bool = False
    round_complete: bool = False

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.success


def command(action: str) -> Callable:
    """Turn a controller method into an operator command.

    Domain exceptions become a rejected CommandResult that is logged and
    notified. Anything else is an internal fault: it is logged with its
    traceback, the tournament is rolled back to its state before the call and
    the operator is told the action failed. Successful commands are saved.
    """

    def decorator(method: Callable[..., CommandResult]) -> Callable[..., CommandResult]:
        @functools.wraps(method)
        def wrapper(self: "TournamentController", *args, **kwargs) -> CommandResult:
            backup = self.tournament.to_dict()
            try:
                result = method(self, *args, **kwargs)
            except TagPairingException as e:
                logger.warning("%s rejected: %s", action, e)
                self._notify(str(e))
                return CommandResult(
                    success=False, error_message=str(e), error_kind=e.kind
                )
            except Exception as e:
                logger.exception("Error during %s:", action)
                self.tournament = Tournament.from_dict(backup)
                message = f"{action} failed: {e}"
                self._notify(message)
                return CommandResult(
                    success=False, error_message=message, error_kind="internal"
                )
            if result.success:
                self.save()
            return result

        return wrapper

    return decorator


class TournamentController:
    """
    Controller for tournament business logic.

    This class encapsulates all tournament management logic, separating it
    from the console or any other front end. It provides a clean interface
    for every operator action and a read-only projection for display.

    Parameters
    ----------
    tournament : Tournament, optional
        The tournament to manage; a new empty one if omitted.
    store : PersistencePort, optional
        Where snapshots are saved; nothing is saved if omitted.
    confirmation : ConfirmationPort, optional
        Asked before irreversible actions; answers yes if omitted.
    notifier : NotificationPort, optional
        Receives status and error messages; logs them if omitted.
    rng : random.Random, optional
        Random source for the first Swiss round.
    id_generator : IdGenerator, optional
        Source of match ids.
    clock : callable, optional
        Returns the current time, used for the save status.
    """

    def __init__(
        self,
        tournament: Optional[Tournament] = None,
        store: Optional[PersistencePort] = None,
        confirmation: Optional[ConfirmationPort] = None,
        notifier: Optional[NotificationPort] = None,
        rng: Optional[random.Random] = None,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.tournament = tournament if tournament is not None else Tournament()
        self.store = store
        self.confirmation = confirmation if confirmation is not None else AutoConfirm()
        self.notifier = notifier if notifier is not None else LogNotifier()
        self.clock = clock if clock is not None else datetime.now
        self.ids = id_generator if id_generator is not None else IdGenerator()
        self.match_engine = MatchEngine(self.ids)
        self.pairing_engine = PairingEngine(self.match_engine, rng)
        self.save_status: Optional[str] = None
        self._sync_ids()

    def _sync_ids(self) -> None:
        all_ids = [m.id for m in self.tournament.matches]
        all_ids.extend(m.id for m in self.tournament.all_matches)
        self.ids.advance_past(all_ids)

    def _notify(self, message: str) -> None:
        """Send a message to the operator; a broken notifier is only logged."""
        try:
            self.notifier.notify(message)
        except Exception:
            logger.exception("Notification failed:")

    # ========== Set-up ==========

    @command("Tournament initialisation")
    def initialize_tournament(
        self,
        name: str,
        tournament_format: str = DEFAULT_FORMAT,
        bye_points: int = DEFAULT_BYE_POINTS,
        custom_round_limit: Optional[int] = None,
    ) -> CommandResult:
        """Start a new tournament, discarding teams and matches.

        Args:
            name: Tournament name
            tournament_format: ``"swiss"`` or ``"roundrobin"``
            bye_points: Points awarded for a bye
            custom_round_limit: Planned number of rounds, None for the
                official table
        """
        config = TournamentConfig(
            name=validate_tournament_name(name),
            format=validate_format(tournament_format),
            bye_points=validate_non_negative(bye_points, "BYE points"),
            custom_round_limit=validate_non_negative(
                custom_round_limit, "Custom rounds"
            ),
        )
        if config.bye_points is None:
            config.bye_points = DEFAULT_BYE_POINTS

        self.tournament = Tournament(config=config)
        logger.info(
            "Tournament initialized: %s (format=%s, bye_points=%s, custom_rounds=%s)",
            config.name,
            config.format,
            config.bye_points,
            config.custom_round_limit,
        )

        rounds_message = (
            f"Custom rounds: {config.custom_round_limit}"
            if config.custom_round_limit
            else "Using official round rules"
        )
        message = (
            f"Tournament initialized successfully! BYE points: {config.bye_points}, "
            f"{rounds_message}"
        )
        self._notify(message)
        return CommandResult(success=True, message=message)

    @command("Team registration")
    def register_team(
        self,
        team_name: str,
        player1_name: str,
        player2_name: Optional[str] = None,
        is_solo: bool = False,
    ) -> CommandResult:
        """Register a team before the tournament starts.

        A solo team fields ``NonPlayer`` as its second player.
        """
        if self.tournament.is_started:
            raise TournamentStateException(
                "Cannot register teams once the tournament has started."
            )

        name, player1, player2 = validate_team_entry(
            team_name,
            player1_name,
            player2_name,
            is_solo,
            self.tournament.team_names(),
        )
        team = Team(
            team_id=self.tournament.allocate_team_id(),
            name=name,
            player1_name=player1,
            player2_name=player2,
            is_solo=is_solo,
        )
        self.tournament.teams.append(team)
        logger.info("Registered team %s (%s)%s", team.name, team.id, " solo" if is_solo else "")
        return CommandResult(success=True, message=f"Team {team.name} registered")

    @command("Team removal")
    def remove_team(self, team_id: int) -> CommandResult:
        """Remove a registered team (only before the tournament starts)."""
        if self.tournament.is_started:
            raise TournamentStateException(
                "Cannot remove teams while the tournament is in progress."
            )

        team = self.tournament.get_team(team_id)
        if team is None:
            raise TeamNotFoundException(f"Team not found: {team_id}")

        if not self.confirmation.confirm("Are you sure you want to remove this team?"):
            return CommandResult(success=False, cancelled=True)

        self.tournament.teams = [t for t in self.tournament.teams if t.id != team_id]
        logger.info("Removed team %s (%s)", team.name, team_id)
        return CommandResult(success=True, message=f"Team {team.name} removed")

    # ========== Round progression ==========

    def _round_summary(self, new_matches: List[Match]) -> str:
        byes = [m for m in new_matches if m.is_bye]
        played = len(new_matches) - len(byes)
        summary = f"Round {self.tournament.current_round}: {played} match(es)"
        if byes:
            summary += f", BYE: {byes[0].team1.name}"
        return summary

    @command("Tournament start")
    def start_tournament(self) -> CommandResult:
        """Start the tournament and generate round 1."""
        tournament = self.tournament
        if tournament.is_active:
            raise TournamentStateException(
                "Tournament is already active! Cannot start a new tournament."
            )
        if tournament.is_complete:
            raise TournamentStateException(
                "Tournament is already complete! "
                "Please reset matches to start a new tournament."
            )
        team_count = len(tournament.teams)
        if team_count < MIN_TEAMS_TO_START:
            raise ValidationRejection(
                f"Need at least {MIN_TEAMS_TO_START} teams to start tournament"
            )

        if team_count % 2 != 0 and tournament.format == FORMAT_SWISS:
            self._notify(
                f"Tournament starting with {team_count} teams. "
                "Odd number of teams - bye system will be used."
            )

        tournament.is_active = True
        tournament.current_round = 1
        new_matches = self.pairing_engine.generate_round(tournament)
        logger.info("Tournament %s started with %s teams", tournament.name, team_count)
        return CommandResult(
            success=True, message=f"Tournament started. {self._round_summary(new_matches)}"
        )

    def _incomplete_round_message(self, prefix: str) -> Optional[str]:
        incomplete = self.tournament.incomplete_current_matches()
        if not incomplete:
            return None
        return (
            f"{prefix} {len(incomplete)} match(es) from Round "
            f"{self.tournament.current_round} are still incomplete. "
            "Please finish all current matches first."
        )

    def round_robin_exhausted(self) -> bool:
        """Whether every scheduled round-robin round has been released."""
        tournament = self.tournament
        return tournament.format == FORMAT_ROUND_ROBIN and schedule_exhausted(
            tournament.current_round, len(tournament.teams)
        )

    @command("Round generation")
    def generate_next_round(self) -> CommandResult:
        """Advance to the next round once the current one is finished."""
        tournament = self.tournament
        if tournament.is_complete:
            raise TournamentStateException(
                "Tournament is already complete! Cannot generate next round."
            )
        if not tournament.is_active:
            raise TournamentStateException(
                "Tournament is not active! Cannot generate next round."
            )
        blocker = self._incomplete_round_message("Cannot generate next round!")
        if blocker:
            raise TournamentStateException(blocker)
        if self.round_robin_exhausted():
            raise TournamentStateException(
                f"All {tournament.current_round} round-robin rounds have been played."
            )

        tournament.current_round += 1
        logger.info("Generating Round %s...", tournament.current_round)
        new_matches = self.pairing_engine.generate_round(tournament)

        message = self._round_summary(new_matches)
        planned = self.planned_rounds()
        if tournament.current_round > planned:
            message += f" (beyond the planned {planned} rounds)"
        return CommandResult(success=True, message=message)

    # ========== Results ==========

    @command("Result recording")
    def record_result(self, match_id: str, game_index: int, winner: str) -> CommandResult:
        """Record the winner of one game.

        Args:
            match_id: Id of a released match
            game_index: 0 for the player 1 table, 1 for the player 2 table
            winner: ``"team1"`` or ``"team2"``
        """
        match = self.tournament.get_match(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match not found: {match_id}")

        outcome = self.match_engine.record_result(match, game_index, winner)
        if not outcome.applied:
            return CommandResult(
                success=False, error_message=outcome.reason, error_kind="ignored"
            )

        if outcome.match_completed:
            self.match_engine.settle(match, self.tournament)

        round_complete = self.current_round_complete()
        message = f"Game {game_index + 1} recorded: +{outcome.points} points"
        if round_complete:
            round_message = (
                f"Round {self.tournament.current_round} completed. Next round available."
            )
            logger.info(round_message)
            self._notify(round_message)
            message = f"{message}. {round_message}"

        return CommandResult(
            success=True,
            message=message,
            match_completed=outcome.match_completed,
            round_complete=round_complete,
        )

    def current_round_complete(self) -> bool:
        matches = self.tournament.current_round_matches()
        return bool(matches) and all(m.is_complete for m in matches)

    # ========== Completion and reset ==========

    @command("Tournament completion")
    def complete_tournament(self) -> CommandResult:
        """Mark the tournament as complete. Cannot be undone."""
        tournament = self.tournament
        if not tournament.is_active:
            raise TournamentStateException(
                "Cannot complete tournament! Tournament is not active."
            )
        if not tournament.matches:
            raise TournamentStateException(
                "Cannot complete tournament! No matches have been played yet."
            )
        blocker = self._incomplete_round_message("Cannot complete tournament!")
        if blocker:
            raise TournamentStateException(blocker)

        completed = sum(1 for m in tournament.matches if m.is_complete)
        prompt = (
            "Are you sure you want to complete the tournament?\n\n"
            f"Tournament: {tournament.name}\n"
            f"Rounds played: {tournament.current_round}\n"
            f"Total matches: {completed}\n"
            f"Teams: {len(tournament.teams)}\n\n"
            "This action cannot be undone. The tournament will be marked as complete."
        )
        if not self.confirmation.confirm(prompt):
            logger.info("Tournament completion cancelled by user")
            return CommandResult(success=False, cancelled=True)

        tournament.is_complete = True
        tournament.is_active = False
        message = (
            f'Tournament "{tournament.name}" completed successfully! '
            "Check the final standings to see the winners."
        )
        logger.info("Tournament %s completed after %s rounds", tournament.name, tournament.current_round)
        self._notify(message)
        return CommandResult(success=True, message=message)

    @command("Match reset")
    def reset_matches(self) -> CommandResult:
        """Clear every match and result while keeping the registered teams."""
        if not self.confirmation.confirm(
            "This will reset all matches and points but keep registered teams. Continue?"
        ):
            return CommandResult(success=False, cancelled=True)

        tournament = self.tournament
        tournament.is_active = False
        tournament.is_complete = False
        tournament.current_round = 0
        tournament.matches = []
        tournament.all_matches = []
        for team in tournament.teams:
            team.reset_history()

        message = "Matches reset successfully! Teams are preserved."
        logger.info("Reset completed - %s teams kept", len(tournament.teams))
        self._notify(message)
        return CommandResult(success=True, message=message)

    # ========== Persistence ==========

    def save(self) -> bool:
        """Save the tournament through the persistence port.

        A failed save is reported but never changes the in-memory state.

        Returns:
            True if the snapshot was stored
        """
        if self.store is None:
            return False
        try:
            stored = self.store.save(self.tournament.to_dict())
            if stored is False:
                raise FileSaveException("Storage rejected the tournament snapshot")
        except Exception as e:
            logger.exception("Failed to auto-save tournament:")
            self.save_status = "Save failed"
            self._notify(f"Save failed: {e}")
            return False

        self.save_status = f"Auto-saved at {self.clock().strftime('%H:%M:%S')}"
        logger.debug("Tournament auto-saved")
        return True

    def restore(self) -> CommandResult:
        """Load the saved tournament, if there is a usable one.

        Saved data that is unreadable is treated as absent.
        """
        if self.store is None:
            return CommandResult(success=False, error_message="No storage configured")

        try:
            snapshot = self.store.load()
            if snapshot is None:
                return CommandResult(success=False, error_message="No saved tournament")
            tournament = tournament_from_snapshot(snapshot)
        except CorruptPersistedState as e:
            logger.warning("Discarding saved tournament: %s", e)
            return CommandResult(
                success=False, error_message="No saved tournament", error_kind="corrupt"
            )
        except Exception:
            logger.exception("Failed to load tournament:")
            return CommandResult(success=False, error_message="No saved tournament")

        if not tournament.has_saved_content():
            return CommandResult(success=False, error_message="No saved tournament")

        self.tournament = tournament
        self._sync_ids()
        logger.info("Loaded tournament: %s", tournament.name)
        return CommandResult(success=True, message=f"Loaded tournament: {tournament.name}")

    def clear_storage(self) -> CommandResult:
        """Erase the saved tournament; the one in memory is kept."""
        if self.store is None:
            return CommandResult(success=False, error_message="No storage configured")
        if not self.confirmation.confirm(
            "This will delete all saved tournament data. Are you sure?"
        ):
            return CommandResult(success=False, cancelled=True)
        try:
            self.store.clear()
        except Exception as e:
            logger.exception("Failed to clear storage:")
            self._notify(f"Could not clear storage: {e}")
            return CommandResult(
                success=False, error_message=str(e), error_kind="persistence"
            )
        self.save_status = None
        self._notify("Storage cleared")
        return CommandResult(success=True, message="Storage cleared")

    # ========== Queries ==========

    def standings(self) -> List[TeamRanking]:
        """Current standings, best to worst."""
        return RankingCalculator(self.tournament).standings()

    def planned_rounds(self) -> int:
        """Rounds the event is planned to run (advisory)."""
        return TournamentState.planned_rounds_for(self.tournament)

    def state(self) -> TournamentState:
        """Read-only projection of the tournament for display."""
        return TournamentState.compute(self.tournament)
