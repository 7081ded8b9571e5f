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
Tournament state projection.

This module provides data structures for tracking and computing tournament state,
including what actions are available at any given point in the tournament lifecycle,
and plain rows for standings, match history and team cards. Nothing here
mutates the tournament.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from tagpairing.constants import (
    FORMAT_NAMES,
    FORMAT_ROUND_ROBIN,
    MIN_TEAMS_TO_START,
    TEAM1,
)
from tagpairing.controllers.tournament import RankingCalculator, priority_player
from tagpairing.models import Match, Tournament
from tagpairing.pairing import (
    number_of_rounds,
    official_swiss_rounds,
    schedule_exhausted,
)


class TournamentPhase(Enum):
    """
    Represents the current phase of a tournament.

    Used to determine which actions should be available.
    """

    NOT_CONFIGURED = auto()  # No name and no teams yet
    REGISTRATION = auto()  # Teams being registered, not started
    AWAITING_RESULTS = auto()  # Round released, results outstanding
    AWAITING_NEXT_ROUND = auto()  # Current round complete
    FINISHED = auto()  # Marked complete by the organiser


@dataclass(frozen=True)
class StandingRow:
    """One line of the standings table."""

    rank: int
    team_id: int
    name: str
    bye_count: int
    points: int
    omw_percent: float
    oomw_percent: float
    matches_played: int

    @property
    def display_name(self) -> str:
        if self.bye_count:
            return f"{self.name} ({self.bye_count} BYE)"
        return self.name


@dataclass(frozen=True)
class GameRow:
    """A game as shown on a match card."""

    player1_name: str
    player2_name: str
    is_priority: bool
    winner: Optional[str]


@dataclass(frozen=True)
class MatchCard:
    """A released match as shown to the operator."""

    match_id: str
    round: int
    is_bye: bool
    is_complete: bool
    team1_name: str
    team2_name: Optional[str]
    team1_points: int
    team2_points: int
    games: List[GameRow] = field(default_factory=list)


@dataclass(frozen=True)
class MatchHistoryRow:
    """A completed match or bye in the history view."""

    round: int
    match_id: str
    is_bye: bool
    team1_name: str
    team2_name: Optional[str]
    team1_players: str
    team2_players: Optional[str]
    game_results: List[str]
    points_summary: str
    winner_name: str


@dataclass(frozen=True)
class TeamCard:
    """A registered team with the player holding priority this round."""

    team_id: int
    name: str
    player1_name: str
    player2_name: str
    is_solo: bool
    points: int
    priority_player_name: str
    can_remove: bool


def percent(rate: float) -> float:
    """Format a win rate as a percentage with one decimal."""
    return round(rate * 100, 1)


def match_card(match: Match) -> MatchCard:
    return MatchCard(
        match_id=match.id,
        round=match.round,
        is_bye=match.is_bye,
        is_complete=match.is_complete,
        team1_name=match.team1.name,
        team2_name=match.team2.name if match.team2 is not None else None,
        team1_points=match.team1_points,
        team2_points=match.team2_points,
        games=[
            GameRow(g.player1_name, g.player2_name, g.is_priority, g.winner)
            for g in match.games
        ],
    )


def history_row(match: Match) -> MatchHistoryRow:
    """Describe a completed match the way the history view lists it."""
    team1 = match.team1
    team1_players = f"{team1.player1_name} & {team1.player2_name}"
    if match.is_bye:
        return MatchHistoryRow(
            round=match.round,
            match_id=match.id,
            is_bye=True,
            team1_name=team1.name,
            team2_name=None,
            team1_players=team1_players,
            team2_players=None,
            game_results=[],
            points_summary=f"{team1.name}: BYE",
            winner_name=team1.name,
        )

    team2 = match.team2
    results = []
    for game in match.games:
        if not game.is_decided:
            continue
        if game.winner == TEAM1:
            winner, loser = game.player1_name, game.player2_name
        else:
            winner, loser = game.player2_name, game.player1_name
        line = f"{winner} vs {loser}"
        if game.is_priority:
            line += " (Priority)"
        results.append(line)

    side = match.winner_side
    winner_name = match.team_on(side).name if side is not None else "Tie"
    return MatchHistoryRow(
        round=match.round,
        match_id=match.id,
        is_bye=False,
        team1_name=team1.name,
        team2_name=team2.name,
        team1_players=team1_players,
        team2_players=f"{team2.player1_name} & {team2.player2_name}",
        game_results=results,
        points_summary=(
            f"{team1.name}: {match.team1_points} pts, "
            f"{team2.name}: {match.team2_points} pts"
        ),
        winner_name=winner_name,
    )


def standings_rows(tournament: Tournament) -> List[StandingRow]:
    return [
        StandingRow(
            rank=position,
            team_id=ranking.team.id,
            name=ranking.team.name,
            bye_count=ranking.team.bye_count,
            points=ranking.points,
            omw_percent=percent(ranking.omw),
            oomw_percent=percent(ranking.oomw),
            matches_played=ranking.team.matches_played,
        )
        for position, ranking in enumerate(
            RankingCalculator(tournament).standings(), start=1
        )
    ]


@dataclass
class TournamentState:
    """
    Encapsulates the computed state of a tournament.

    This class centralizes all state calculations so front ends never
    duplicate them. It determines what actions are currently available
    based on tournament progress.

    Attributes
    ----------
    name : str
        Tournament name
    format_name : str
        Human-readable pairing format
    bye_points : int
        Points awarded for a bye
    phase : TournamentPhase
        Current phase of the tournament
    current_round : int
        Round being played, 0 before the start
    team_count : int
        Number of registered teams
    official_rounds : int
        Rounds recommended by the official Swiss table
    planned_rounds : int
        Custom round limit if set, otherwise the format's natural length
    can_start : bool
        Whether the tournament can be started
    can_generate_next : bool
        Whether the next round can be generated
    can_complete : bool
        Whether the tournament can be marked complete
    complete_blocker : str or None
        Why the tournament cannot be completed yet
    can_reset : bool
        Whether there is anything to reset
    """

    name: str
    format_name: str
    bye_points: int
    phase: TournamentPhase
    current_round: int
    team_count: int
    official_rounds: int
    planned_rounds: int
    can_start: bool
    can_generate_next: bool
    can_complete: bool
    complete_blocker: Optional[str]
    can_reset: bool
    current_matches: List[MatchCard] = field(default_factory=list)
    standings: List[StandingRow] = field(default_factory=list)
    history: List[MatchHistoryRow] = field(default_factory=list)
    teams: List[TeamCard] = field(default_factory=list)

    @staticmethod
    def planned_rounds_for(tournament: Tournament) -> int:
        if tournament.custom_round_limit:
            return tournament.custom_round_limit
        team_count = len(tournament.teams)
        if tournament.format == FORMAT_ROUND_ROBIN:
            return number_of_rounds(team_count)
        return official_swiss_rounds(team_count)

    @staticmethod
    def complete_blocker_for(tournament: Tournament) -> Optional[str]:
        """Reason the tournament cannot be completed, None if it can."""
        if tournament.is_complete:
            return "Tournament is already complete"
        if not tournament.is_active:
            return "Tournament must be active to complete"
        if not tournament.matches:
            return "No matches have been played yet"
        incomplete = tournament.incomplete_current_matches()
        if incomplete:
            return f"{len(incomplete)} match(es) in current round still incomplete"
        return None

    @classmethod
    def compute(cls, tournament: Tournament) -> "TournamentState":
        """
        Compute the current tournament state.

        Parameters
        ----------
        tournament : Tournament
            The tournament to describe

        Returns
        -------
        TournamentState
            The computed state object with all derived properties
        """
        team_count = len(tournament.teams)
        round_matches = tournament.current_round_matches()
        round_finished = bool(round_matches) and all(
            m.is_complete for m in round_matches
        )

        if tournament.is_complete:
            phase = TournamentPhase.FINISHED
        elif tournament.is_active:
            phase = (
                TournamentPhase.AWAITING_NEXT_ROUND
                if round_finished
                else TournamentPhase.AWAITING_RESULTS
            )
        elif tournament.has_saved_content():
            phase = TournamentPhase.REGISTRATION
        else:
            phase = TournamentPhase.NOT_CONFIGURED

        exhausted = tournament.format == FORMAT_ROUND_ROBIN and schedule_exhausted(
            tournament.current_round, team_count
        )
        blocker = cls.complete_blocker_for(tournament)

        display_round = max(tournament.current_round, 1)
        teams = [
            TeamCard(
                team_id=team.id,
                name=team.name,
                player1_name=team.player1_name,
                player2_name=team.player2_name,
                is_solo=team.is_solo,
                points=team.points,
                priority_player_name=team.player_name(
                    priority_player(team, display_round)
                ),
                can_remove=not tournament.is_started,
            )
            for team in tournament.teams
        ]

        return cls(
            name=tournament.name,
            format_name=FORMAT_NAMES[tournament.format],
            bye_points=tournament.bye_points,
            phase=phase,
            current_round=tournament.current_round,
            team_count=team_count,
            official_rounds=official_swiss_rounds(team_count),
            planned_rounds=cls.planned_rounds_for(tournament),
            can_start=not tournament.is_started and team_count >= MIN_TEAMS_TO_START,
            can_generate_next=phase == TournamentPhase.AWAITING_NEXT_ROUND
            and not exhausted,
            can_complete=blocker is None,
            complete_blocker=blocker,
            can_reset=tournament.is_started or bool(tournament.matches),
            current_matches=[match_card(m) for m in round_matches],
            standings=standings_rows(tournament),
            history=[history_row(m) for m in tournament.matches if m.is_complete],
            teams=teams,
        )

    @property
    def status_message(self) -> str:
        """A human-readable message describing what the operator should do next."""
        if self.phase == TournamentPhase.NOT_CONFIGURED:
            return "No tournament set up. Initialize a tournament to begin."
        elif self.phase == TournamentPhase.FINISHED:
            return (
                f"Tournament complete after {self.current_round} round(s). "
                "View the standings for final results."
            )
        elif self.phase == TournamentPhase.REGISTRATION:
            return (
                f"Tournament ready with {self.team_count} teams and "
                f"{self.planned_rounds} planned rounds. Start the tournament to "
                "generate Round 1."
            )
        elif self.phase == TournamentPhase.AWAITING_RESULTS:
            outstanding = sum(1 for m in self.current_matches if not m.is_complete)
            return (
                f"Round {self.current_round} of {self.planned_rounds}: "
                f"{outstanding} match(es) awaiting results."
            )
        elif self.phase == TournamentPhase.AWAITING_NEXT_ROUND:
            if self.can_generate_next:
                return (
                    f"Round {self.current_round} complete. "
                    f"Generate Round {self.current_round + 1} or complete the tournament."
                )
            return (
                f"Round {self.current_round} complete. "
                "All rounds played, complete the tournament."
            )
        return ""
