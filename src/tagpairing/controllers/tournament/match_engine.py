"""Match creation and result recording.

This module builds the two-game match between two teams, decides which
table is the priority table, and records game results as they arrive.
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

from dataclasses import dataclass
from typing import Optional

from tagpairing.constants import (
    BYE_ID_PREFIX,
    GAME_A,
    GAME_B,
    MATCH_ID_PREFIX,
    NON_PRIORITY_WIN_POINTS,
    PLAYER1,
    PLAYER2,
    PRIORITY_WIN_POINTS,
    SOLO_WIN_POINTS,
    TEAM1,
    TEAM2,
    WINNER_SIDES,
)
from tagpairing.exceptions import InvalidResultException
from tagpairing.models import Game, Match, Team, Tournament
from tagpairing.type_hints import PriorityPlayer
from tagpairing.utils import IdGenerator, setup_logger

logger = setup_logger(__name__)


def priority_player(team: Team, round_number: int) -> PriorityPlayer:
    """Player of a team holding priority in a round.

    Player 1s have priority in odd rounds and player 2s in even rounds,
    for every team alike.
    """
    return PLAYER1 if round_number % 2 == 1 else PLAYER2


@dataclass
class GameOutcome:
    """What happened when a game result was submitted."""

    applied: bool
    points: int = 0
    match_completed: bool = False
    reason: Optional[str] = None


class MatchEngine:
    """Creates matches and records their game results.

    This class is responsible for:
    - Building matches with team snapshots and two games
    - Choosing the priority table
    - Handling solo teams (their absent player always loses)
    - Awarding points per game and detecting match completion
    - Applying completed matches to the live teams

    Parameters
    ----------
    id_generator : IdGenerator, optional
        Source of match ids, a fresh counter if omitted.
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None) -> None:
        self.ids = id_generator if id_generator is not None else IdGenerator()

    # ========== Match creation ==========

    def create_match(
        self,
        team1: Team,
        team2: Team,
        round_number: int,
        scheduled_round: Optional[int] = None,
    ) -> Match:
        """Create a match between two teams.

        Game A pits the player 1s against each other and game B the
        player 2s. Exactly one of them is the priority table.

        Args:
            team1: First team
            team2: Second team
            round_number: Round whose priority rotation applies
            scheduled_round: Round assigned by a round-robin schedule

        Returns:
            The new match, holding snapshots of both teams
        """
        team1_priority = priority_player(team1, round_number)
        team2_priority = priority_player(team2, round_number)

        # Priority goes to the table where both teams' priority players meet
        game_a_priority = team1_priority == PLAYER1 and team2_priority == PLAYER1
        game_b_priority = team1_priority == PLAYER2 and team2_priority == PLAYER2
        if not game_a_priority and not game_b_priority:
            if PLAYER1 in (team1_priority, team2_priority):
                game_a_priority = True
            else:
                game_b_priority = True

        match = Match(
            id=self.ids.next_id(MATCH_ID_PREFIX),
            round=round_number,
            team1=team1.snapshot(),
            team2=team2.snapshot(),
            games=[
                Game(
                    player1_name=team1.player1_name,
                    player2_name=team2.player1_name,
                    is_priority=game_a_priority,
                ),
                Game(
                    player1_name=team1.player2_name,
                    player2_name=team2.player2_name,
                    is_priority=game_b_priority,
                ),
            ],
            scheduled_round=scheduled_round,
        )

        logger.debug(
            "Priority for %s (round %s): %s=%s, %s=%s, game A=%s, game B=%s",
            match.id,
            round_number,
            team1.name,
            team1_priority,
            team2.name,
            team2_priority,
            game_a_priority,
            game_b_priority,
        )

        if team1.is_solo:
            self._forfeit_non_player_game(match, winner=TEAM2)
        if team2.is_solo:
            self._forfeit_non_player_game(match, winner=TEAM1)

        return match

    def _forfeit_non_player_game(self, match: Match, winner: str) -> None:
        """Give the opponent of a solo team its automatic game B win.

        The solo player moves to the priority table and the sentinel player
        loses game B at the non-priority table.
        """
        match.games[GAME_A].is_priority = True
        match.games[GAME_B].is_priority = False
        match.games[GAME_B].winner = winner
        match.add_points(winner, NON_PRIORITY_WIN_POINTS)
        logger.debug(
            "%s: NonPlayer game awarded to %s (+%s)",
            match.id,
            winner,
            NON_PRIORITY_WIN_POINTS,
        )

    def create_bye(self, team: Team, round_number: int, bye_points: int) -> Match:
        """Create the already-complete bye record for a team."""
        return Match(
            id=self.ids.next_id(BYE_ID_PREFIX),
            round=round_number,
            team1=team.snapshot(),
            team2=None,
            is_bye=True,
            is_complete=True,
            team1_points=bye_points,
            team2_points=0,
        )

    # ========== Result recording ==========

    @staticmethod
    def game_points(match: Match, game_index: int, winner: str) -> int:
        """Points earned by the winner of one game.

        A solo team's player always sits at the effective priority table, so
        winning their own game is worth a priority win.
        """
        winning_team = match.team_on(winner)
        if winning_team is not None and winning_team.is_solo and game_index == GAME_A:
            return SOLO_WIN_POINTS
        if match.games[game_index].is_priority:
            return PRIORITY_WIN_POINTS
        return NON_PRIORITY_WIN_POINTS

    def record_result(self, match: Match, game_index: int, winner: str) -> GameOutcome:
        """Record the winner of one game of a match.

        Submitting a result for a bye, for a finished match or for a game
        that already has a winner changes nothing.

        Args:
            match: The match being played
            game_index: 0 for game A, 1 for game B
            winner: ``"team1"`` or ``"team2"``

        Returns:
            GameOutcome describing the points awarded, if any

        Raises:
            InvalidResultException: If the game index or side is invalid
        """
        if match.is_bye:
            logger.info("Cannot record result for BYE match %s", match.id)
            return GameOutcome(applied=False, reason="Cannot record result for a BYE")

        if match.is_complete:
            logger.info("Match %s already complete", match.id)
            return GameOutcome(applied=False, reason="Match already complete")

        if winner not in WINNER_SIDES:
            raise InvalidResultException(
                f"Invalid winner: {winner!r} (expected 'team1' or 'team2')"
            )
        if not 0 <= game_index < len(match.games):
            raise InvalidResultException(
                f"Invalid game index: {game_index} (expected 0 or 1)"
            )

        game = match.games[game_index]
        if game.is_decided:
            logger.info("Game %s of %s already decided", game_index + 1, match.id)
            return GameOutcome(applied=False, reason="Game already decided")

        game.winner = winner
        points = self.game_points(match, game_index, winner)
        match.add_points(winner, points)

        logger.debug(
            "%s game %s: %s wins at %s table, %s points (now %s-%s)",
            match.id,
            game_index + 1,
            winner,
            "priority" if game.is_priority else "non-priority",
            points,
            match.team1_points,
            match.team2_points,
        )

        if match.all_games_decided:
            match.is_complete = True
            logger.info(
                "Match %s completed: %s %s - %s %s",
                match.id,
                match.team1.name,
                match.team1_points,
                match.team2_points,
                match.team2.name,
            )
            return GameOutcome(applied=True, points=points, match_completed=True)

        return GameOutcome(applied=True, points=points)

    def settle(self, match: Match, tournament: Tournament) -> bool:
        """Apply a completed match to the live teams.

        Adds the match points to both teams, records each as the other's
        opponent and appends the match id to both histories.

        Returns:
            True if both teams were found and updated
        """
        team1 = tournament.get_team(match.team1.id)
        team2 = tournament.get_team(match.team2.id) if match.team2 else None
        if team1 is None or team2 is None:
            logger.error("Cannot settle %s: team missing from tournament", match.id)
            return False

        team1.add_match_result(team2.id, match.id, match.team1_points)
        team2.add_match_result(team1.id, match.id, match.team2_points)
        logger.info(
            "Updated team points: %s: %s, %s: %s",
            team1.name,
            team1.points,
            team2.name,
            team2.points,
        )
        return True
