"""Round generation for tournaments.

This module turns the current field of teams into the matches of a round,
dispatching to the Swiss or round-robin pairing system.
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

import random
from typing import List, Optional

from tagpairing.constants import FORMAT_ROUND_ROBIN, FORMAT_SWISS
from tagpairing.models import Match, Team, Tournament
from tagpairing.pairing import create_schedule, create_swiss_pairings
from tagpairing.utils import setup_logger

from .match_engine import MatchEngine
from .ranking_calculator import RankingCalculator

logger = setup_logger(__name__)


class PairingEngine:
    """Generates the matches of each round.

    This class is responsible for:
    - Choosing the active teams for a round
    - Running the Swiss pairing (byes included) or releasing the
      precomputed round-robin fixtures
    - Converting pairings into matches and appending them to the tournament

    Parameters
    ----------
    match_engine : MatchEngine
        Builds the match records.
    rng : random.Random, optional
        Random source for the blind first Swiss round; seed it for
        reproducible pairings.
    """

    def __init__(
        self,
        match_engine: MatchEngine,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.match_engine = match_engine
        self.rng = rng if rng is not None else random.Random()

    @staticmethod
    def active_teams(tournament: Tournament) -> List[Team]:
        """Teams taking part in the next round.

        Every registered team plays every round; there is no elimination.
        """
        return list(tournament.teams)

    def generate_round(self, tournament: Tournament) -> List[Match]:
        """Generate and append the matches of ``tournament.current_round``.

        Args:
            tournament: The tournament, with ``current_round`` already advanced

        Returns:
            The new matches (bye records included)

        Raises:
            NotImplementedError: If the tournament format is not supported
        """
        if tournament.format == FORMAT_SWISS:
            new_matches = self._generate_swiss_round(tournament)
        elif tournament.format == FORMAT_ROUND_ROBIN:
            new_matches = self._generate_round_robin_round(tournament)
        else:
            raise NotImplementedError(
                f"Tournament format '{tournament.format}' is not implemented"
            )

        tournament.matches.extend(new_matches)
        byes = sum(1 for m in new_matches if m.is_bye)
        logger.info(
            "Round %s generated: %s matches, %s bye(s)",
            tournament.current_round,
            len(new_matches) - byes,
            byes,
        )
        return new_matches

    # ========== Swiss ==========

    def _select_bye_team(self, tournament: Tournament, teams: List[Team]) -> Team:
        """Lowest ranked team among those with the fewest byes."""
        calculator = RankingCalculator(tournament)
        candidates = sorted(calculator.rankings(teams), key=calculator.bye_key)
        selected = candidates[0].team
        if selected.has_received_bye:
            logger.warning(
                "Every team has already received a bye; %s gets another one",
                selected.name,
            )
        return selected

    def _order_pool(self, tournament: Tournament, teams: List[Team]) -> List[Team]:
        calculator = RankingCalculator(tournament)
        return [ranking.team for ranking in calculator.standings(teams)]

    def _generate_swiss_round(self, tournament: Tournament) -> List[Match]:
        round_number = tournament.current_round
        result = create_swiss_pairings(
            self.active_teams(tournament),
            round_number,
            self.rng,
            bye_selector=lambda teams: self._select_bye_team(tournament, teams),
            pool_ordering=lambda teams: self._order_pool(tournament, teams),
        )

        new_matches: List[Match] = []
        if result.bye_team is not None:
            bye_team = result.bye_team
            bye_team.add_bye(tournament.bye_points)
            new_matches.append(
                self.match_engine.create_bye(
                    bye_team, round_number, tournament.bye_points
                )
            )
            logger.info(
                "%s receives BYE - %s points", bye_team.name, tournament.bye_points
            )

        for team1, team2 in result.pairings:
            new_matches.append(
                self.match_engine.create_match(team1, team2, round_number)
            )

        for team in result.unpaired:
            logger.error(
                "Cannot pair team %s - this should not happen with proper BYE handling",
                team.name,
            )

        return new_matches

    # ========== Round robin ==========

    def _generate_round_robin_round(self, tournament: Tournament) -> List[Match]:
        round_number = tournament.current_round
        if round_number == 1:
            tournament.all_matches = [
                self.match_engine.create_match(
                    team1, team2, scheduled, scheduled_round=scheduled
                )
                for scheduled, team1, team2 in create_schedule(
                    self.active_teams(tournament)
                )
            ]
            logger.info(
                "Generated %s total matches for %s teams",
                len(tournament.all_matches),
                len(tournament.teams),
            )

        released = []
        for fixture in tournament.all_matches:
            if fixture.scheduled_round != round_number:
                continue
            match = Match.from_dict(fixture.to_dict())
            match.round = round_number
            released.append(match)
        return released
