"""Ranking calculation for tournaments.

This module computes the official tiebreakers used to rank teams:
Opponents' Match-Win percentage (OMW%) and Opponents'-Opponents' Match-Win
percentage (OOMW%).
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
from typing import Dict, Iterable, List, Optional, Tuple

from tagpairing.constants import MIN_WIN_RATE
from tagpairing.models import Team, Tournament

# team id -> (match wins, matches played)
MatchRecords = Dict[int, Tuple[int, int]]


@dataclass(frozen=True)
class TeamRanking:
    """A team together with the values it is ranked on."""

    team: Team
    points: int
    omw: float
    oomw: float


class RankingCalculator:
    """Calculates OMW%, OOMW% and standings for a tournament.

    The calculator keeps no state of its own: every call reads the
    tournament's current teams and matches.

    OMW% of a team is the match-win rate of all its opponents combined,
    counted over every completed non-bye match those opponents played.
    OOMW% is the average OMW% of the team's opponents, repeat opponents
    counted once per meeting. Both are floored at 33.3%.
    """

    def __init__(self, tournament: Tournament) -> None:
        self.tournament = tournament

    # ========== Match records ==========

    def match_records(self) -> MatchRecords:
        """Count match wins and matches played for every team.

        A win means finishing a completed match with strictly more points
        than the opponent. Byes and unfinished matches are ignored.
        """
        records: Dict[int, List[int]] = {}
        for match in self.tournament.completed_matches():
            for team in (match.team1, match.team2):
                record = records.setdefault(team.id, [0, 0])
                record[1] += 1
                if match.won_by(team.id):
                    record[0] += 1
        return {team_id: (wins, games) for team_id, (wins, games) in records.items()}

    def _known_opponents(self, team: Team) -> Iterable[Team]:
        """Resolve opponent ids to live teams, once per meeting."""
        for opponent_id in team.opponent_ids:
            opponent = self.tournament.get_team(opponent_id)
            if opponent is not None:
                yield opponent

    # ========== Tiebreakers ==========

    def calculate_omw(self, team: Team, records: Optional[MatchRecords] = None) -> float:
        """Calculate Opponents' Match-Win percentage.

        Args:
            team: The team to calculate for
            records: Precomputed match records, built on demand if omitted

        Returns:
            A rate between 0.333 and 1.0
        """
        if not team.opponent_ids:
            return MIN_WIN_RATE

        if records is None:
            records = self.match_records()

        total_wins = 0
        total_games = 0
        for opponent in self._known_opponents(team):
            wins, games = records.get(opponent.id, (0, 0))
            total_wins += wins
            total_games += games

        if total_games == 0:
            return MIN_WIN_RATE
        return max(MIN_WIN_RATE, total_wins / total_games)

    def calculate_oomw(self, team: Team, records: Optional[MatchRecords] = None) -> float:
        """Calculate Opponents'-Opponents' Match-Win percentage.

        Args:
            team: The team to calculate for
            records: Precomputed match records, built on demand if omitted

        Returns:
            A rate between 0.333 and 1.0
        """
        if not team.opponent_ids:
            return MIN_WIN_RATE

        if records is None:
            records = self.match_records()

        rates = [self.calculate_omw(opp, records) for opp in self._known_opponents(team)]
        if not rates:
            return MIN_WIN_RATE
        return max(MIN_WIN_RATE, sum(rates) / len(rates))

    # ========== Standings ==========

    def rank(self, team: Team, records: Optional[MatchRecords] = None) -> TeamRanking:
        if records is None:
            records = self.match_records()
        return TeamRanking(
            team=team,
            points=team.points,
            omw=self.calculate_omw(team, records),
            oomw=self.calculate_oomw(team, records),
        )

    def rankings(self, teams: Optional[List[Team]] = None) -> List[TeamRanking]:
        """Rank values for the given teams (all teams by default), unsorted."""
        if teams is None:
            teams = self.tournament.teams
        records = self.match_records()
        return [self.rank(team, records) for team in teams]

    @staticmethod
    def standing_key(ranking: TeamRanking) -> tuple:
        """Sort key for standings: points, OMW%, OOMW% descending, then name."""
        return (-ranking.points, -ranking.omw, -ranking.oomw, ranking.team.name)

    @staticmethod
    def bye_key(ranking: TeamRanking) -> tuple:
        """Sort key for bye selection: fewest byes first, then lowest standing."""
        return (
            ranking.team.bye_count,
            ranking.points,
            ranking.omw,
            ranking.oomw,
            ranking.team.name,
        )

    def standings(self, teams: Optional[List[Team]] = None) -> List[TeamRanking]:
        """Get current standings.

        Returns:
            Rankings sorted best to worst
        """
        return sorted(self.rankings(teams), key=self.standing_key)
