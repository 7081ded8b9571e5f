"""Round-robin fixture list.

Every team meets every other team exactly once. Fixtures are spread over
``n - 1`` rounds by a simple circular assignment on their position in the
fixture list, which keeps roughly ``n // 2`` matches in most rounds but does
not guarantee one match per team per round.
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

from itertools import combinations
from typing import List, Tuple

from tagpairing.models import Team
from tagpairing.type_hints import Pairings


def number_of_rounds(team_count: int) -> int:
    """Rounds needed for every team to meet every other team."""
    return max(team_count - 1, 1)


def all_pairings(teams: List[Team]) -> Pairings:
    """Every unordered pair of teams, in registration order."""
    return list(combinations(teams, 2))


def scheduled_round(pairing_index: int, team_count: int) -> int:
    """Round a fixture is played in, by its position in the fixture list."""
    return (pairing_index % number_of_rounds(team_count)) + 1


def create_schedule(teams: List[Team]) -> List[Tuple[int, Team, Team]]:
    """Build the full fixture list.

    Returns:
        List of (scheduled round, team1, team2), one entry per pair of teams
    """
    return [
        (scheduled_round(index, len(teams)), team1, team2)
        for index, (team1, team2) in enumerate(all_pairings(teams))
    ]


def schedule_exhausted(current_round: int, team_count: int) -> bool:
    """Whether every scheduled round has already been released."""
    return current_round >= number_of_rounds(team_count)
