"""Swiss Pairing System Implementation.

Pairing follows the official 2v2 rules:

1. With an odd number of teams one team gets a bye. In round 1 the bye is
   drawn at random; later it goes to the lowest ranked team that has had
   the fewest byes.
2. In round 1 the remaining teams are shuffled; later they are ordered by
   standing (points, OMW%, OOMW%, then name).
3. Teams are paired first-fit down the ordered list, each with the first
   unpaired team it has not met yet. When no such team is left a repeat
   pairing is allowed.
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
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set, Tuple

from tagpairing.constants import MAX_OFFICIAL_SWISS_ROUNDS, OFFICIAL_SWISS_ROUNDS
from tagpairing.models import Team
from tagpairing.type_hints import MaybeTeam, Pairings
from tagpairing.utils import setup_logger

logger = setup_logger(__name__)

# Picks the bye team from the whole pool (rounds 2+)
ByeSelector = Callable[[List[Team]], Team]
# Orders the pairing pool best to worst (rounds 2+)
PoolOrdering = Callable[[List[Team]], List[Team]]


@dataclass
class PairingResult:
    """Result of a pairing computation for a single round."""

    pairings: Pairings = field(default_factory=list)
    bye_team: MaybeTeam = None
    repeat_pairings: int = 0
    unpaired: List[Team] = field(default_factory=list)


def official_swiss_rounds(team_count: int) -> int:
    """Number of Swiss rounds mandated for a field of teams.

    Advisory only: the organiser decides when the event ends.
    """
    for max_teams, rounds in OFFICIAL_SWISS_ROUNDS:
        if team_count <= max_teams:
            return rounds
    return MAX_OFFICIAL_SWISS_ROUNDS


def draw_random_bye(teams: List[Team], rng: random.Random) -> Team:
    """Draw the round 1 bye uniformly at random."""
    return teams[rng.randrange(len(teams))]


def shuffle_pool(teams: List[Team], rng: random.Random) -> List[Team]:
    """Return a uniformly shuffled copy of the pool (blind round 1 pairing)."""
    shuffled = list(teams)
    rng.shuffle(shuffled)
    return shuffled


def pair_first_fit(ordered: List[Team]) -> Tuple[Pairings, int, List[Team]]:
    """Pair an ordered pool sequentially.

    Each unpaired team, in order, takes the first later unpaired team it has
    not played. If every remaining team is a previous opponent it takes the
    first remaining team anyway.

    Args:
        ordered: Pool of teams in pairing order

    Returns:
        Tuple of (pairings, number of repeat pairings, teams left unpaired)
    """
    pairings: Pairings = []
    paired: Set[int] = set()
    repeats = 0

    for i, team in enumerate(ordered):
        if team.id in paired:
            continue

        candidates = [other for other in ordered[i + 1 :] if other.id not in paired]
        opponent: Optional[Team] = next(
            (other for other in candidates if not team.has_played(other.id)), None
        )
        if opponent is None and candidates:
            opponent = candidates[0]
            repeats += 1
            logger.warning(
                "No new opponent for %s, repeat pairing with %s",
                team.name,
                opponent.name,
            )
        if opponent is None:
            continue

        pairings.append((team, opponent))
        paired.add(team.id)
        paired.add(opponent.id)

    unpaired = [team for team in ordered if team.id not in paired]
    return pairings, repeats, unpaired


def create_swiss_pairings(
    teams: List[Team],
    round_number: int,
    rng: random.Random,
    bye_selector: ByeSelector,
    pool_ordering: PoolOrdering,
) -> PairingResult:
    """Create Swiss pairings for one round.

    Args:
        teams: Teams taking part in the round
        round_number: The round being paired (1-indexed)
        rng: Random source for the blind first round
        bye_selector: Chooses the bye team from round 2 on
        pool_ordering: Orders the pairing pool from round 2 on

    Returns:
        PairingResult with the pairings and the bye team, if any
    """
    logger.info("Generating Swiss pairings for %s teams", len(teams))

    bye_team: MaybeTeam = None
    if len(teams) % 2 != 0:
        if round_number == 1:
            bye_team = draw_random_bye(teams, rng)
            logger.info("Round 1: random BYE assigned to %s", bye_team.name)
        else:
            bye_team = bye_selector(teams)
            logger.info(
                "Round %s: BYE assigned to lowest ranked team with fewest byes: %s",
                round_number,
                bye_team.name,
            )

    pool = [t for t in teams if bye_team is None or t.id != bye_team.id]
    if round_number == 1:
        ordered = shuffle_pool(pool, rng)
    else:
        ordered = pool_ordering(pool)

    pairings, repeats, unpaired = pair_first_fit(ordered)
    return PairingResult(
        pairings=pairings,
        bye_team=bye_team,
        repeat_pairings=repeats,
        unpaired=unpaired,
    )
