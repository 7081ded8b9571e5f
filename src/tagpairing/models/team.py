"""A two-player team taking part in a tournament."""

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

from __future__ import annotations

from typing import Any, Dict, List

from tagpairing.constants import NON_PLAYER_NAME, PLAYER1
from tagpairing.type_hints import PriorityPlayer


class Team:
    """Represents a team in the tournament.

    Attributes:
        id: Unique identifier, stable for the tournament's lifetime
        name: Team name, unique within the tournament
        player1_name: First player
        player2_name: Second player, ``NonPlayer`` for solo teams
        is_solo: Whether the team fields only one real player
        points: Match points accumulated so far (byes included)
        bye_count: Number of byes received
        opponent_ids: Opponent team ids, one per completed match
        match_ids: Match ids, one per completed match
    """

    def __init__(
        self,
        team_id: int,
        name: str,
        player1_name: str,
        player2_name: str = NON_PLAYER_NAME,
        is_solo: bool = False,
    ) -> None:
        self.id: int = team_id
        self.name: str = name
        self.player1_name: str = player1_name
        self.player2_name: str = NON_PLAYER_NAME if is_solo else player2_name
        self.is_solo: bool = is_solo

        # Results history, only changed when a match completes or a bye is given
        self.points: int = 0
        self.bye_count: int = 0
        self.opponent_ids: List[int] = []
        self.match_ids: List[str] = []

    @property
    def matches_played(self) -> int:
        """Number of completed matches, byes excluded."""
        return len(self.match_ids)

    @property
    def has_received_bye(self) -> bool:
        return self.bye_count > 0

    def player_name(self, slot: PriorityPlayer) -> str:
        """Name of the player in the given slot."""
        return self.player1_name if slot == PLAYER1 else self.player2_name

    def has_played(self, other_id: int) -> bool:
        """Check if this team has already completed a match against another."""
        return other_id in self.opponent_ids

    def add_match_result(self, opponent_id: int, match_id: str, points: int) -> None:
        """Apply a completed match to the aggregate record."""
        self.points += points
        self.opponent_ids.append(opponent_id)
        self.match_ids.append(match_id)

    def add_bye(self, bye_points: int) -> None:
        self.points += bye_points
        self.bye_count += 1

    def reset_history(self) -> None:
        """Forget every result while keeping the registration."""
        self.points = 0
        self.bye_count = 0
        self.opponent_ids = []
        self.match_ids = []

    def snapshot(self) -> "Team":
        """Return a detached copy, as frozen inside a match record."""
        return Team.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "player1_name": self.player1_name,
            "player2_name": self.player2_name,
            "is_solo": self.is_solo,
            "points": self.points,
            "bye_count": self.bye_count,
            "opponent_ids": list(self.opponent_ids),
            "match_ids": list(self.match_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        team = cls(
            team_id=int(data["id"]),
            name=data["name"],
            player1_name=data["player1_name"],
            player2_name=data.get("player2_name", NON_PLAYER_NAME),
            is_solo=bool(data.get("is_solo", False)),
        )
        team.points = int(data.get("points", 0))
        team.bye_count = int(data.get("bye_count", 0))
        team.opponent_ids = [int(opp_id) for opp_id in data.get("opponent_ids", [])]
        team.match_ids = [str(match_id) for match_id in data.get("match_ids", [])]
        return team

    def __repr__(self) -> str:
        solo = ", solo" if self.is_solo else ""
        return f"Team(id={self.id}, name={self.name!r}, points={self.points}{solo})"
