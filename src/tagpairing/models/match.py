"""Match and game data classes."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tagpairing.constants import TEAM1, TEAM2
from tagpairing.type_hints import MaybeWinner

from .team import Team


@dataclass
class Game:
    """One of the two games played inside a match.

    Attributes
    ----------
    player1_name : str
        Player of team 1 at this table.
    player2_name : str
        Player of team 2 at this table.
    winner : str or None
        ``"team1"``, ``"team2"`` or None while undecided.
    is_priority : bool
        Whether this is the priority table (3 points instead of 2).
    """

    player1_name: str
    player2_name: str
    winner: MaybeWinner = None
    is_priority: bool = False

    @property
    def is_decided(self) -> bool:
        return self.winner is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize game to dictionary."""
        return {
            "player1_name": self.player1_name,
            "player2_name": self.player2_name,
            "winner": self.winner,
            "is_priority": self.is_priority,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        """Deserialize game from dictionary."""
        winner = data.get("winner")
        if winner not in (None, TEAM1, TEAM2):
            raise ValueError(f"Invalid game winner: {winner!r}")
        return cls(
            player1_name=data["player1_name"],
            player2_name=data["player2_name"],
            winner=winner,
            is_priority=bool(data.get("is_priority", False)),
        )


@dataclass
class Match:
    """A pairing of two teams in one round, or a bye for a single team.

    The team entries are snapshots taken when the match was created; only
    their ids are used to find the live teams again.

    Attributes
    ----------
    id : str
        Unique match id.
    round : int
        Round the match is played in (1-indexed).
    team1 : Team
        Snapshot of the first team.
    team2 : Team or None
        Snapshot of the second team, None only for a bye.
    is_bye : bool
        Whether this is a synthetic bye record.
    is_complete : bool
        Whether both games are decided (always True for a bye).
    team1_points, team2_points : int
        Points earned so far by each side in this match.
    games : list of Game
        Game A (player 1s) and game B (player 2s); empty for a bye.
    scheduled_round : int or None
        Round assigned by the round-robin schedule, None for Swiss.
    """

    id: str
    round: int
    team1: Team
    team2: Optional[Team] = None
    is_bye: bool = False
    is_complete: bool = False
    team1_points: int = 0
    team2_points: int = 0
    games: List[Game] = field(default_factory=list)
    scheduled_round: Optional[int] = None

    def involves(self, team_id: int) -> bool:
        """Check whether a team plays in this match."""
        if self.team1.id == team_id:
            return True
        return self.team2 is not None and self.team2.id == team_id

    def side_of(self, team_id: int) -> Optional[str]:
        """Return ``"team1"`` or ``"team2"`` for a participating team."""
        if self.team1.id == team_id:
            return TEAM1
        if self.team2 is not None and self.team2.id == team_id:
            return TEAM2
        return None

    def points_for(self, side: str) -> int:
        return self.team1_points if side == TEAM1 else self.team2_points

    def team_on(self, side: str) -> Optional[Team]:
        return self.team1 if side == TEAM1 else self.team2

    def add_points(self, side: str, points: int) -> None:
        if side == TEAM1:
            self.team1_points += points
        else:
            self.team2_points += points

    def won_by(self, team_id: int) -> bool:
        """Whether the team finished with strictly more points than its opponent."""
        side = self.side_of(team_id)
        if side is None or self.is_bye:
            return False
        other = TEAM2 if side == TEAM1 else TEAM1
        return self.points_for(side) > self.points_for(other)

    @property
    def winner_side(self) -> Optional[str]:
        """Side with more match points, None on a tie or while in progress."""
        if not self.is_complete or self.is_bye:
            return None
        if self.team1_points > self.team2_points:
            return TEAM1
        if self.team2_points > self.team1_points:
            return TEAM2
        return None

    @property
    def all_games_decided(self) -> bool:
        return bool(self.games) and all(game.is_decided for game in self.games)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round": self.round,
            "team1": self.team1.to_dict(),
            "team2": self.team2.to_dict() if self.team2 is not None else None,
            "is_bye": self.is_bye,
            "is_complete": self.is_complete,
            "team1_points": self.team1_points,
            "team2_points": self.team2_points,
            "games": [g.to_dict() for g in self.games],
            "scheduled_round": self.scheduled_round,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        team2_data = data.get("team2")
        is_bye = bool(data.get("is_bye", False))
        if team2_data is None and not is_bye:
            raise ValueError(f"Match {data.get('id')!r} has no second team")
        scheduled_round = data.get("scheduled_round")
        return cls(
            id=str(data["id"]),
            round=int(data["round"]),
            team1=Team.from_dict(data["team1"]),
            team2=Team.from_dict(team2_data) if team2_data is not None else None,
            is_bye=is_bye,
            is_complete=bool(data.get("is_complete", False)),
            team1_points=int(data.get("team1_points", 0)),
            team2_points=int(data.get("team2_points", 0)),
            games=[Game.from_dict(g) for g in data.get("games", [])],
            scheduled_round=int(scheduled_round) if scheduled_round is not None else None,
        )
