"""Tournament aggregate and its configuration."""

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
from typing import Any, Dict, Iterator, List, Optional

from tagpairing.constants import DEFAULT_BYE_POINTS, DEFAULT_FORMAT, TOURNAMENT_FORMATS

from .match import Match
from .team import Team


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    format : str
        Pairing format, ``"swiss"`` or ``"roundrobin"``.
    bye_points : int
        Points awarded for a bye.
    custom_round_limit : int or None
        Planned number of rounds chosen by the organiser. Advisory only;
        None means the official Swiss round table applies.
    """

    name: str = ""
    format: str = DEFAULT_FORMAT
    bye_points: int = DEFAULT_BYE_POINTS
    custom_round_limit: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "format": self.format,
            "bye_points": self.bye_points,
            "custom_round_limit": self.custom_round_limit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        tournament_format = data.get("format", DEFAULT_FORMAT)
        if tournament_format not in TOURNAMENT_FORMATS:
            raise ValueError(f"Unknown tournament format: {tournament_format!r}")
        limit = data.get("custom_round_limit")
        return cls(
            name=data.get("name", ""),
            format=tournament_format,
            bye_points=int(data.get("bye_points", DEFAULT_BYE_POINTS)),
            custom_round_limit=int(limit) if limit is not None else None,
        )


@dataclass
class Tournament:
    """The aggregate root: configuration, teams, matches and lifecycle flags.

    Only the tournament controller mutates an instance; every other component
    reads it, apart from the pairing engine appending matches.

    Attributes
    ----------
    config : TournamentConfig
        Name, format and scoring settings.
    teams : list of Team
        Registered teams, in registration order.
    matches : list of Match
        Every match and bye released so far, in creation order.
    all_matches : list of Match
        Full round-robin fixture list, empty for Swiss.
    current_round : int
        0 before the start, then the round being played.
    is_active, is_complete : bool
        Lifecycle flags.
    next_team_id : int
        Id handed to the next registered team.
    """

    config: TournamentConfig = field(default_factory=TournamentConfig)
    teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    all_matches: List[Match] = field(default_factory=list)
    current_round: int = 0
    is_active: bool = False
    is_complete: bool = False
    next_team_id: int = 1

    # ========== Properties ==========

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def format(self) -> str:
        return self.config.format

    @property
    def bye_points(self) -> int:
        return self.config.bye_points

    @property
    def custom_round_limit(self) -> Optional[int]:
        return self.config.custom_round_limit

    @property
    def is_started(self) -> bool:
        return self.is_active or self.is_complete

    # ========== Lookups ==========

    def get_team(self, team_id: int) -> Optional[Team]:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def get_match(self, match_id: str) -> Optional[Match]:
        """Find a released match by its exact id."""
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def team_names(self) -> List[str]:
        return [team.name for team in self.teams]

    def matches_in_round(self, round_number: int) -> List[Match]:
        return [m for m in self.matches if m.round == round_number]

    def current_round_matches(self) -> List[Match]:
        return self.matches_in_round(self.current_round)

    def incomplete_current_matches(self) -> List[Match]:
        return [m for m in self.current_round_matches() if not m.is_complete]

    def completed_matches(self) -> Iterator[Match]:
        """Completed matches that were actually played (byes excluded)."""
        return (m for m in self.matches if m.is_complete and not m.is_bye)

    def allocate_team_id(self) -> int:
        team_id = self.next_team_id
        self.next_team_id += 1
        return team_id

    def has_saved_content(self) -> bool:
        """Whether this snapshot holds anything worth restoring."""
        return bool(self.name) or bool(self.teams)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        return {
            "config": self.config.to_dict(),
            "teams": [t.to_dict() for t in self.teams],
            "matches": [m.to_dict() for m in self.matches],
            "all_matches": [m.to_dict() for m in self.all_matches],
            "current_round": self.current_round,
            "is_active": self.is_active,
            "is_complete": self.is_complete,
            "next_team_id": self.next_team_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Raises:
            KeyError, TypeError, ValueError: If the data is malformed
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a mapping, got {type(data).__name__}")

        teams = [Team.from_dict(t) for t in data.get("teams", [])]
        default_next_id = max((t.id for t in teams), default=0) + 1
        return cls(
            config=TournamentConfig.from_dict(data.get("config", {})),
            teams=teams,
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            all_matches=[Match.from_dict(m) for m in data.get("all_matches", [])],
            current_round=int(data.get("current_round", 0)),
            is_active=bool(data.get("is_active", False)),
            is_complete=bool(data.get("is_complete", False)),
            next_team_id=int(data.get("next_team_id", default_next_id)),
        )
