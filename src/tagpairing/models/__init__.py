"""Data models: teams, matches, games and the tournament aggregate."""

from tagpairing.models.match import Game, Match
from tagpairing.models.team import Team
from tagpairing.models.tournament import Tournament, TournamentConfig

__all__ = [
    "Game",
    "Match",
    "Team",
    "Tournament",
    "TournamentConfig",
]
