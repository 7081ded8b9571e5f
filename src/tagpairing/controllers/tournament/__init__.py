"""Tournament engines: pairing, match scoring and ranking."""

from tagpairing.controllers.tournament.match_engine import (
    GameOutcome,
    MatchEngine,
    priority_player,
)
from tagpairing.controllers.tournament.pairing_engine import PairingEngine
from tagpairing.controllers.tournament.ranking_calculator import (
    RankingCalculator,
    TeamRanking,
)

__all__ = [
    "GameOutcome",
    "MatchEngine",
    "PairingEngine",
    "RankingCalculator",
    "TeamRanking",
    "priority_player",
]
