"""Type hints used in Tag Pairing."""

from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional, Tuple

if TYPE_CHECKING:
    from tagpairing.models import Team

# Which side of a match won a game
WinnerSide = Literal["team1", "team2"]
MaybeWinner = Optional[WinnerSide]

# Which player of a team holds priority in a round
PriorityPlayer = Literal["player1", "player2"]

# Serialized tournament, as handed to and from the persistence port
Snapshot = Dict[str, Any]

# One pairing produced by the Swiss or round-robin scheduler
Pairing = Tuple["Team", "Team"]
Pairings = List[Pairing]
MaybeTeam = Optional["Team"]

#  LocalWords:  roundrobin
