"""Pairing algorithms: Swiss and round-robin."""

from tagpairing.pairing.round_robin import (
    create_schedule,
    number_of_rounds,
    schedule_exhausted,
)
from tagpairing.pairing.swiss import (
    PairingResult,
    create_swiss_pairings,
    official_swiss_rounds,
)

__all__ = [
    "PairingResult",
    "create_schedule",
    "create_swiss_pairings",
    "number_of_rounds",
    "official_swiss_rounds",
    "schedule_exhausted",
]
