"""Persistence adapters for tournament snapshots."""

from tagpairing.storage.json_store import JsonFileStore
from tagpairing.storage.memory_store import InMemoryStore
from tagpairing.storage.snapshot import (
    decode_snapshot,
    encode_snapshot,
    tournament_from_snapshot,
)

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "decode_snapshot",
    "encode_snapshot",
    "tournament_from_snapshot",
]
