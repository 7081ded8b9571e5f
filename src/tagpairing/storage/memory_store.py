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

"""In-memory key-value persistence for tests and throwaway sessions."""

from typing import Dict, Optional

from tagpairing.constants import STORAGE_KEY
from tagpairing.exceptions import CorruptPersistedState
from tagpairing.ports import PersistencePort
from tagpairing.type_hints import Snapshot
from tagpairing.utils import setup_logger

from .snapshot import decode_snapshot, encode_snapshot

logger = setup_logger(__name__)


class InMemoryStore(PersistencePort):
    """Stores the snapshot as JSON text under a key in a dictionary.

    Several stores may share one ``blobs`` dictionary, as pages share local
    storage.
    """

    def __init__(
        self, key: str = STORAGE_KEY, blobs: Optional[Dict[str, str]] = None
    ) -> None:
        self.key = key
        self.blobs: Dict[str, str] = blobs if blobs is not None else {}

    def save(self, snapshot: Snapshot) -> bool:
        self.blobs[self.key] = encode_snapshot(snapshot)
        return True

    def load(self) -> Optional[Snapshot]:
        text = self.blobs.get(self.key)
        if text is None:
            return None
        try:
            return decode_snapshot(text)
        except CorruptPersistedState as e:
            logger.warning("Ignoring saved tournament under %r: %s", self.key, e)
            return None

    def clear(self) -> None:
        self.blobs.pop(self.key, None)
