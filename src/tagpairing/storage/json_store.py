"""JSON file persistence for tournaments."""

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

from pathlib import Path
from typing import Optional, Union

from tagpairing.exceptions import (
    CorruptPersistedState,
    FileLoadException,
    FileSaveException,
)
from tagpairing.ports import PersistencePort
from tagpairing.type_hints import Snapshot
from tagpairing.utils import setup_logger

from .snapshot import decode_snapshot, encode_snapshot

logger = setup_logger(__name__)


class JsonFileStore(PersistencePort):
    """Keeps the tournament in a single JSON file.

    Parameters
    ----------
    path : str or Path
        File the snapshot is written to.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def save(self, snapshot: Snapshot) -> bool:
        """Write the snapshot, replacing the previous file.

        Raises:
            FileSaveException: If the file cannot be written
        """
        try:
            text = encode_snapshot(snapshot, indent=4)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(text, encoding="utf-8")
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            raise FileSaveException(f"Could not save tournament to {self.path}: {e}") from e
        logger.debug("Tournament saved to %s", self.path)
        return True

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileLoadException(f"Could not read {self.path}: {e}") from e

    def load(self) -> Optional[Snapshot]:
        if not self.path.exists():
            return None
        try:
            return decode_snapshot(self._read())
        except (FileLoadException, CorruptPersistedState) as e:
            logger.warning("Ignoring saved tournament: %s", e)
            return None

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.info("Removed saved tournament %s", self.path)

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.path)!r})"
