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

"""Conversion between tournaments and stored snapshots."""

import json
from typing import Optional

from tagpairing.exceptions import CorruptPersistedState
from tagpairing.models import Tournament
from tagpairing.type_hints import Snapshot


def encode_snapshot(snapshot: Snapshot, indent: Optional[int] = None) -> str:
    """Serialize a snapshot to JSON text."""
    return json.dumps(snapshot, indent=indent, ensure_ascii=False)


def decode_snapshot(text: str) -> Snapshot:
    """Parse JSON text into a snapshot mapping.

    Raises:
        CorruptPersistedState: If the text is not a JSON object
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise CorruptPersistedState(f"Saved data is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CorruptPersistedState(
            f"Saved data is a {type(data).__name__}, expected an object"
        )
    return data


def tournament_from_snapshot(snapshot: Snapshot) -> Tournament:
    """Rebuild a tournament from a snapshot.

    Raises:
        CorruptPersistedState: If fields are missing or have the wrong type
    """
    try:
        return Tournament.from_dict(snapshot)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CorruptPersistedState(f"Saved tournament is malformed: {e!r}") from e
