"""Shared helpers: logging setup and identifier generation."""

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

import logging
import os
import re
from typing import Iterable, Optional

from tagpairing.constants import LOG_LEVEL_ENV_VAR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER_NAME = "tagpairing"


def _configure_root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return the logger for a module, configuring the package logger once.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        A logger that propagates to the ``tagpairing`` package logger
    """
    _configure_root_logger()
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Change the level of the package logger (used by ``--verbose``)."""
    _configure_root_logger().setLevel(level)


class IdGenerator:
    """Monotonic generator for match identifiers.

    Ids look like ``match_7`` or ``bye_8``; the number is shared across
    prefixes so every id handed out by one generator is unique.

    Attributes:
        counter: The number that will be used for the next id
    """

    _ID_PATTERN = re.compile(r"^[a-z]+_(\d+)$")

    def __init__(self, start: int = 1) -> None:
        self.counter = start

    def next_id(self, prefix: str) -> str:
        """Hand out the next id with the given prefix."""
        new_id = f"{prefix}_{self.counter}"
        self.counter += 1
        return new_id

    def advance_past(self, existing_ids: Iterable[Optional[str]]) -> None:
        """Make sure future ids never collide with ids already in use.

        Args:
            existing_ids: Ids loaded from a saved tournament
        """
        for existing in existing_ids:
            if not existing:
                continue
            match = self._ID_PATTERN.match(existing)
            if match:
                self.counter = max(self.counter, int(match.group(1)) + 1)

    def __repr__(self) -> str:
        return f"IdGenerator(next={self.counter})"
