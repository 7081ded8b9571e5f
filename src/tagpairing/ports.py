"""Collaborator interfaces used by the tournament controller.

The core never talks to a screen or a disk directly. It saves and loads
through a persistence port, asks before irreversible steps through a
confirmation port and reports status through a notification port.
"""

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

from abc import ABC, abstractmethod
from typing import List, Optional

from tagpairing.type_hints import Snapshot
from tagpairing.utils import setup_logger

logger = setup_logger(__name__)


class PersistencePort(ABC):
    """Stores one serialized tournament."""

    @abstractmethod
    def save(self, snapshot: Snapshot) -> bool:
        """Store the snapshot, returning False (or raising) on failure."""

    @abstractmethod
    def load(self) -> Optional[Snapshot]:
        """Return the stored snapshot, or None if absent or unreadable.

        Must never raise.
        """

    @abstractmethod
    def clear(self) -> None:
        """Erase the stored snapshot."""


class ConfirmationPort(ABC):
    """Asks the operator a yes/no question."""

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        pass


class NotificationPort(ABC):
    """Reports a message to the operator. Fire-and-forget."""

    @abstractmethod
    def notify(self, message: str) -> None:
        pass


class AutoConfirm(ConfirmationPort):
    """Answers every question the same way, for scripted use and tests.

    Attributes:
        answer: The answer given to every prompt
        prompts: Every prompt asked so far
    """

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.prompts: List[str] = []

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer


class LogNotifier(NotificationPort):
    """Sends notifications to the log and keeps them for inspection."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)
        logger.info("Notification: %s", message)
