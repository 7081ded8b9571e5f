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

"""Terminal implementations of the confirmation and notification ports."""

from typing import List

from prompt_toolkit.shortcuts import confirm

from tagpairing.ports import ConfirmationPort, NotificationPort
from tagpairing.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


class PromptConfirmer(ConfirmationPort):
    """Asks the operator a yes/no question on the terminal."""

    def confirm(self, prompt: str) -> bool:
        print(f"\n{Colors.WARNING}{prompt}{Colors.ENDC}")
        try:
            answer = confirm("Continue?")
        except (KeyboardInterrupt, EOFError):
            answer = False
        logger.debug("Confirmation %r answered %s", prompt.splitlines()[0], answer)
        return answer


class ConsoleNotifier(NotificationPort):
    """Prints notifications as they arrive and keeps them."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)
        print(f"{Colors.OKCYAN}>> {message}{Colors.ENDC}")
