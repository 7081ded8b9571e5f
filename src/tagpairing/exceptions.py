"""Exceptions for use in Tag Pairing"""

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


# ========== Base Application Exception ==========


class TagPairingException(Exception):
    """Base exception for all Tag Pairing errors.

    All custom exceptions in the application should inherit from this class.
    The tournament controller catches this class to turn any failure into a
    reported command outcome.
    """

    #: Short machine-readable category, reported back in command results
    kind = "error"


# ========== Validation Exceptions ==========


class ValidationRejection(TagPairingException):
    """Raised when operator input is incomplete or invalid."""

    kind = "validation"


class InvalidTeamException(ValidationRejection):
    """Raised when team registration data is incomplete."""

    pass


class DuplicateTeamException(ValidationRejection):
    """Raised when attempting to register a team name that already exists."""

    pass


class InvalidResultException(ValidationRejection):
    """Raised when a game index or winning side is out of range."""

    pass


# ========== Tournament State Exceptions ==========


class StateConflict(TagPairingException):
    """Raised when an operation is not allowed in the current lifecycle state."""

    kind = "state"


class TournamentStateException(StateConflict):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


# ========== Lookup Exceptions ==========


class NotFound(TagPairingException):
    """Base exception for unknown identifiers."""

    kind = "not_found"


class MatchNotFoundException(NotFound):
    """Raised when a requested match cannot be found."""

    pass


class TeamNotFoundException(NotFound):
    """Raised when a requested team cannot be found."""

    pass


# ========== Persistence Exceptions ==========


class PersistenceFailure(TagPairingException):
    """Base exception for storage errors."""

    kind = "persistence"


class FileLoadException(PersistenceFailure):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(PersistenceFailure):
    """Raised when a file cannot be saved."""

    pass


class CorruptPersistedState(TagPairingException):
    """Raised when saved data cannot be turned back into a tournament.

    The controller treats it as "no saved state".
    """

    kind = "corrupt"

