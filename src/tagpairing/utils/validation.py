"""Validation utilities for Tag Pairing.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Iterable, Optional

from tagpairing.constants import NON_PLAYER_NAME, TOURNAMENT_FORMATS
from tagpairing.exceptions import (
    DuplicateTeamException,
    InvalidTeamException,
    ValidationRejection,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Name Validation ==========


def validate_name(value: Optional[str], label: str = "Name") -> ValidationResult:
    """Validate a required, non-blank name.

    Args:
        value: The raw name as typed by the operator
        label: What the name is, used in the error message

    Returns:
        ValidationResult with the trimmed name
    """
    if value is None or not value.strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"{label} is required",
        )
    return ValidationResult(is_valid=True, sanitized_value=value.strip())


def validate_tournament_name(name: Optional[str]) -> str:
    """Validate a tournament name and raise if it is blank.

    Raises:
        ValidationRejection: If the name is empty
    """
    result = validate_name(name, "Tournament name")
    if not result:
        raise ValidationRejection("Please enter a tournament name")
    return result.sanitized_value


def validate_format(tournament_format: Optional[str]) -> str:
    """Validate the tournament format key.

    Raises:
        ValidationRejection: If the format is not supported
    """
    if tournament_format not in TOURNAMENT_FORMATS:
        raise ValidationRejection(
            f"Unknown tournament format: {tournament_format!r} "
            f"(expected one of {', '.join(TOURNAMENT_FORMATS)})"
        )
    return tournament_format


def validate_non_negative(value: Optional[int], label: str) -> Optional[int]:
    """Validate an optional integer setting that must not be negative."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationRejection(f"{label} must be a whole number of 0 or more")
    return value


# ========== Team Validation ==========


def validate_team_entry(
    team_name: Optional[str],
    player1_name: Optional[str],
    player2_name: Optional[str],
    is_solo: bool,
    existing_names: Iterable[str],
) -> tuple:
    """Validate a team registration and return the trimmed names.

    A solo team always fields the sentinel player in slot 2, whatever was
    typed there.

    Args:
        team_name: Team name
        player1_name: First player's name
        player2_name: Second player's name, ignored for solo teams
        is_solo: Whether the team has only one real player
        existing_names: Names of teams already registered

    Returns:
        Tuple of (team_name, player1_name, player2_name)

    Raises:
        InvalidTeamException: If any name is missing
        DuplicateTeamException: If the team name is taken
    """
    if is_solo:
        player2_name = NON_PLAYER_NAME

    results = [
        validate_name(team_name, "Team name"),
        validate_name(player1_name, "Player 1 name"),
        validate_name(player2_name, "Player 2 name"),
    ]
    if not all(results):
        raise InvalidTeamException("Please fill in team name and both player names")

    name, player1, player2 = (r.sanitized_value for r in results)
    if name in set(existing_names):
        raise DuplicateTeamException("Team name already exists")

    return name, player1, player2
