"""Validation utilities for Bracketeer.

This module provides reusable validation functions with consistent error handling.
"""

# Bracketeer
# Copyright (C) 2025  Bracketeer developers
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

import re
from typing import List, Optional, Sequence

from bracketeer.constants import MAX_PLAYER_NAME_LENGTH, PLAYER_NAME_DISALLOWED_PATTERN


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
        sanitized_value=None,
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

    @classmethod
    def ok(cls, sanitized_value=None) -> "ValidationResult":
        return cls(is_valid=True, sanitized_value=sanitized_value)

    @classmethod
    def fail(cls, error_message: str) -> "ValidationResult":
        return cls(is_valid=False, error_message=error_message)


# ========== Player Name Validation ==========


def sanitize_player_name(name: Optional[str]) -> str:
    """Clean a display name for storage.

    Trims, truncates to the maximum length, drops characters other than
    letters, digits, spaces, apostrophes, hyphens and periods, and collapses
    runs of whitespace.

    Args:
        name: Raw name as typed by the user

    Returns:
        The sanitized name, possibly empty

    Example:
        >>> sanitize_player_name("  Ann<script>   Lee ")
        'Annscript Lee'
    """
    if not name:
        return ""

    sanitized = name.strip()[:MAX_PLAYER_NAME_LENGTH]
    sanitized = re.sub(PLAYER_NAME_DISALLOWED_PATTERN, "", sanitized)
    sanitized = re.sub(r"\s+", " ", sanitized)
    return sanitized.strip()


def validate_player_names(
    names: Sequence[Optional[str]],
    min_players: Optional[int] = None,
    max_players: Optional[int] = None,
) -> ValidationResult:
    """Validate a roster of player names.

    Names are sanitized first. Empty names and case-insensitive duplicates
    are rejected, and so is a roster whose size falls outside the limits.

    Args:
        names: Raw names in roster order
        min_players: Smallest allowed roster, if any
        max_players: Largest allowed roster, if any

    Returns:
        ValidationResult whose sanitized_value is the cleaned list of names
    """
    sanitized: List[str] = [sanitize_player_name(name) for name in names]

    if min_players is not None and len(sanitized) < min_players:
        return ValidationResult.fail(
            f"At least {min_players} players required (got {len(sanitized)})"
        )
    if max_players is not None and len(sanitized) > max_players:
        return ValidationResult.fail(
            f"At most {max_players} players allowed (got {len(sanitized)})"
        )

    empty = [index for index, name in enumerate(sanitized) if not name]
    if empty:
        positions = ", ".join(str(index + 1) for index in empty)
        return ValidationResult.fail(f"Player names cannot be empty (#{positions})")

    seen = {}
    for index, name in enumerate(sanitized):
        normalized = name.lower()
        if normalized in seen:
            return ValidationResult.fail(
                f"Duplicate player name: {name} "
                f"(#{seen[normalized] + 1} and #{index + 1})"
            )
        seen[normalized] = index

    return ValidationResult.ok(sanitized)


# ========== Generic Validation ==========


def validate_positive_integer(value, field_name: str = "Value") -> ValidationResult:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if value is None:
        return ValidationResult.fail(f"{field_name} is required")
    if isinstance(value, bool) or not isinstance(value, int):
        return ValidationResult.fail(f"{field_name} must be a whole number")
    if value <= 0:
        return ValidationResult.fail(f"{field_name} must be positive")
    return ValidationResult.ok(value)


def validate_player_count(
    count: int, min_players: int, max_players: int, format_name: str
) -> ValidationResult:
    """Validate a roster size against a format's limits."""
    if count < min_players:
        return ValidationResult.fail(
            f"{format_name} requires at least {min_players} players"
        )
    if count > max_players:
        return ValidationResult.fail(
            f"{format_name} supports maximum {max_players} players"
        )
    return ValidationResult.ok(count)
