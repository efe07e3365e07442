"""Exceptions for use in Bracketeer"""

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

from typing import Optional

# ========== Base Application Exception ==========


class BracketeerException(Exception):
    """Base exception for all Bracketeer errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Configuration Exceptions ==========


class ConfigurationError(BracketeerException):
    """Raised when a format configuration or player count is invalid.

    Raised before any match is created, so nothing is instantiated.
    """

    pass


# ========== Result Exceptions ==========


class ResultException(BracketeerException):
    """Base exception for game recording errors."""

    pass


class SequenceError(ResultException):
    """Raised when a game slot is written before an earlier slot is decided.

    Attributes:
        missing_slot: Zero-based index of the first undecided earlier slot
    """

    def __init__(self, missing_slot: int, message: Optional[str] = None):
        self.missing_slot = missing_slot
        if message is None:
            message = f"Please complete Game {missing_slot + 1} first!"
        super().__init__(message)


class StateError(ResultException):
    """Raised when recording into a match that cannot accept the write.

    Placeholder, bye and void matches never accept results, and a decided
    match only accepts edits to slots that are already filled.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(BracketeerException):
    """Base exception for pairing-related errors."""

    pass


class RoutingExhaustion(PairingException):
    """Raised when a pairing search hits its attempt cap without a result."""

    def __init__(self, message: str, attempts: int = 0):
        self.attempts = attempts
        super().__init__(message)


# ========== Tournament Exceptions ==========


class TournamentException(BracketeerException):
    """Base exception for tournament orchestration errors."""

    pass


class MatchNotFoundException(TournamentException):
    """Raised when a match id does not exist in the tournament."""

    def __init__(self, match_id: int):
        self.match_id = match_id
        super().__init__(f"Match {match_id} not found")


class SnapshotError(TournamentException):
    """Raised when an inbound snapshot cannot be turned into a tournament."""

    pass
