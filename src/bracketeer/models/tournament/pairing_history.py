"""Data models for pairing history."""

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

from dataclasses import dataclass, field
from typing import Iterable, Set

from bracketeer.models.tournament.match import Match


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    previous_matches : set of frozenset of int
        Set containing frozensets of player index pairs representing
        matches that have already been paired.
    bye_recipients : set of int
        Players who have already received a bye.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)
    bye_recipients: Set[int] = field(default_factory=set)

    def add_pairing(self, player1: int, player2: int) -> None:
        """Record that two players have been paired."""
        self.previous_matches.add(frozenset({player1, player2}))

    def have_played(self, player1: int, player2: int) -> bool:
        """Check if two players have previously played each other."""
        return frozenset({player1, player2}) in self.previous_matches

    def add_bye(self, player: int) -> None:
        self.bye_recipients.add(player)

    def had_bye(self, player: int) -> bool:
        return player in self.bye_recipients

    @classmethod
    def from_matches(cls, matches: Iterable[Match]) -> "PairingHistory":
        """Rebuild the history from every populated match."""
        history = cls()
        for match in matches:
            if match.is_bye and match.player1 is not None:
                history.add_bye(match.player1)
            elif match.has_both_players:
                history.add_pairing(match.player1, match.player2)
        return history
