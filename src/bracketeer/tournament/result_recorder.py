"""Result recording and validation for tournaments.

This module handles recording game results with proper validation and error checking.
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

from typing import List, Optional, Tuple

from bracketeer.constants import (
    GAMES_PER_MATCH,
    GAMES_TO_WIN,
    STAGE_GROUPS,
    STAGE_PLAYOFFS,
)
from bracketeer.exceptions import ResultException, SequenceError, StateError
from bracketeer.models.side import UNDECIDED, GameSlot, Side
from bracketeer.models.tournament import Format, Match, TournamentState
from bracketeer.tournament.bracket_advancer import BracketAdvancer
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


def derive_winner(games: List[GameSlot]) -> Tuple[Optional[Side], Optional[int]]:
    """Scan game slots left to right until a side has taken two games.

    Returns:
        The winning side (or None) and the slot index where it clinched
    """
    wins = {Side.SIDE1: 0, Side.SIDE2: 0}
    for index, game in enumerate(games):
        if game is UNDECIDED:
            continue
        wins[game] += 1
        if wins[game] >= GAMES_TO_WIN:
            return game, index
    return None, None


def apply_game_result(match: Match, slot: int, side: Side) -> None:
    """Write ``side`` into game ``slot`` of ``match``.

    Writing the designator a slot already holds toggles it back to
    undecided and clears every later slot.  After any write the winner is
    re-derived, and slots after the clinching game are cleared.

    Raises:
        StateError: If the match cannot accept results
        SequenceError: If an earlier slot is still undecided
        ResultException: If ``slot`` is out of range
    """
    if not 0 <= slot < GAMES_PER_MATCH:
        raise ResultException(f"Game slot must be between 0 and {GAMES_PER_MATCH - 1}")
    if match.is_bye:
        raise StateError(f"Match {match.id} is a bye")
    if match.is_placeholder or not match.has_both_players:
        raise StateError(f"Match {match.id} is waiting for its players")

    for index in range(slot):
        if match.games[index] is UNDECIDED:
            raise SequenceError(index)

    if match.winner is not None and match.games[slot] is UNDECIDED:
        raise StateError("Match already completed")

    if match.games[slot] is side:
        for index in range(slot, GAMES_PER_MATCH):
            match.games[index] = UNDECIDED
    else:
        match.games[slot] = side

    winner, clinched_at = derive_winner(match.games)
    match.winner = winner
    if clinched_at is not None:
        for index in range(clinched_at + 1, GAMES_PER_MATCH):
            match.games[index] = UNDECIDED


class ResultRecorder:
    """Handles recording game results and pushing them through the bracket.

    This class is responsible for:
    - Rejecting writes into locked, void or unplayable matches
    - Applying the game recording state machine
    - Advancing or retracting players when a match winner changes
    """

    def __init__(self, state: TournamentState):
        self.state = state

    def record_game(self, match_id: int, slot: int, side: Side) -> Match:
        """Record (or toggle off) the outcome of one game.

        Args:
            match_id: Id of the match
            slot: Zero-based game slot
            side: Side that won the game

        Returns:
            The updated match

        Raises:
            MatchNotFoundException: If the match does not exist
            ResultException: If the write is rejected; nothing is changed
        """
        match = self.state.get_match(match_id)
        advancer = BracketAdvancer(self.state.matches)
        if advancer.is_void(match):
            raise StateError(f"Match {match.id} will never be played")
        self._check_locked(match)

        previous = match.winner
        apply_game_result(match, slot, side)
        logger.debug(
            f"Match {match.id} game {slot + 1}: {side.name} "
            f"(winner {match.winner.name if match.winner else 'undecided'})"
        )

        if match.winner is not previous:
            if previous is not None:
                advancer.retract(match)
            if match.winner is not None:
                advancer.advance(match)
        return match

    def _check_locked(self, match: Match) -> None:
        if self.state.format is Format.SWISS:
            later = [
                other
                for other in self.state.matches
                if other.round > match.round and not other.is_placeholder
            ]
            if later:
                raise StateError(
                    f"Round {match.round} is locked because round "
                    f"{match.round + 1} has already been paired"
                )
        elif self.state.format is Format.GROUP_STAGE:
            if (
                match.stage == STAGE_GROUPS
                and self.state.config.current_stage == STAGE_PLAYOFFS
            ):
                raise StateError(
                    "Group results are locked once the playoffs are seeded"
                )
