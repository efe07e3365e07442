"""Bracket advancement.

Moves winners (and, through losers paths, losers) of decided matches into
their downstream matches, completes byes when the opposing seat can never
be filled, and undoes all of that when a result is withdrawn.
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

from typing import Dict, List, Optional, Tuple

from bracketeer.constants import BRACKET_GRAND_FINALS, BRACKET_LOSERS
from bracketeer.models.side import Side
from bracketeer.models.tournament import Match
from bracketeer.type_hints import FeedKind
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

WIN: FeedKind = "win"
LOSS: FeedKind = "loss"


class BracketAdvancer:
    """Propagates results through ``feeds_into_win`` / ``feeds_into_loss`` links.

    A downstream match seats its feeders in a fixed order: winner feeders by
    id, then loser feeders by id.  The first feeder fills ``player1`` and the
    second ``player2``.

    Each match also has a *potential*: how many players can ever reach it.
    A match that can only ever receive one player becomes a bye once that
    player arrives, and a match that can receive nobody is void.
    """

    def __init__(self, matches: List[Match]):
        self.matches = matches
        self.by_id: Dict[int, Match] = {match.id: match for match in matches}
        self._feeders: Dict[int, List[Tuple[int, FeedKind]]] = {}
        self._potential: Dict[int, int] = {}

        ordered = sorted(matches, key=lambda match: match.id)
        for kind in (WIN, LOSS):
            for match in ordered:
                target = match.feeds_into_win if kind == WIN else match.feeds_into_loss
                if target is not None:
                    self._feeders.setdefault(target, []).append((match.id, kind))

    # ========== Structure ==========

    def feeders(self, match: Match) -> List[Tuple[Match, FeedKind]]:
        return [
            (self.by_id[source], kind)
            for source, kind in self._feeders.get(match.id, [])
        ]

    def potential(self, match: Match) -> int:
        """Number of players that can ever be seated in ``match`` (0, 1 or 2)."""
        if match.id in self._potential:
            return self._potential[match.id]

        if match.id not in self._feeders:
            if match.is_placeholder:
                # Seeded from outside the bracket (playoffs, Swiss rounds)
                value = 1 if match.is_bye else 2
            else:
                value = sum(
                    player is not None for player in (match.player1, match.player2)
                )
        else:
            value = 0
            for source, kind in self.feeders(match):
                if kind == WIN and self.potential(source) >= 1:
                    value += 1
                elif kind == LOSS and self.potential(source) >= 2:
                    value += 1

        self._potential[match.id] = value
        return value

    def _contributes(self, source: Match, kind: FeedKind) -> bool:
        needed = 1 if kind == WIN else 2
        return self.potential(source) >= needed

    def is_void(self, match: Match) -> bool:
        return self.potential(match) == 0

    def is_playable(self, match: Match) -> bool:
        """True for matches that need a played result (counted in progress)."""
        if match.is_bye or self.is_void(match):
            return False
        if match.is_conditional and not match.has_both_players:
            return False
        return True

    def slot_for(self, target: Match, source: Match, kind: FeedKind) -> Side:
        index = self._feeders[target.id].index((source.id, kind))
        return Side.SIDE1 if index == 0 else Side.SIDE2

    # ========== Advancement ==========

    def advance(self, match: Match) -> None:
        """Seat the winner and loser of a decided match downstream."""
        if match.winner is None:
            return

        for target_id, kind, player in (
            (match.feeds_into_win, WIN, match.winner_index),
            (match.feeds_into_loss, LOSS, match.loser_index),
        ):
            if target_id is None or player is None:
                continue
            target = self.by_id[target_id]
            if target.is_conditional and match.winner is not Side.SIDE2:
                # Reset only happens when the second seat wins the first meeting
                continue
            self._place(target, match, kind, player)

    def _place(self, target: Match, source: Match, kind: FeedKind, player: int) -> None:
        if target.is_bye and target.player1 == player:
            return

        side = self.slot_for(target, source, kind)
        current = target.player_on(side)
        if current != player:
            if current is not None:
                logger.debug(
                    f"Replacing player {current} with {player} in match {target.id}"
                )
                self._clear_seat(target, side)
            target.set_player(side, player)
            logger.debug(f"Player {player} advances to match {target.id} ({side.name})")
        self._refresh(target)

    def _refresh(self, target: Match) -> None:
        """Open a filled match for play, or complete it as a bye."""
        if target.has_both_players:
            target.is_placeholder = False
            return
        if target.is_bye or self.potential(target) != 1:
            return

        lone = target.player1 if target.player1 is not None else target.player2
        if lone is None:
            return
        target.player1 = lone
        target.player2 = None
        target.reset_result()
        target.is_bye = True
        target.is_placeholder = False
        target.winner = Side.SIDE1
        logger.debug(f"Match {target.id} completed as a bye for player {lone}")
        self.advance(target)

    # ========== Retraction ==========

    def retract(self, match: Match) -> None:
        """Withdraw everything ``match`` seated downstream, recursively."""
        for target_id, kind in (
            (match.feeds_into_win, WIN),
            (match.feeds_into_loss, LOSS),
        ):
            if target_id is None:
                continue
            target = self.by_id[target_id]
            if not self._contributes(match, kind):
                continue

            if target.is_bye and target.id in self._feeders:
                # A derived bye only ever holds the one contributing player
                self.retract(target)
                target.player1 = None
                target.player2 = None
                target.reset_result()
                target.is_bye = False
                target.is_placeholder = True
                logger.debug(f"Bye in match {target.id} withdrawn")
                continue

            side = self.slot_for(target, match, kind)
            if target.player_on(side) is not None:
                self._clear_seat(target, side)

    def _clear_seat(self, target: Match, side: Side) -> None:
        if target.winner is not None:
            self.retract(target)
        target.reset_result()
        target.set_player(side, None)
        target.is_placeholder = True
        logger.debug(f"Cleared {side.name} of match {target.id}")

    # ========== Rebuild and checks ==========

    def settle(self) -> None:
        """Replay every decided match so derived bracket state is complete."""
        for match in sorted(self.matches, key=lambda match: match.id):
            if match.winner is not None:
                self.advance(match)
            elif match.id in self._feeders and not match.has_both_players:
                self._refresh(match)

    def validate_structure(self) -> List[str]:
        """Check the feed links; returns human readable problems (empty if sound)."""
        problems = []
        for match in self.matches:
            for target_id, kind in (
                (match.feeds_into_win, WIN),
                (match.feeds_into_loss, LOSS),
            ):
                if target_id is None:
                    continue
                target = self.by_id.get(target_id)
                if target is None:
                    problems.append(
                        f"Match {match.id} feeds into missing match {target_id}"
                    )
                    continue
                if target.id <= match.id:
                    problems.append(
                        f"Match {match.id} feeds backwards into {target.id}"
                    )
                problem = self._check_link(match, target, kind)
                if problem:
                    problems.append(problem)

        for target_id, sources in self._feeders.items():
            if len(sources) > 2:
                problems.append(f"Match {target_id} has {len(sources)} feeders")
        return problems

    def _check_link(
        self, source: Match, target: Match, kind: FeedKind
    ) -> Optional[str]:
        if target.is_conditional:
            if (
                source.bracket != BRACKET_GRAND_FINALS
                or target.round != source.round + 1
            ):
                return f"Reset match {target.id} must follow the grand final"
            return None

        if kind == LOSS:
            if target.bracket == BRACKET_LOSERS or target.is_third_place:
                return None
            return f"Match {source.id} sends its loser outside a losers path"

        if target.bracket == BRACKET_GRAND_FINALS:
            if source.bracket != BRACKET_GRAND_FINALS and target.round == 1:
                return None
            return f"Match {source.id} feeds the grand final out of order"
        if target.bracket != source.bracket or target.stage != source.stage:
            return f"Match {source.id} feeds into a different bracket"
        if target.round != source.round + 1:
            return (
                f"Match {source.id} (round {source.round}) feeds into "
                f"round {target.round}"
            )
        return None
