"""Swiss pairing search.

Players are paired top-down in standings order.  Each player is offered
opponents from the same tier (match wins) first and from the nearest tiers
after that, skipping anyone already played.  The search backtracks when a
choice leaves the rest of the field unpairable, and gives up once it has
spent a fixed step budget.
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

from typing import Dict, List, Optional, Sequence

from bracketeer.constants import SWISS_MAX_SEARCH_STEPS
from bracketeer.exceptions import RoutingExhaustion
from bracketeer.models.tournament import PairingHistory
from bracketeer.type_hints import MatchPairing, RoundPairings
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


class _PairingSearch:
    def __init__(
        self,
        tiers: Dict[int, int],
        history: PairingHistory,
        allow_rematches: bool,
        max_steps: int,
    ):
        self.tiers = tiers
        self.history = history
        self.allow_rematches = allow_rematches
        self.max_steps = max_steps
        self.steps = 0

    def solve(self, pool: List[int]) -> Optional[List[MatchPairing]]:
        if not pool:
            return []

        self.steps += 1
        if self.steps > self.max_steps:
            raise RoutingExhaustion(
                f"Swiss pairing search gave up after {self.max_steps} steps",
                attempts=self.steps,
            )

        top, rest = pool[0], pool[1:]
        order = sorted(
            range(len(rest)), key=lambda i: self._preference(top, rest[i], i)
        )
        for i in order:
            opponent = rest[i]
            if not self.allow_rematches and self.history.have_played(top, opponent):
                continue
            remainder = self.solve(rest[:i] + rest[i + 1 :])
            if remainder is not None:
                return [(top, opponent)] + remainder
        return None

    def _preference(self, top: int, opponent: int, position: int):
        rematch = self.history.have_played(top, opponent)
        return (rematch, abs(self.tiers[top] - self.tiers[opponent]), position)


def bye_candidates(ranked: Sequence[int], history: PairingHistory) -> List[int]:
    """Lowest ranked first, players without a previous bye ahead of the rest."""
    reverse = list(reversed(ranked))
    fresh = [player for player in reverse if not history.had_bye(player)]
    repeat = [player for player in reverse if history.had_bye(player)]
    return fresh + repeat


def pair_round(
    ranked: Sequence[int],
    tiers: Dict[int, int],
    history: PairingHistory,
    allow_rematches: bool = False,
    max_steps: int = SWISS_MAX_SEARCH_STEPS,
) -> RoundPairings:
    """Pair a Swiss round.

    Args:
        ranked: Roster indices in current standings order
        tiers: Tier key (match wins) per player
        history: Pairings and byes so far
        allow_rematches: Permit repeats if no repeat-free pairing is found
        max_steps: Search budget for each pass over the bye candidates; a
            pass that runs out falls through to the next one

    Returns:
        The list of pairs (higher ranked player first) and the bye recipient

    Raises:
        RoutingExhaustion: If no acceptable pairing is found
    """
    byes: List[Optional[int]] = (
        bye_candidates(ranked, history) if len(ranked) % 2 else [None]
    )
    passes = [False, True] if allow_rematches else [False]
    exhausted: Optional[RoutingExhaustion] = None

    for rematches in passes:
        search = _PairingSearch(tiers, history, rematches, max_steps)
        for bye in byes:
            pool = [player for player in ranked if player != bye]
            try:
                pairs = search.solve(pool)
            except RoutingExhaustion as e:
                # Every bye candidate of a pass shares one step budget
                logger.debug(f"Swiss pass (rematches={rematches}) gave up: {e}")
                exhausted = e
                break
            if pairs is not None:
                if rematches:
                    logger.warning("Swiss round paired with rematches")
                return pairs, bye

    if exhausted is not None:
        raise exhausted
    raise RoutingExhaustion(
        f"No Swiss pairing of {len(ranked)} players avoids a rematch"
    )
