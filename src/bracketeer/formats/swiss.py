"""Swiss format.

Only round 1 is drawn up front (random pairing, bye for the odd player out).
Later rounds are allocated as placeholders and paired on demand once the
previous round is fully decided.
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

import math
import random
from typing import List, Optional, Sequence

from bracketeer.constants import (
    SWISS_DEFAULT_MAX_ROUNDS,
    SWISS_MAX_PLAYERS,
    SWISS_MAX_ROUNDS,
    SWISS_MIN_PLAYERS,
    SWISS_MIN_ROUNDS,
)
from bracketeer.models.side import Side
from bracketeer.models.tournament import Match, SwissConfig
from bracketeer.utils import setup_logger
from bracketeer.utils.validation import (
    ValidationResult,
    validate_player_count,
    validate_positive_integer,
)

logger = setup_logger(__name__)

NAME = "Swiss"


def default_rounds(player_count: int) -> int:
    return min(math.ceil(math.log2(player_count)), SWISS_DEFAULT_MAX_ROUNDS)


def max_rounds_without_rematches(player_count: int) -> int:
    """Rounds possible before some pairing must repeat.

    With an odd roster one player sits out each round, so there is one
    extra round's worth of distinct opponents.

    This is an upper bound, not a guarantee.  Rounds are paired one at a
    time from the standings, and close to the bound the earlier rounds can
    leave a set of unplayed pairs with no complete pairing.  The next round
    then fails with RoutingExhaustion unless rematches are allowed.  The
    default of ceil(log2(n)) rounds stays well inside the bound.
    """
    return player_count - 1 if player_count % 2 == 0 else player_count


def default_config(player_count: int) -> SwissConfig:
    return SwissConfig(rounds=default_rounds(player_count))


def validate_config(config: SwissConfig, player_count: int) -> ValidationResult:
    result = validate_player_count(
        player_count, SWISS_MIN_PLAYERS, SWISS_MAX_PLAYERS, NAME
    )
    if not result:
        return result

    result = validate_positive_integer(config.rounds, "Rounds")
    if not result:
        return result
    if not SWISS_MIN_ROUNDS <= config.rounds <= SWISS_MAX_ROUNDS:
        return ValidationResult.fail(
            f"Swiss supports {SWISS_MIN_ROUNDS} to {SWISS_MAX_ROUNDS} rounds"
        )

    limit = max_rounds_without_rematches(player_count)
    if config.rounds > limit and not config.allow_rematches:
        return ValidationResult.fail(
            f"{player_count} players can play at most {limit} rounds "
            "without rematches"
        )
    return ValidationResult.ok(config)


def matches_per_round(player_count: int) -> int:
    return player_count // 2


def generate_matches(
    players: Sequence[str],
    config: SwissConfig,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """Draw round 1 and allocate placeholders for the remaining rounds."""
    rng = rng or random.Random()
    order = list(range(len(players)))
    rng.shuffle(order)

    matches: List[Match] = []
    for index in range(0, len(order) - 1, 2):
        matches.append(
            Match(
                id=len(matches),
                round=1,
                player1=order[index],
                player2=order[index + 1],
                label=f"R1-M{index // 2 + 1}",
            )
        )
    if len(order) % 2 == 1:
        matches.append(
            Match(
                id=len(matches),
                round=1,
                player1=order[-1],
                is_bye=True,
                winner=Side.SIDE1,
                label="R1-Bye",
            )
        )

    for round_number in range(2, config.rounds + 1):
        for index in range(matches_per_round(len(players))):
            matches.append(
                Match(
                    id=len(matches),
                    round=round_number,
                    is_placeholder=True,
                    label=f"R{round_number}-M{index + 1}",
                )
            )
        if len(players) % 2 == 1:
            matches.append(
                Match(
                    id=len(matches),
                    round=round_number,
                    is_placeholder=True,
                    is_bye=True,
                    label=f"R{round_number}-Bye",
                )
            )

    logger.info(
        f"Generated Swiss round 1 for {len(players)} players "
        f"({config.rounds} rounds planned)"
    )
    return matches
