"""Double elimination format.

Players drop into the losers bracket on their first loss and are only
eliminated on their second.  For a bracket of ``size`` slots the losers
bracket has ``2 * (log2(size) - 1)`` rounds, alternating between rounds that
take in fresh losers from the winners bracket and rounds that halve the
field.  Both bracket champions meet in the grand finals, with an optional
reset match played only if the losers bracket champion wins the first one.
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

import random
from typing import List, Optional, Sequence

from bracketeer.constants import (
    BRACKET_GRAND_FINALS,
    BRACKET_LOSERS,
    BRACKET_WINNERS,
    DOUBLE_ELIMINATION_MAX_PLAYERS,
    DOUBLE_ELIMINATION_MIN_PLAYERS,
)
from bracketeer.formats.bracket import (
    build_knockout,
    first_round_pairs,
    next_power_of_two,
    seed_players,
)
from bracketeer.formats.single_elimination import validate_seeding_method
from bracketeer.models.tournament import DoubleEliminationConfig, Match
from bracketeer.utils import setup_logger
from bracketeer.utils.validation import ValidationResult, validate_player_count

logger = setup_logger(__name__)

NAME = "Double Elimination"


def default_config(player_count: int) -> DoubleEliminationConfig:
    return DoubleEliminationConfig()


def validate_config(
    config: DoubleEliminationConfig, player_count: int
) -> ValidationResult:
    result = validate_player_count(
        player_count,
        DOUBLE_ELIMINATION_MIN_PLAYERS,
        DOUBLE_ELIMINATION_MAX_PLAYERS,
        NAME,
    )
    if not result:
        return result
    result = validate_seeding_method(config.seeding_method)
    if not result:
        return result
    return ValidationResult.ok(config)


def losers_round_size(bracket_size: int, losers_round: int) -> int:
    """Number of matches in losers bracket round ``losers_round`` (1-based)."""
    return bracket_size // 2 ** ((losers_round + 1) // 2 + 1)


def generate_matches(
    players: Sequence[str],
    config: DoubleEliminationConfig,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    size = next_power_of_two(len(players))
    seeds = seed_players(len(players), config.seeding_method, rng)
    winners = build_knockout(
        size,
        0,
        pairs=first_round_pairs(seeds, size),
        bracket=BRACKET_WINNERS,
        label_prefix="WB",
    )
    matches = [match for round_matches in winners for match in round_matches]

    losers: List[List[Match]] = []
    for losers_round in range(1, 2 * (len(winners) - 1) + 1):
        count = losers_round_size(size, losers_round)
        current = [
            Match(
                id=len(matches) + index,
                round=losers_round,
                bracket=BRACKET_LOSERS,
                is_placeholder=True,
                label=f"LB-R{losers_round}-M{index + 1}",
            )
            for index in range(count)
        ]

        if losers_round == 1:
            for index, match in enumerate(winners[0]):
                match.feeds_into_loss = current[index // 2].id
        elif losers_round % 2 == 0:
            # Survivors meet the losers of the next winners round, in reverse
            # order so early opponents are not immediately rematched.
            for index, match in enumerate(losers[-1]):
                match.feeds_into_win = current[index].id
            for index, match in enumerate(winners[losers_round // 2]):
                match.feeds_into_loss = current[count - 1 - index].id
        else:
            for index, match in enumerate(losers[-1]):
                match.feeds_into_win = current[index // 2].id

        losers.append(current)
        matches.extend(current)

    grand_finals = Match(
        id=len(matches),
        round=1,
        bracket=BRACKET_GRAND_FINALS,
        is_placeholder=True,
        label="Grand Finals",
    )
    winners[-1][0].feeds_into_win = grand_finals.id
    losers[-1][0].feeds_into_win = grand_finals.id
    matches.append(grand_finals)

    if config.grand_final_reset:
        reset = Match(
            id=len(matches),
            round=2,
            bracket=BRACKET_GRAND_FINALS,
            is_placeholder=True,
            is_conditional=True,
            label="Grand Finals Reset",
        )
        grand_finals.feeds_into_win = reset.id
        grand_finals.feeds_into_loss = reset.id
        matches.append(reset)

    logger.info(
        f"Generated double elimination bracket for {len(players)} players: "
        f"{len(winners)} winners rounds, {len(losers)} losers rounds"
    )
    return matches
