"""Single elimination format."""

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
    SEEDING_RANDOM,
    SEEDING_SEEDED,
    SINGLE_ELIMINATION_MAX_PLAYERS,
    SINGLE_ELIMINATION_MIN_PLAYERS,
)
from bracketeer.formats.bracket import (
    build_knockout,
    first_round_pairs,
    next_power_of_two,
    seed_players,
)
from bracketeer.models.tournament import Match, SingleEliminationConfig
from bracketeer.utils import setup_logger
from bracketeer.utils.validation import ValidationResult, validate_player_count

logger = setup_logger(__name__)

NAME = "Single Elimination"

# A third-place match needs two real semifinal losers
THIRD_PLACE_MIN_PLAYERS = 4


def default_config(player_count: int) -> SingleEliminationConfig:
    return SingleEliminationConfig()


def validate_seeding_method(seeding_method: str) -> ValidationResult:
    if seeding_method not in (SEEDING_RANDOM, SEEDING_SEEDED):
        return ValidationResult.fail(
            f"Unknown seeding method: {seeding_method!r} "
            f"(expected {SEEDING_RANDOM!r} or {SEEDING_SEEDED!r})"
        )
    return ValidationResult.ok(seeding_method)


def validate_config(
    config: SingleEliminationConfig, player_count: int
) -> ValidationResult:
    result = validate_player_count(
        player_count,
        SINGLE_ELIMINATION_MIN_PLAYERS,
        SINGLE_ELIMINATION_MAX_PLAYERS,
        NAME,
    )
    if not result:
        return result
    result = validate_seeding_method(config.seeding_method)
    if not result:
        return result
    if config.third_place_match and player_count < THIRD_PLACE_MIN_PLAYERS:
        return ValidationResult.fail(
            f"A third-place match needs at least {THIRD_PLACE_MIN_PLAYERS} players"
        )
    return ValidationResult.ok(config)


def generate_matches(
    players: Sequence[str],
    config: SingleEliminationConfig,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """Build the full bracket: populated round 1, placeholder later rounds."""
    size = next_power_of_two(len(players))
    seeds = seed_players(len(players), config.seeding_method, rng)
    rounds = build_knockout(size, 0, pairs=first_round_pairs(seeds, size))
    matches = [match for round_matches in rounds for match in round_matches]

    if config.third_place_match and len(rounds) >= 2:
        third_place = Match(
            id=len(matches),
            round=len(rounds),
            is_placeholder=True,
            is_third_place=True,
            label="Third Place",
        )
        for semifinal in rounds[-2]:
            semifinal.feeds_into_loss = third_place.id
        matches.append(third_place)

    logger.info(
        f"Generated {size}-slot single elimination bracket for {len(players)} players "
        f"({size - len(players)} byes)"
    )
    return matches
