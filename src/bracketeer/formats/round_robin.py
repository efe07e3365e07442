"""Round robin format.

Every player plays a fixed number of matches against distinct opponents.
Pairs are drawn greedily from a shuffled list of all pairings under a
per-player quota; a failed fill is discarded and reshuffled, up to a fixed
number of attempts.
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
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Set

from bracketeer.constants import (
    ROUND_ROBIN_MAX_ATTEMPTS,
    ROUND_ROBIN_MAX_PLAYERS,
    ROUND_ROBIN_MIN_PLAYERS,
)
from bracketeer.exceptions import RoutingExhaustion
from bracketeer.models.tournament import Match, RoundRobinConfig
from bracketeer.type_hints import MatchPairing
from bracketeer.utils import setup_logger
from bracketeer.utils.validation import (
    ValidationResult,
    validate_player_count,
    validate_positive_integer,
)

logger = setup_logger(__name__)

NAME = "Round Robin"


def valid_matches_per_player(player_count: int) -> List[int]:
    """Every matches-per-player value that yields a whole number of matches."""
    return [m for m in range(1, player_count) if (player_count * m) % 2 == 0]


def total_matches(player_count: int, matches_per_player: int) -> int:
    return player_count * matches_per_player // 2


def default_config(player_count: int) -> RoundRobinConfig:
    options = valid_matches_per_player(player_count)
    return RoundRobinConfig(matches_per_player=options[0] if options else 2)


def validate_config(config: RoundRobinConfig, player_count: int) -> ValidationResult:
    result = validate_player_count(
        player_count, ROUND_ROBIN_MIN_PLAYERS, ROUND_ROBIN_MAX_PLAYERS, NAME
    )
    if not result:
        return result

    result = validate_positive_integer(
        config.matches_per_player, "Matches per player"
    )
    if not result:
        return result

    m = config.matches_per_player
    if m > player_count - 1:
        return ValidationResult.fail(
            f"Each player can play at most {player_count - 1} distinct opponents"
        )
    if (player_count * m) % 2 != 0:
        return ValidationResult.fail(
            f"{player_count} players x {m} matches must be even "
            f"(valid options: {valid_matches_per_player(player_count)})"
        )
    return ValidationResult.ok(config)


def generate_pairs(
    players: Sequence[int],
    matches_per_player: int,
    rng: Optional[random.Random] = None,
    max_attempts: int = ROUND_ROBIN_MAX_ATTEMPTS,
) -> List[MatchPairing]:
    """Select distinct pairs filling every player's ``matches_per_player`` quota.

    Raises:
        RoutingExhaustion: If no attempt fills every quota
    """
    rng = rng or random.Random()
    target = len(players) * matches_per_player // 2
    candidates = list(combinations(players, 2))

    for attempt in range(1, max_attempts + 1):
        rng.shuffle(candidates)
        counts: Dict[int, int] = {player: 0 for player in players}
        chosen: List[MatchPairing] = []

        for a, b in candidates:
            if counts[a] < matches_per_player and counts[b] < matches_per_player:
                chosen.append((a, b))
                counts[a] += 1
                counts[b] += 1
                if len(chosen) == target:
                    break

        if len(chosen) == target:
            logger.debug(f"Round robin fill succeeded on attempt {attempt}")
            return chosen

    raise RoutingExhaustion(
        f"Could not build a round robin of {matches_per_player} matches per player "
        f"for {len(players)} players in {max_attempts} attempts",
        attempts=max_attempts,
    )


def schedule_rounds(pairs: Sequence[MatchPairing]) -> List[int]:
    """Assign each pair the earliest round in which neither player is busy."""
    busy: Dict[int, Set[int]] = {}
    rounds = []
    for a, b in pairs:
        round_number = 1
        while a in busy.get(round_number, ()) or b in busy.get(round_number, ()):
            round_number += 1
        busy.setdefault(round_number, set()).update((a, b))
        rounds.append(round_number)
    return rounds


def build_matches(
    pairs: Sequence[MatchPairing],
    next_id: int = 0,
    stage: Optional[str] = None,
    group: Optional[str] = None,
) -> List[Match]:
    """Turn pairs into playable matches ordered by scheduled round."""
    rounds = schedule_rounds(pairs)
    ordered = sorted(zip(rounds, pairs), key=lambda item: item[0])
    matches = []
    for offset, (round_number, (a, b)) in enumerate(ordered):
        matches.append(
            Match(
                id=next_id + offset,
                round=round_number,
                player1=a,
                player2=b,
                stage=stage,
                group=group,
            )
        )
    return matches


def generate_matches(
    players: Sequence[str],
    config: RoundRobinConfig,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    pairs = generate_pairs(
        list(range(len(players))), config.matches_per_player, rng=rng
    )
    logger.info(
        f"Generated {len(pairs)} round robin matches for {len(players)} players"
    )
    return build_matches(pairs)
