"""Group stage + playoffs format.

The roster is split into equal groups that each play a full round robin.
The top finishers of every group then enter a single-elimination playoff
bracket, which stays a set of placeholders until the group stage is
explicitly advanced.
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
from typing import Dict, List, Optional, Sequence

from bracketeer.constants import (
    GROUP_NAMES,
    GROUP_STAGE_DEFAULT_ADVANCING,
    GROUP_STAGE_DEFAULT_PLAYERS_PER_GROUP,
    GROUP_STAGE_MAX_PLAYERS,
    GROUP_STAGE_MIN_GROUPS,
    GROUP_STAGE_MIN_PLAYERS,
    GROUP_STAGE_MIN_PLAYERS_PER_GROUP,
    STAGE_GROUPS,
    STAGE_PLAYOFFS,
)
from bracketeer.formats import round_robin
from bracketeer.formats.bracket import (
    bracket_seed_order,
    build_knockout,
    is_power_of_two,
)
from bracketeer.models.tournament import GroupStageConfig, Match
from bracketeer.type_hints import MatchPairing
from bracketeer.utils import setup_logger
from bracketeer.utils.validation import ValidationResult, validate_player_count

logger = setup_logger(__name__)

NAME = "Group Stage + Playoffs"


def playoff_size(config: GroupStageConfig) -> int:
    return config.num_groups * config.advancing_per_group


def validate_config(config: GroupStageConfig, player_count: int) -> ValidationResult:
    result = validate_player_count(
        player_count, GROUP_STAGE_MIN_PLAYERS, GROUP_STAGE_MAX_PLAYERS, NAME
    )
    if not result:
        return result

    if config.num_groups < GROUP_STAGE_MIN_GROUPS:
        return ValidationResult.fail(
            f"At least {GROUP_STAGE_MIN_GROUPS} groups required"
        )
    if config.num_groups > len(GROUP_NAMES):
        return ValidationResult.fail(f"At most {len(GROUP_NAMES)} groups supported")
    if config.players_per_group < GROUP_STAGE_MIN_PLAYERS_PER_GROUP:
        return ValidationResult.fail(
            f"At least {GROUP_STAGE_MIN_PLAYERS_PER_GROUP} players per group required"
        )

    total_in_groups = config.num_groups * config.players_per_group
    if total_in_groups != player_count:
        return ValidationResult.fail(
            f"{config.num_groups} groups of {config.players_per_group} need "
            f"{total_in_groups} players but {player_count} are registered"
        )

    if config.advancing_per_group < 1:
        return ValidationResult.fail("At least 1 player must advance per group")
    if config.advancing_per_group >= config.players_per_group:
        return ValidationResult.fail("Cannot advance all players from group")

    spots = playoff_size(config)
    if not is_power_of_two(spots):
        return ValidationResult.fail(
            f"Playoff bracket of {spots} players must be a power of two"
        )
    if spots * 2 > player_count:
        return ValidationResult.fail(
            f"Playoff bracket of {spots} exceeds half of the {player_count} entrants"
        )
    return ValidationResult.ok(config)


def valid_configurations(player_count: int) -> List[GroupStageConfig]:
    """Every (groups, size, advancing) combination accepted for ``player_count``."""
    configs = []
    for num_groups in range(GROUP_STAGE_MIN_GROUPS, len(GROUP_NAMES) + 1):
        if player_count % num_groups:
            continue
        per_group = player_count // num_groups
        for advancing in range(1, per_group):
            config = GroupStageConfig(
                num_groups=num_groups,
                players_per_group=per_group,
                advancing_per_group=advancing,
            )
            if validate_config(config, player_count):
                configs.append(config)
    return configs


def default_config(player_count: int) -> GroupStageConfig:
    """Groups of four with two advancing if valid, else the first valid option."""
    groups_of_four = player_count // GROUP_STAGE_DEFAULT_PLAYERS_PER_GROUP
    preferred = GroupStageConfig(
        num_groups=max(
            GROUP_STAGE_MIN_GROUPS, min(groups_of_four, len(GROUP_NAMES))
        ),
        players_per_group=GROUP_STAGE_DEFAULT_PLAYERS_PER_GROUP,
        advancing_per_group=GROUP_STAGE_DEFAULT_ADVANCING,
    )
    if validate_config(preferred, player_count):
        return preferred
    options = valid_configurations(player_count)
    return options[0] if options else preferred


def assign_groups(
    player_count: int, num_groups: int, rng: Optional[random.Random] = None
) -> List[List[int]]:
    """Shuffle the roster and deal it into groups one player at a time."""
    order = list(range(player_count))
    (rng or random.Random()).shuffle(order)
    groups: List[List[int]] = [[] for _ in range(num_groups)]
    for position, player in enumerate(order):
        groups[position % num_groups].append(player)
    return groups


def generate_matches(
    players: Sequence[str],
    config: GroupStageConfig,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    rng = rng or random.Random()
    matches: List[Match] = []

    groups = assign_groups(len(players), config.num_groups, rng)
    for index, members in enumerate(groups):
        pairs = round_robin.generate_pairs(members, len(members) - 1, rng=rng)
        matches.extend(
            round_robin.build_matches(
                pairs,
                next_id=len(matches),
                stage=STAGE_GROUPS,
                group=GROUP_NAMES[index],
            )
        )

    rounds = build_knockout(
        playoff_size(config),
        len(matches),
        stage=STAGE_PLAYOFFS,
        label_prefix="Playoff",
    )
    matches.extend(match for round_matches in rounds for match in round_matches)

    logger.info(
        f"Generated {config.num_groups} groups of {config.players_per_group} "
        f"with a {playoff_size(config)}-player playoff bracket"
    )
    return matches


def playoff_pairs(qualifiers: Sequence[Sequence[int]]) -> List[MatchPairing]:
    """Seed group qualifiers into round 1 playoff pairs.

    ``qualifiers`` holds each group's advancing players in finishing order.
    Seeds are all group winners first, then all runners-up and so on, placed
    with the standard bracket order so the strongest seeds meet last.  Any
    pair drawn from the same group is then swapped with a later pair where
    that removes the clash.
    """
    group_of: Dict[int, int] = {}
    for group_index, members in enumerate(qualifiers):
        for player in members:
            group_of[player] = group_index

    places = max(len(members) for members in qualifiers)
    seeds = [
        members[place]
        for place in range(places)
        for members in qualifiers
        if place < len(members)
    ]
    order = bracket_seed_order(len(seeds))
    pairs = [
        [seeds[order[i] - 1], seeds[order[i + 1] - 1]] for i in range(0, len(order), 2)
    ]

    for i, pair in enumerate(pairs):
        if group_of[pair[0]] != group_of[pair[1]]:
            continue
        for other in pairs[i + 1 :] + pairs[:i]:
            if (
                group_of[other[1]] != group_of[pair[0]]
                and group_of[pair[1]] != group_of[other[0]]
            ):
                pair[1], other[1] = other[1], pair[1]
                break

    return [(a, b) for a, b in pairs]
