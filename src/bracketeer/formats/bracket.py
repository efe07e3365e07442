"""Bracket construction helpers shared by the elimination formats."""

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
from typing import List, Optional, Sequence, Tuple

from bracketeer.constants import SEEDING_RANDOM
from bracketeer.models.side import Side
from bracketeer.models.tournament import Match
from bracketeer.type_hints import MaybePlayer


def next_power_of_two(n: int) -> int:
    power = 1
    while power < n:
        power *= 2
    return power


def is_power_of_two(n: int) -> bool:
    return n >= 1 and n & (n - 1) == 0


def bracket_seed_order(size: int) -> List[int]:
    """Return 1-based seeds in bracket slot order.

    Seed 1 meets seed ``size`` in the first round and the top two seeds can
    only meet in the final, e.g. ``[1, 8, 4, 5, 2, 7, 3, 6]`` for eight slots.
    Consecutive entries form the round 1 pairs.
    """
    order = [1]
    while len(order) < size:
        total = len(order) * 2 + 1
        order = [slot for seed in order for slot in (seed, total - seed)]
    return order


def seed_players(
    player_count: int, seeding_method: str, rng: Optional[random.Random] = None
) -> List[int]:
    """Roster indices in seed order (first entry is seed 1)."""
    seeds = list(range(player_count))
    if seeding_method == SEEDING_RANDOM:
        (rng or random.Random()).shuffle(seeds)
    return seeds


def first_round_pairs(
    seeds: Sequence[int], size: int
) -> List[Tuple[MaybePlayer, MaybePlayer]]:
    """Pair seeded players for round 1, padding with byes for the top seeds."""
    slots = [
        seeds[seed - 1] if seed <= len(seeds) else None
        for seed in bracket_seed_order(size)
    ]
    return [(slots[i], slots[i + 1]) for i in range(0, size, 2)]


def build_knockout(
    size: int,
    next_id: int,
    pairs: Optional[Sequence[Tuple[MaybePlayer, MaybePlayer]]] = None,
    bracket: Optional[str] = None,
    stage: Optional[str] = None,
    label_prefix: str = "R",
) -> List[List[Match]]:
    """Build a single-elimination tree for ``size`` slots.

    Round 1 is populated from ``pairs`` (a lone player becomes a decided bye);
    without pairs every round 1 match is a placeholder awaiting seeding.
    Later rounds are placeholders wired through ``feeds_into_win``.

    Returns:
        Matches grouped by round, ids allocated consecutively from ``next_id``
    """
    rounds: List[List[Match]] = []
    round_number = 1
    match_count = size // 2
    while match_count >= 1:
        current = []
        for index in range(match_count):
            match = Match(
                id=next_id,
                round=round_number,
                bracket=bracket,
                stage=stage,
                label=f"{label_prefix}-R{round_number}-M{index + 1}",
                is_placeholder=True,
            )
            if round_number == 1 and pairs is not None:
                _seat_first_round(match, *pairs[index])
            current.append(match)
            next_id += 1
        if rounds:
            for index, match in enumerate(rounds[-1]):
                match.feeds_into_win = current[index // 2].id
        rounds.append(current)
        round_number += 1
        match_count //= 2
    return rounds


def _seat_first_round(match: Match, player1: MaybePlayer, player2: MaybePlayer) -> None:
    if player1 is None and player2 is None:
        return
    match.is_placeholder = False
    if player1 is None or player2 is None:
        match.player1 = player1 if player1 is not None else player2
        match.is_bye = True
        match.winner = Side.SIDE1
    else:
        match.player1 = player1
        match.player2 = player2
