"""Format and per-format configuration data classes."""

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

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional, Type, Union

from bracketeer.constants import (
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_GROUP_STAGE,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    GAME_LOSS_POINTS,
    GAME_WIN_POINTS,
    MATCH_WIN_POINTS,
    SEEDING_RANDOM,
    STAGE_GROUPS,
)
from bracketeer.type_hints import SeedingMethod, StageTag


class Format(Enum):
    """Supported tournament formats."""

    ROUND_ROBIN = FORMAT_ROUND_ROBIN
    SINGLE_ELIMINATION = FORMAT_SINGLE_ELIMINATION
    DOUBLE_ELIMINATION = FORMAT_DOUBLE_ELIMINATION
    SWISS = FORMAT_SWISS
    GROUP_STAGE = FORMAT_GROUP_STAGE


class _ConfigMixin:
    """Shared plain-data conversion for the config data classes."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Deserialize configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass
class ScoringWeights(_ConfigMixin):
    """Point weights used by the standings engine.

    Attributes
    ----------
    match_win : float
        Points per match won, byes included.
    game_win : float
        Points per game won.
    game_loss : float
        Points per game lost (normally negative).
    """

    match_win: float = MATCH_WIN_POINTS
    game_win: float = GAME_WIN_POINTS
    game_loss: float = GAME_LOSS_POINTS


@dataclass
class RoundRobinConfig(_ConfigMixin):
    """Round robin settings.

    Attributes
    ----------
    matches_per_player : int
        How many matches each player plays. ``players * matches_per_player``
        must be even.
    seed : int or None
        Seed for the pairing shuffle.
    """

    matches_per_player: int
    seed: Optional[int] = None


@dataclass
class SingleEliminationConfig(_ConfigMixin):
    """Single elimination settings.

    Attributes
    ----------
    seeding_method : str
        "random" shuffles the roster, "seeded" uses roster order as seed order.
    third_place_match : bool
        Add a match between the two semifinal losers.
    seed : int or None
        Seed for the random seeding shuffle.
    """

    seeding_method: SeedingMethod = SEEDING_RANDOM
    third_place_match: bool = False
    seed: Optional[int] = None


@dataclass
class DoubleEliminationConfig(_ConfigMixin):
    """Double elimination settings.

    Attributes
    ----------
    seeding_method : str
        "random" or "seeded", as for single elimination.
    grand_final_reset : bool
        Play a deciding rematch when the losers bracket champion wins the
        first grand final.
    seed : int or None
        Seed for the random seeding shuffle.
    """

    seeding_method: SeedingMethod = SEEDING_RANDOM
    grand_final_reset: bool = True
    seed: Optional[int] = None


@dataclass
class SwissConfig(_ConfigMixin):
    """Swiss settings.

    Attributes
    ----------
    rounds : int
        Total number of rounds.
    allow_rematches : bool
        Permit repeat pairings when no repeat-free pairing exists.
    seed : int or None
        Seed for the round 1 shuffle.
    """

    rounds: int
    allow_rematches: bool = False
    seed: Optional[int] = None


@dataclass
class GroupStageConfig(_ConfigMixin):
    """Group stage + playoffs settings.

    Attributes
    ----------
    num_groups : int
        Number of groups (2 to 8).
    players_per_group : int
        Size of every group; groups partition the roster exactly.
    advancing_per_group : int
        Top finishers per group seeded into the playoff bracket.
    current_stage : str
        "groups" until the playoffs are seeded, then "playoffs".
    seed : int or None
        Seed for the group assignment and round robin shuffles.
    """

    num_groups: int
    players_per_group: int
    advancing_per_group: int
    current_stage: StageTag = STAGE_GROUPS
    seed: Optional[int] = None


FormatConfig = Union[
    RoundRobinConfig,
    SingleEliminationConfig,
    DoubleEliminationConfig,
    SwissConfig,
    GroupStageConfig,
]

CONFIG_TYPES: Dict[Format, Type] = {
    Format.ROUND_ROBIN: RoundRobinConfig,
    Format.SINGLE_ELIMINATION: SingleEliminationConfig,
    Format.DOUBLE_ELIMINATION: DoubleEliminationConfig,
    Format.SWISS: SwissConfig,
    Format.GROUP_STAGE: GroupStageConfig,
}


def config_from_dict(fmt: Format, data: Dict[str, Any]) -> FormatConfig:
    """Build the config data class matching ``fmt`` from plain data."""
    return CONFIG_TYPES[fmt].from_dict(data)
