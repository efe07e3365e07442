"""Strategy table mapping each Format to its capabilities."""

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
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from bracketeer.constants import (
    DOUBLE_ELIMINATION_MAX_PLAYERS,
    DOUBLE_ELIMINATION_MIN_PLAYERS,
    GROUP_STAGE_MAX_PLAYERS,
    GROUP_STAGE_MIN_PLAYERS,
    ROUND_ROBIN_MAX_PLAYERS,
    ROUND_ROBIN_MIN_PLAYERS,
    SINGLE_ELIMINATION_MAX_PLAYERS,
    SINGLE_ELIMINATION_MIN_PLAYERS,
    SWISS_MAX_PLAYERS,
    SWISS_MIN_PLAYERS,
)
from bracketeer.formats import (
    double_elimination,
    group_stage,
    round_robin,
    single_elimination,
    swiss,
)
from bracketeer.models.tournament import Format, FormatConfig, Match, Standings
from bracketeer.tournament.tiebreak_calculator import (
    calculate_standings,
    elimination_standings,
    group_stage_standings,
)
from bracketeer.utils.validation import ValidationResult


@dataclass(frozen=True)
class FormatStrategy:
    """Capabilities and metadata of one tournament format."""

    format: Format
    name: str
    description: str
    min_players: int
    max_players: int
    multi_stage: bool
    recommended_player_counts: Tuple[int, ...]
    default_config: Callable[[int], FormatConfig]
    validate_config: Callable[[FormatConfig, int], ValidationResult]
    generate_matches: Callable[
        [Sequence[str], FormatConfig, Optional[random.Random]], List[Match]
    ]
    calculate_standings: Callable[..., Standings] = calculate_standings

    def info(self) -> Dict[str, Any]:
        return {
            "type": self.format.value,
            "name": self.name,
            "description": self.description,
            "min_players": self.min_players,
            "max_players": self.max_players,
            "multi_stage": self.multi_stage,
            "recommended_player_counts": list(self.recommended_player_counts),
        }


STRATEGIES: Dict[Format, FormatStrategy] = {
    Format.ROUND_ROBIN: FormatStrategy(
        format=Format.ROUND_ROBIN,
        name=round_robin.NAME,
        description="Everyone plays a fixed number of distinct opponents",
        min_players=ROUND_ROBIN_MIN_PLAYERS,
        max_players=ROUND_ROBIN_MAX_PLAYERS,
        multi_stage=False,
        recommended_player_counts=(4, 6, 7, 8),
        default_config=round_robin.default_config,
        validate_config=round_robin.validate_config,
        generate_matches=round_robin.generate_matches,
    ),
    Format.SINGLE_ELIMINATION: FormatStrategy(
        format=Format.SINGLE_ELIMINATION,
        name=single_elimination.NAME,
        description="Lose once and you are out",
        min_players=SINGLE_ELIMINATION_MIN_PLAYERS,
        max_players=SINGLE_ELIMINATION_MAX_PLAYERS,
        multi_stage=False,
        recommended_player_counts=(4, 8, 16, 32),
        default_config=single_elimination.default_config,
        validate_config=single_elimination.validate_config,
        generate_matches=single_elimination.generate_matches,
        calculate_standings=elimination_standings,
    ),
    Format.DOUBLE_ELIMINATION: FormatStrategy(
        format=Format.DOUBLE_ELIMINATION,
        name=double_elimination.NAME,
        description="Two losses to be eliminated, with a losers bracket",
        min_players=DOUBLE_ELIMINATION_MIN_PLAYERS,
        max_players=DOUBLE_ELIMINATION_MAX_PLAYERS,
        multi_stage=False,
        recommended_player_counts=(4, 8, 16),
        default_config=double_elimination.default_config,
        validate_config=double_elimination.validate_config,
        generate_matches=double_elimination.generate_matches,
        calculate_standings=elimination_standings,
    ),
    Format.SWISS: FormatStrategy(
        format=Format.SWISS,
        name=swiss.NAME,
        description="Players with similar records are paired each round",
        min_players=SWISS_MIN_PLAYERS,
        max_players=SWISS_MAX_PLAYERS,
        multi_stage=False,
        recommended_player_counts=(8, 16, 32, 64),
        default_config=swiss.default_config,
        validate_config=swiss.validate_config,
        generate_matches=swiss.generate_matches,
    ),
    Format.GROUP_STAGE: FormatStrategy(
        format=Format.GROUP_STAGE,
        name=group_stage.NAME,
        description="Groups play round robin, then top players advance to playoffs",
        min_players=GROUP_STAGE_MIN_PLAYERS,
        max_players=GROUP_STAGE_MAX_PLAYERS,
        multi_stage=True,
        recommended_player_counts=(12, 16, 24, 32),
        default_config=group_stage.default_config,
        validate_config=group_stage.validate_config,
        generate_matches=group_stage.generate_matches,
        calculate_standings=group_stage_standings,
    ),
}


def get_strategy(fmt: Format) -> FormatStrategy:
    return STRATEGIES[Format(fmt)]


def format_info(fmt: Format) -> Dict[str, Any]:
    """Display metadata for a format."""
    return get_strategy(fmt).info()
