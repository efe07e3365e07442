"""Tournament management system for Bracketeer.

This package ties the format strategies, bracket advancement, standings and
game recording together behind the Tournament orchestrator.
"""

from bracketeer.tournament.bracket_advancer import BracketAdvancer
from bracketeer.tournament.format_registry import (
    STRATEGIES,
    FormatStrategy,
    format_info,
    get_strategy,
)
from bracketeer.tournament.result_recorder import ResultRecorder, apply_game_result
from bracketeer.tournament.round_manager import RoundManager
from bracketeer.tournament.tiebreak_calculator import (
    TiebreakCalculator,
    calculate_standings,
    elimination_standings,
    group_stage_standings,
)
from bracketeer.tournament.tournament import ActionResult, Tournament, check_state

__all__ = [
    "ActionResult",
    "BracketAdvancer",
    "FormatStrategy",
    "ResultRecorder",
    "RoundManager",
    "STRATEGIES",
    "TiebreakCalculator",
    "Tournament",
    "apply_game_result",
    "calculate_standings",
    "check_state",
    "elimination_standings",
    "format_info",
    "get_strategy",
    "group_stage_standings",
]
