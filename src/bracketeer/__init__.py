"""Bracketeer: multi-format tournament engine."""

from bracketeer.constants import APP_VERSION
from bracketeer.exceptions import (
    BracketeerException,
    ConfigurationError,
    RoutingExhaustion,
    SequenceError,
    SnapshotError,
    StateError,
)
from bracketeer.models import (
    UNDECIDED,
    DoubleEliminationConfig,
    Format,
    GroupStageConfig,
    Match,
    RoundRobinConfig,
    ScoringWeights,
    Side,
    SingleEliminationConfig,
    Standings,
    SwissConfig,
    TournamentState,
)
from bracketeer.tournament import ActionResult, Tournament, format_info

__version__ = APP_VERSION

__all__ = [
    "UNDECIDED",
    "ActionResult",
    "BracketeerException",
    "ConfigurationError",
    "DoubleEliminationConfig",
    "Format",
    "GroupStageConfig",
    "Match",
    "RoundRobinConfig",
    "RoutingExhaustion",
    "ScoringWeights",
    "SequenceError",
    "Side",
    "SingleEliminationConfig",
    "SnapshotError",
    "Standings",
    "StateError",
    "SwissConfig",
    "Tournament",
    "TournamentState",
    "format_info",
]
