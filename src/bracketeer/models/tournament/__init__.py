"""Tournament data models."""

from bracketeer.models.tournament.format_config import (
    CONFIG_TYPES,
    DoubleEliminationConfig,
    Format,
    FormatConfig,
    GroupStageConfig,
    RoundRobinConfig,
    ScoringWeights,
    SingleEliminationConfig,
    SwissConfig,
    config_from_dict,
)
from bracketeer.models.tournament.match import Match
from bracketeer.models.tournament.pairing_history import PairingHistory
from bracketeer.models.tournament.standings import PlayerStats, Standings
from bracketeer.models.tournament.tournament_state import TournamentState

__all__ = [
    "CONFIG_TYPES",
    "DoubleEliminationConfig",
    "Format",
    "FormatConfig",
    "GroupStageConfig",
    "Match",
    "PairingHistory",
    "PlayerStats",
    "RoundRobinConfig",
    "ScoringWeights",
    "SingleEliminationConfig",
    "Standings",
    "SwissConfig",
    "TournamentState",
    "config_from_dict",
]
