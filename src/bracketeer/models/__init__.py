"""Data models for Bracketeer."""

from bracketeer.models.side import UNDECIDED, GameSlot, Side, Undecided
from bracketeer.models.tournament import (
    DoubleEliminationConfig,
    Format,
    FormatConfig,
    GroupStageConfig,
    Match,
    PairingHistory,
    PlayerStats,
    RoundRobinConfig,
    ScoringWeights,
    SingleEliminationConfig,
    Standings,
    SwissConfig,
    TournamentState,
)

__all__ = [
    "UNDECIDED",
    "DoubleEliminationConfig",
    "Format",
    "FormatConfig",
    "GameSlot",
    "GroupStageConfig",
    "Match",
    "PairingHistory",
    "PlayerStats",
    "RoundRobinConfig",
    "ScoringWeights",
    "Side",
    "SingleEliminationConfig",
    "Standings",
    "SwissConfig",
    "TournamentState",
    "Undecided",
]
