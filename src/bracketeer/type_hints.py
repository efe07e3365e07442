"""Type hints used in Bracketeer."""

from typing import List, Literal, Optional, Tuple

BracketTag = Literal["winners", "losers", "grand-finals"]
StageTag = Literal["groups", "playoffs"]
SeedingMethod = Literal["random", "seeded"]

# Which downstream path a player takes out of a match
FeedKind = Literal["win", "loss"]

# Zero-based position in the roster
PlayerIndex = int
MaybePlayer = Optional[PlayerIndex]
# Tuple of player indices
MatchPairing = Tuple[PlayerIndex, PlayerIndex]
# All pairings for one round, plus the bye recipient
RoundPairings = Tuple[List[MatchPairing], MaybePlayer]
