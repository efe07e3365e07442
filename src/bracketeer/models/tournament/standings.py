"""Derived per-player statistics and ranked standings."""

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

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, List, Optional, Set


@dataclass
class PlayerStats:
    """Statistics for one player, derived from the current match state.

    Attributes
    ----------
    player : int
        Roster position.
    wins, losses : int
        Match wins (byes included) and match losses.
    byes : int
        Byes received, counted inside ``wins``.
    games_won, games_lost : int
        Individual games across all decided matches.
    points : float
        Weighted point total.
    quality_score : float
        Sum of the point totals of every opponent beaten.
    rank : int
        1-based rank; tied players share a rank.
    tied : bool
        True when another player holds the same rank.
    beaten, lost_to : set of int
        Opponents this player has beaten or lost to.
    head_to_head : dict of int to int
        Match wins against each opponent.
    round_eliminated : int or None
        Round of the loss that knocked the player out (knockout formats).
    final_position : int or None
        Finishing place in knockout formats: 1 for the champion, otherwise
        one more than the number of players who went out later (so the
        quarterfinal losers of eight share 5th). None while still in play.
    tiebreakers : dict of str to Any
        Values used by the ranking cascade, keyed by tiebreak constant.
    """

    player: int
    wins: int = 0
    losses: int = 0
    byes: int = 0
    games_won: int = 0
    games_lost: int = 0
    points: float = 0.0
    quality_score: float = 0.0
    rank: int = 0
    tied: bool = False
    beaten: Set[int] = field(default_factory=set)
    lost_to: Set[int] = field(default_factory=set)
    head_to_head: Dict[int, int] = field(default_factory=dict)
    round_eliminated: Optional[int] = None
    final_position: Optional[int] = None
    tiebreakers: Dict[str, Any] = field(default_factory=dict)

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses

    @property
    def game_differential(self) -> int:
        return self.games_won - self.games_lost

    @property
    def win_percentage(self) -> Fraction:
        """Exact win ratio; zero when nothing has been played."""
        if self.matches_played == 0:
            return Fraction(0)
        return Fraction(self.wins, self.matches_played)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player,
            "rank": self.rank,
            "tied": self.tied,
            "wins": self.wins,
            "losses": self.losses,
            "byes": self.byes,
            "games_won": self.games_won,
            "games_lost": self.games_lost,
            "points": self.points,
            "quality_score": self.quality_score,
            "win_percentage": float(self.win_percentage),
            "beaten": sorted(self.beaten),
            "lost_to": sorted(self.lost_to),
            "round_eliminated": self.round_eliminated,
            "final_position": self.final_position,
        }


@dataclass
class Standings:
    """Ranked standings plus the set of ranks shared by several players.

    Attributes
    ----------
    entries : list of PlayerStats
        Players in ranked order.
    tied_ranks : set of int
        Rank values held by more than one player.
    """

    entries: List[PlayerStats] = field(default_factory=list)
    tied_ranks: Set[int] = field(default_factory=set)

    def for_player(self, player: int) -> PlayerStats:
        for entry in self.entries:
            if entry.player == player:
                return entry
        raise KeyError(player)

    def at_rank(self, rank: int) -> List[PlayerStats]:
        return [entry for entry in self.entries if entry.rank == rank]

    def ranked_players(self) -> List[int]:
        return [entry.player for entry in self.entries]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "tied_ranks": sorted(self.tied_ranks),
        }
