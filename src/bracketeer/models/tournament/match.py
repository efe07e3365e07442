"""Match data class."""

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
from typing import Any, Dict, List, Optional

from bracketeer.constants import GAMES_PER_MATCH
from bracketeer.models.side import (
    UNDECIDED,
    GameSlot,
    Side,
    side_from_data,
    slot_from_data,
    slot_to_data,
)
from bracketeer.type_hints import BracketTag, StageTag


def empty_games() -> List[GameSlot]:
    return [UNDECIDED] * GAMES_PER_MATCH


@dataclass
class Match:
    """A single best-of-three match.

    Attributes
    ----------
    id : int
        Unique match id within the tournament.
    round : int
        1-based round number within the match's bracket, stage or group.
    player1, player2 : int or None
        Roster positions of the two seats, unset until populated.
    games : list of GameSlot
        Fixed three-slot sequence of game outcomes.
    winner : Side or None
        Seat that has taken two games, unset while undecided.
    bracket : str or None
        "winners", "losers" or "grand-finals" for elimination brackets.
    stage : str or None
        "groups" or "playoffs" for group stage tournaments.
    group : str or None
        Group letter for group stage matches.
    is_placeholder : bool
        True until both seats are populated.
    is_bye : bool
        A single real player advances without playing.
    is_conditional : bool
        Only played when an earlier result requires it (grand final reset).
    is_third_place : bool
        Third-place playoff fed by the semifinal losers.
    feeds_into_win, feeds_into_loss : int or None
        Ids of the matches the winner and loser advance into.
    label : str or None
        Human readable bracket position, e.g. ``"WB-R1-M1"``.
    """

    id: int
    round: int = 1
    player1: Optional[int] = None
    player2: Optional[int] = None
    games: List[GameSlot] = field(default_factory=empty_games)
    winner: Optional[Side] = None
    bracket: Optional[BracketTag] = None
    stage: Optional[StageTag] = None
    group: Optional[str] = None
    is_placeholder: bool = False
    is_bye: bool = False
    is_conditional: bool = False
    is_third_place: bool = False
    feeds_into_win: Optional[int] = None
    feeds_into_loss: Optional[int] = None
    label: Optional[str] = None

    @property
    def has_both_players(self) -> bool:
        return self.player1 is not None and self.player2 is not None

    @property
    def is_decided(self) -> bool:
        return self.winner is not None

    def player_on(self, side: Side) -> Optional[int]:
        """Return the roster index seated on ``side``."""
        return self.player1 if side is Side.SIDE1 else self.player2

    def set_player(self, side: Side, player: Optional[int]) -> None:
        if side is Side.SIDE1:
            self.player1 = player
        else:
            self.player2 = player

    def side_of(self, player: int) -> Optional[Side]:
        if self.player1 == player:
            return Side.SIDE1
        if self.player2 == player:
            return Side.SIDE2
        return None

    def involves(self, player: int) -> bool:
        return self.side_of(player) is not None

    @property
    def winner_index(self) -> Optional[int]:
        if self.winner is None:
            return None
        return self.player_on(self.winner)

    @property
    def loser_index(self) -> Optional[int]:
        """Roster index of the loser; byes have none."""
        if self.winner is None or self.is_bye:
            return None
        return self.player_on(self.winner.opponent)

    def games_won(self, side: Side) -> int:
        return sum(1 for game in self.games if game is side)

    def reset_result(self) -> None:
        """Clear every game slot and the winner."""
        self.games = empty_games()
        self.winner = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round": self.round,
            "player1": self.player1,
            "player2": self.player2,
            "games": [slot_to_data(game) for game in self.games],
            "winner": self.winner.value if self.winner is not None else None,
            "bracket": self.bracket,
            "stage": self.stage,
            "group": self.group,
            "is_placeholder": self.is_placeholder,
            "is_bye": self.is_bye,
            "is_conditional": self.is_conditional,
            "is_third_place": self.is_third_place,
            "feeds_into_win": self.feeds_into_win,
            "feeds_into_loss": self.feeds_into_loss,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        games = [slot_from_data(value) for value in data.get("games", [])]
        if len(games) != GAMES_PER_MATCH:
            raise ValueError(
                f"Match {data.get('id')} must have exactly {GAMES_PER_MATCH} game slots"
            )
        return cls(
            id=int(data["id"]),
            round=int(data.get("round", 1)),
            player1=data.get("player1"),
            player2=data.get("player2"),
            games=games,
            winner=side_from_data(data.get("winner")),
            bracket=data.get("bracket"),
            stage=data.get("stage"),
            group=data.get("group"),
            is_placeholder=bool(data.get("is_placeholder", False)),
            is_bye=bool(data.get("is_bye", False)),
            is_conditional=bool(data.get("is_conditional", False)),
            is_third_place=bool(data.get("is_third_place", False)),
            feeds_into_win=data.get("feeds_into_win"),
            feeds_into_loss=data.get("feeds_into_loss"),
            label=data.get("label"),
        )
