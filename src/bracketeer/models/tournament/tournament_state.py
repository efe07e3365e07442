"""Explicit tournament state threaded through every operation."""

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

from bracketeer.exceptions import MatchNotFoundException
from bracketeer.models.tournament.format_config import (
    Format,
    FormatConfig,
    config_from_dict,
)
from bracketeer.models.tournament.match import Match


@dataclass
class TournamentState:
    """Everything a tournament consists of, as plain in-memory data.

    Attributes
    ----------
    format : Format
        Active tournament format.
    players : list of str
        Display names in roster order; players are identified by position.
    config : FormatConfig
        Format-specific configuration.
    matches : list of Match
        Every match, ordered by id.
    members : list of str
        Opaque membership identifiers supplied by the sync backend.
    code : str or None
        External tournament identifier, generated outside the core.
    """

    format: Format
    players: List[str]
    config: FormatConfig
    matches: List[Match] = field(default_factory=list)
    members: List[str] = field(default_factory=list)
    code: Optional[str] = None

    @property
    def player_count(self) -> int:
        return len(self.players)

    def get_match(self, match_id: int) -> Match:
        """Look up a match by id.

        Raises:
            MatchNotFoundException: If no match has that id
        """
        for match in self.matches:
            if match.id == match_id:
                return match
        raise MatchNotFoundException(match_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to a plain snapshot dictionary."""
        return {
            "format": self.format.value,
            "players": list(self.players),
            "player_count": self.player_count,
            "config": self.config.to_dict(),
            "matches": [match.to_dict() for match in self.matches],
            "members": list(self.members),
            "code": self.code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        """Deserialize state from a snapshot dictionary."""
        fmt = Format(data["format"])
        players = [str(name) for name in data["players"]]
        if "player_count" in data and int(data["player_count"]) != len(players):
            raise ValueError(
                f"player_count {data['player_count']} does not match "
                f"{len(players)} player names"
            )
        matches = sorted(
            (Match.from_dict(item) for item in data.get("matches", [])),
            key=lambda match: match.id,
        )
        return cls(
            format=fmt,
            players=players,
            config=config_from_dict(fmt, data.get("config", {})),
            matches=matches,
            members=list(data.get("members", [])),
            code=data.get("code"),
        )
