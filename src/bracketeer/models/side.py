"""Result designators for game slots and matches."""

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

from enum import Enum
from typing import Optional, Union


class Side(Enum):
    """One of the two seats in a match."""

    SIDE1 = 1
    SIDE2 = 2

    @property
    def opponent(self) -> "Side":
        return Side.SIDE2 if self is Side.SIDE1 else Side.SIDE1


class Undecided(Enum):
    """The single "no result yet" value a game slot can hold."""

    UNDECIDED = "undecided"


UNDECIDED = Undecided.UNDECIDED

# A game slot holds either a side designator or UNDECIDED
GameSlot = Union[Side, Undecided]


def slot_to_data(slot: GameSlot) -> Optional[int]:
    """Serialize a game slot (``None`` for undecided, otherwise 1 or 2)."""
    if slot is UNDECIDED:
        return None
    return slot.value


def slot_from_data(value: Optional[int]) -> GameSlot:
    """Deserialize a game slot written by :func:`slot_to_data`."""
    if value is None:
        return UNDECIDED
    return Side(int(value))


def side_from_data(value: Optional[int]) -> Optional[Side]:
    """Deserialize an optional match winner."""
    if value is None:
        return None
    return Side(int(value))
