"""Round and stage management.

Handles on-demand Swiss round generation and the group stage to playoffs
transition.
"""

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

from typing import Dict, List, Optional

from bracketeer.constants import GROUP_NAMES, STAGE_GROUPS, STAGE_PLAYOFFS
from bracketeer.exceptions import StateError
from bracketeer.formats.group_stage import playoff_pairs
from bracketeer.models.side import Side
from bracketeer.models.tournament import (
    Format,
    Match,
    PairingHistory,
    ScoringWeights,
    Standings,
    TournamentState,
)
from bracketeer.pairing.swiss import pair_round
from bracketeer.tournament.bracket_advancer import BracketAdvancer
from bracketeer.tournament.tiebreak_calculator import TiebreakCalculator
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression for staged formats.

    Responsibilities:
    - Tracking the current Swiss round and whether it is complete
    - Pairing the next Swiss round from the current standings
    - Tracking group stage completion and seeding the playoffs
    """

    def __init__(
        self, state: TournamentState, weights: Optional[ScoringWeights] = None
    ):
        self.state = state
        self.tiebreak_calculator = TiebreakCalculator(weights)

    # ========== Swiss ==========

    def swiss_round_matches(self, round_number: int) -> List[Match]:
        return [match for match in self.state.matches if match.round == round_number]

    @property
    def total_swiss_rounds(self) -> int:
        return max((match.round for match in self.state.matches), default=0)

    def current_swiss_round(self) -> int:
        """Highest round that has been paired (0 if none)."""
        paired = [
            match.round for match in self.state.matches if not match.is_placeholder
        ]
        return max(paired, default=0)

    def first_open_swiss_round(self) -> Optional[int]:
        """Earliest round with an undecided match (None once all are decided)."""
        return min(
            (match.round for match in self.state.matches if not match.is_decided),
            default=None,
        )

    def is_swiss_round_complete(self, round_number: Optional[int] = None) -> bool:
        if round_number is None:
            round_number = self.current_swiss_round()
        matches = [
            match
            for match in self.swiss_round_matches(round_number)
            if not match.is_placeholder
        ]
        return bool(matches) and all(match.is_decided for match in matches)

    def next_swiss_round(self, allow_rematches: Optional[bool] = None) -> List[Match]:
        """Pair the next Swiss round.

        Returns:
            The newly populated matches

        Raises:
            StateError: If the tournament is not Swiss, the current round is
                unfinished, or every round has been paired
            RoutingExhaustion: If no acceptable pairing exists; nothing changes
        """
        if self.state.format is not Format.SWISS:
            raise StateError("Only Swiss tournaments generate rounds on demand")

        current = self.current_swiss_round()
        if not self.is_swiss_round_complete(current):
            raise StateError(f"Round {current} is not complete yet")

        upcoming = sorted(self.swiss_round_matches(current + 1), key=lambda m: m.id)
        if not upcoming:
            raise StateError(f"All {current} rounds have already been paired")

        if allow_rematches is None:
            allow_rematches = self.state.config.allow_rematches

        standings = self.tiebreak_calculator.calculate_standings(
            self.state.matches, range(self.state.player_count)
        )
        tiers = {entry.player: entry.wins for entry in standings.entries}
        pairs, bye = pair_round(
            standings.ranked_players(),
            tiers,
            PairingHistory.from_matches(self.state.matches),
            allow_rematches=allow_rematches,
        )

        regular = [match for match in upcoming if not match.is_bye]
        bye_slots = [match for match in upcoming if match.is_bye]
        if len(regular) != len(pairs) or len(bye_slots) != int(bye is not None):
            raise StateError(f"Round {current + 1} placeholders do not fit the pairing")

        for match, (player1, player2) in zip(regular, pairs):
            match.player1 = player1
            match.player2 = player2
            match.is_placeholder = False
        for match in bye_slots:
            match.player1 = bye
            match.winner = Side.SIDE1
            match.is_placeholder = False

        logger.info(
            f"Paired Swiss round {current + 1}: {len(pairs)} matches"
            + (f", bye for player {bye}" if bye is not None else "")
        )
        return upcoming

    # ========== Group stage ==========

    def group_matches(self, group: Optional[str] = None) -> List[Match]:
        return [
            match
            for match in self.state.matches
            if match.stage == STAGE_GROUPS and (group is None or match.group == group)
        ]

    def playoff_matches(self) -> List[Match]:
        return [match for match in self.state.matches if match.stage == STAGE_PLAYOFFS]

    def groups(self) -> Dict[str, List[int]]:
        """Group letter to member roster indices, in roster order."""
        members: Dict[str, set] = {}
        for match in self.group_matches():
            members.setdefault(match.group, set()).update(
                (match.player1, match.player2)
            )
        return {
            group: sorted(members[group])
            for group in GROUP_NAMES
            if group in members
        }

    def group_standings(self) -> Dict[str, Standings]:
        return {
            group: self.tiebreak_calculator.calculate_standings(
                self.group_matches(group), players
            )
            for group, players in self.groups().items()
        }

    def is_group_stage_complete(self) -> bool:
        matches = self.group_matches()
        return bool(matches) and all(match.is_decided for match in matches)

    def advance_to_playoffs(self) -> List[Match]:
        """Seed the playoff bracket from the final group standings.

        Returns:
            The populated round 1 playoff matches

        Raises:
            StateError: If the format has no playoffs, the playoffs are
                already seeded, or a group match is undecided
        """
        if self.state.format is not Format.GROUP_STAGE:
            raise StateError("Only group stage tournaments have playoffs")
        config = self.state.config
        if config.current_stage != STAGE_GROUPS:
            raise StateError("Playoffs have already been seeded")

        pending = [match for match in self.group_matches() if not match.is_decided]
        if pending:
            raise StateError(
                f"{len(pending)} group matches must be completed before the playoffs"
            )

        qualifiers = [
            [entry.player for entry in standings.entries[: config.advancing_per_group]]
            for standings in self.group_standings().values()
        ]
        pairs = playoff_pairs(qualifiers)

        first_round = sorted(
            (match for match in self.playoff_matches() if match.round == 1),
            key=lambda match: match.id,
        )
        if len(first_round) != len(pairs):
            raise StateError("Playoff bracket does not match the number of qualifiers")

        for match, (player1, player2) in zip(first_round, pairs):
            match.player1 = player1
            match.player2 = player2
            match.is_placeholder = False
        config.current_stage = STAGE_PLAYOFFS

        logger.info(
            f"Advanced to playoffs: {sum(len(q) for q in qualifiers)} qualifiers "
            f"from {len(qualifiers)} groups"
        )
        return first_round

    # ========== Stage tracking ==========

    def is_stage_complete(self) -> bool:
        """Whether every playable match of the current stage is decided."""
        if self.state.format is Format.GROUP_STAGE:
            if self.state.config.current_stage == STAGE_GROUPS:
                return self.is_group_stage_complete()
            matches = self.playoff_matches()
        elif self.state.format is Format.SWISS:
            return self.is_swiss_round_complete()
        else:
            matches = self.state.matches

        advancer = BracketAdvancer(self.state.matches)
        playable = [match for match in matches if advancer.is_playable(match)]
        return all(match.is_decided for match in playable)

    def can_advance_stage(self) -> bool:
        if self.state.format is Format.GROUP_STAGE:
            return (
                self.state.config.current_stage == STAGE_GROUPS
                and self.is_group_stage_complete()
            )
        if self.state.format is Format.SWISS:
            return (
                self.is_swiss_round_complete()
                and self.current_swiss_round() < self.total_swiss_rounds
            )
        return False
