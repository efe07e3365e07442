"""Tournament orchestrator.

Owns one TournamentState, dispatches to the active format strategy, runs
bracket advancement after every decided match and serves standings,
progress and visibility on demand.
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

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from bracketeer.exceptions import (
    BracketeerException,
    ConfigurationError,
    RoutingExhaustion,
    SnapshotError,
)
from bracketeer.models.side import Side
from bracketeer.models.tournament import (
    CONFIG_TYPES,
    Format,
    FormatConfig,
    Match,
    ScoringWeights,
    Standings,
    TournamentState,
    config_from_dict,
)
from bracketeer.tournament.bracket_advancer import BracketAdvancer
from bracketeer.tournament.format_registry import get_strategy
from bracketeer.tournament.result_recorder import ResultRecorder, derive_winner
from bracketeer.tournament.round_manager import RoundManager
from bracketeer.utils import setup_logger
from bracketeer.utils.validation import validate_player_names

logger = setup_logger(__name__)


@dataclass
class ActionResult:
    """Outcome of a mutating tournament operation.

    Attributes
    ----------
    success : bool
        Whether the operation was applied.
    error : str or None
        Why it was rejected; nothing was changed in that case.
    matches : list of Match
        Matches touched by the operation.
    """

    success: bool
    error: Optional[str] = None
    matches: List[Match] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def failed(cls, error: Union[str, Exception]) -> "ActionResult":
        return cls(success=False, error=str(error))


class Tournament:
    """A running tournament.

    Create one with :meth:`create` or :meth:`load_snapshot`.  Every mutating
    method returns an :class:`ActionResult`; rejected operations leave the
    state untouched.
    """

    def __init__(
        self, state: TournamentState, weights: Optional[ScoringWeights] = None
    ):
        self.state = state
        self.weights = weights or ScoringWeights()
        self.strategy = get_strategy(state.format)

    # ========== Creation and persistence ==========

    @classmethod
    def create(
        cls,
        players: Sequence[str],
        fmt: Union[Format, str],
        config: Union[FormatConfig, Dict[str, Any], None] = None,
        weights: Optional[ScoringWeights] = None,
        code: Optional[str] = None,
        members: Optional[Sequence[str]] = None,
    ) -> "Tournament":
        """Create a tournament and generate its match skeleton.

        Args:
            players: Display names in roster order
            fmt: Tournament format
            config: Format configuration; the format default when omitted
            weights: Scoring weights for standings
            code: External tournament identifier
            members: Opaque membership identifiers

        Raises:
            ConfigurationError: If names, player count or configuration are
                invalid; nothing is created
        """
        fmt = Format(fmt)
        strategy = get_strategy(fmt)

        names = validate_player_names(
            players, strategy.min_players, strategy.max_players
        )
        if not names:
            raise ConfigurationError(names.error_message)
        player_count = len(names.sanitized_value)

        if config is None:
            config = strategy.default_config(player_count)
        elif isinstance(config, dict):
            try:
                config = config_from_dict(fmt, config)
            except TypeError as e:
                raise ConfigurationError(
                    f"Incomplete {strategy.name} configuration: {e}"
                ) from e
        if not isinstance(config, CONFIG_TYPES[fmt]):
            raise ConfigurationError(
                f"{type(config).__name__} is not a configuration for {strategy.name}"
            )

        result = strategy.validate_config(config, player_count)
        if not result:
            raise ConfigurationError(result.error_message)

        try:
            matches = strategy.generate_matches(
                names.sanitized_value, config, random.Random(config.seed)
            )
        except RoutingExhaustion as e:
            raise ConfigurationError(str(e)) from e

        state = TournamentState(
            format=fmt,
            players=names.sanitized_value,
            config=config,
            matches=matches,
            members=list(members or []),
            code=code,
        )
        BracketAdvancer(state.matches).settle()
        logger.info(
            f"Created {strategy.name} tournament with {player_count} players "
            f"and {len(matches)} matches"
        )
        return cls(state, weights)

    @classmethod
    def load_snapshot(
        cls, data: Dict[str, Any], weights: Optional[ScoringWeights] = None
    ) -> "Tournament":
        """Rebuild a tournament from an authoritative snapshot.

        Derived bracket state is recomputed rather than trusted.

        Raises:
            SnapshotError: If the snapshot is malformed or inconsistent
        """
        try:
            state = TournamentState.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"Rejected tournament snapshot: {e}")
            raise SnapshotError(f"Malformed snapshot: {e}") from e

        problems = check_state(state)
        if problems:
            logger.error(f"Rejected tournament snapshot: {problems[0]}")
            raise SnapshotError("; ".join(problems))

        BracketAdvancer(state.matches).settle()
        logger.info(f"Loaded tournament snapshot with {len(state.matches)} matches")
        return cls(state, weights)

    def snapshot(self) -> Dict[str, Any]:
        return self.state.to_dict()

    def apply_match_delta(self, data: Dict[str, Any]) -> ActionResult:
        """Replace one match record with an authoritative copy from the backend."""
        try:
            incoming = Match.from_dict(data)
            current = self.state.get_match(incoming.id)
        except (KeyError, ValueError, TypeError, BracketeerException) as e:
            logger.warning(f"Rejected match delta: {e}")
            return ActionResult.failed(e)

        matches = [
            incoming if match is current else match for match in self.state.matches
        ]
        candidate = TournamentState(
            format=self.state.format,
            players=self.state.players,
            config=self.state.config,
            matches=matches,
        )
        problems = check_state(candidate)
        if problems:
            logger.warning(f"Rejected match delta: {problems[0]}")
            return ActionResult.failed(problems[0])

        if current.winner is not None and current.winner is not incoming.winner:
            BracketAdvancer(self.state.matches).retract(current)
        self.state.matches = matches
        BracketAdvancer(self.state.matches).settle()
        logger.debug(f"Applied delta for match {incoming.id}")
        return ActionResult(success=True, matches=[incoming])

    # ========== Mutation ==========

    def record_game(
        self, match_id: int, slot: int, side: Union[Side, int]
    ) -> ActionResult:
        """Record (or toggle off) a game result.

        Args:
            match_id: Match id
            slot: Zero-based game slot (0, 1 or 2)
            side: Winning side of that game
        """
        try:
            match = ResultRecorder(self.state).record_game(match_id, slot, Side(side))
        except (BracketeerException, ValueError) as e:
            logger.warning(f"Rejected result for match {match_id}: {e}")
            return ActionResult.failed(e)
        return ActionResult(success=True, matches=[match])

    def next_swiss_round(self) -> ActionResult:
        try:
            matches = self.round_manager.next_swiss_round()
        except BracketeerException as e:
            logger.warning(f"Could not pair next Swiss round: {e}")
            return ActionResult.failed(e)
        return ActionResult(success=True, matches=matches)

    def advance_to_playoffs(self) -> ActionResult:
        try:
            matches = self.round_manager.advance_to_playoffs()
        except BracketeerException as e:
            logger.warning(f"Could not advance to playoffs: {e}")
            return ActionResult.failed(e)
        return ActionResult(success=True, matches=matches)

    # ========== Queries ==========

    @property
    def round_manager(self) -> RoundManager:
        return RoundManager(self.state, self.weights)

    @property
    def players(self) -> List[str]:
        return list(self.state.players)

    def get_match(self, match_id: int) -> Match:
        return self.state.get_match(match_id)

    def standings(self) -> Standings:
        return self.strategy.calculate_standings(
            self.state.matches,
            self.state.player_count,
            self.weights,
            self.state.config,
        )

    def group_standings(self) -> Dict[str, Standings]:
        return self.round_manager.group_standings()

    def progress(self) -> Dict[str, Any]:
        """Completed and total playable matches, with a rounded percentage."""
        advancer = BracketAdvancer(self.state.matches)
        playable = [
            match for match in self.state.matches if advancer.is_playable(match)
        ]
        completed = sum(1 for match in playable if match.is_decided)
        total = len(playable)
        percentage = round(completed * 100 / total) if total else 0
        return {"completed": completed, "total": total, "percentage": percentage}

    def is_visible(
        self, match: Match, advancer: Optional[BracketAdvancer] = None
    ) -> bool:
        advancer = advancer or BracketAdvancer(self.state.matches)
        if advancer.is_void(match):
            return False
        if match.is_placeholder and not match.has_both_players:
            return False
        if self.state.format is Format.SWISS:
            open_round = self.round_manager.first_open_swiss_round()
            if open_round is not None and match.round > open_round:
                return False
        return True

    def visible_matches(self) -> List[Dict[str, Any]]:
        """Every match as plain data, annotated with a ``visible`` flag."""
        advancer = BracketAdvancer(self.state.matches)
        return [
            dict(match.to_dict(), visible=self.is_visible(match, advancer))
            for match in self.state.matches
        ]

    def player_schedule(self, player: int) -> List[Match]:
        """Visible matches involving ``player``, in match order."""
        advancer = BracketAdvancer(self.state.matches)
        return [
            match
            for match in self.state.matches
            if match.involves(player) and self.is_visible(match, advancer)
        ]

    def current_swiss_round(self) -> int:
        return self.round_manager.current_swiss_round()

    def is_swiss_round_complete(self) -> bool:
        return self.round_manager.is_swiss_round_complete()

    def is_stage_complete(self) -> bool:
        return self.round_manager.is_stage_complete()

    def can_advance_stage(self) -> bool:
        return self.round_manager.can_advance_stage()

    @property
    def current_stage(self) -> Optional[str]:
        if self.state.format is Format.GROUP_STAGE:
            return self.state.config.current_stage
        return None

    def is_complete(self) -> bool:
        """Whether every playable match, future rounds included, is decided."""
        progress = self.progress()
        return progress["total"] > 0 and progress["completed"] == progress["total"]


def check_state(state: TournamentState) -> List[str]:
    """Validate match invariants and bracket links of a state."""
    problems = []
    for match in state.matches:
        for player in (match.player1, match.player2):
            if player is not None and not 0 <= player < state.player_count:
                problems.append(f"Match {match.id} seats unknown player {player}")
        if not match.is_placeholder and match.player1 is None:
            problems.append(f"Match {match.id} is playable but has no player1")
        if not match.is_placeholder and not match.is_bye and match.player2 is None:
            problems.append(f"Match {match.id} is playable but has no player2")
        if match.is_bye:
            continue
        winner, _ = derive_winner(match.games)
        if winner is not match.winner:
            problems.append(f"Match {match.id} winner does not match its games")

    ids = [match.id for match in state.matches]
    if len(ids) != len(set(ids)):
        problems.append("Duplicate match ids")
        return problems

    problems.extend(BracketAdvancer(state.matches).validate_structure())
    return problems
