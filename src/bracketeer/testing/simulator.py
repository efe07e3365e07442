"""Random Tournament Simulator.

Creates tournaments of any format, plays every match to completion with
randomly generated game results and checks the structural invariants of
the outcome.
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

import json
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from bracketeer.models.side import Side
from bracketeer.models.tournament import Format, Match, config_from_dict
from bracketeer.tournament import Tournament, check_state, get_strategy
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


class ResultPattern(Enum):
    """Result generation patterns for simulated matches."""

    RANDOM = "random"
    FAVOURITES = "favourites"
    SWEEPS = "sweeps"


@dataclass
class SimulationConfig:
    """Configuration for the tournament simulator."""

    format: Format
    num_players: int
    config: Optional[Dict[str, Any]] = None
    result_pattern: ResultPattern = ResultPattern.RANDOM
    seed: Optional[int] = None
    max_steps: int = 10000


@dataclass
class SimulationReport:
    """Summary of one simulated tournament."""

    format: Format
    num_players: int
    matches_played: int = 0
    stages_advanced: int = 0
    champions: List[str] = field(default_factory=list)
    violations: List[str] = field(default_factory=list)
    elapsed: float = 0.0
    snapshot: Dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return not self.violations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.format.value,
            "num_players": self.num_players,
            "matches_played": self.matches_played,
            "stages_advanced": self.stages_advanced,
            "champions": self.champions,
            "violations": self.violations,
            "elapsed": self.elapsed,
            "snapshot": self.snapshot,
        }


class ResultSimulator:
    """Simulates game results for matches."""

    def __init__(self, pattern: ResultPattern, rng: random.Random):
        self.pattern = pattern
        self.random = rng

    def match_winner(self, match: Match) -> Side:
        if self.pattern == ResultPattern.FAVOURITES:
            # Lower roster index plays the favourite 75% of the time
            favourite = Side.SIDE1 if match.player1 < match.player2 else Side.SIDE2
            return favourite if self.random.random() < 0.75 else favourite.opponent
        return self.random.choice([Side.SIDE1, Side.SIDE2])

    def games(self, match: Match) -> List[Side]:
        """Game-by-game results ending as soon as one side has two wins."""
        winner = self.match_winner(match)
        if self.pattern == ResultPattern.SWEEPS or self.random.random() < 0.5:
            return [winner, winner]
        games = [winner, winner.opponent]
        self.random.shuffle(games)
        return games + [winner]


class TournamentSimulator:
    """Plays a tournament from creation to completion."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.results = ResultSimulator(config.result_pattern, self.random)

    def create_players(self) -> List[str]:
        return [f"Player-{i:03d}" for i in range(1, self.config.num_players + 1)]

    def create_tournament(self) -> Tournament:
        if self.config.config:
            settings = config_from_dict(self.config.format, self.config.config)
        else:
            settings = get_strategy(self.config.format).default_config(
                self.config.num_players
            )
        if settings.seed is None:
            settings.seed = self.random.randrange(2**31)
        return Tournament.create(self.create_players(), self.config.format, settings)

    def run(self) -> SimulationReport:
        start = time.perf_counter()
        tournament = self.create_tournament()
        report = SimulationReport(
            format=self.config.format, num_players=self.config.num_players
        )

        for _ in range(self.config.max_steps):
            pending = self._pending_matches(tournament)
            if pending:
                self.play_match(tournament, pending[0])
                report.matches_played += 1
                continue
            if tournament.can_advance_stage():
                if self.config.format is Format.SWISS:
                    result = tournament.next_swiss_round()
                else:
                    result = tournament.advance_to_playoffs()
                if not result:
                    report.violations.append(f"Stage advance failed: {result.error}")
                    break
                report.stages_advanced += 1
                continue
            break
        else:
            report.violations.append(
                f"Simulation did not finish within {self.config.max_steps} steps"
            )

        standings = tournament.standings()
        report.champions = [
            tournament.players[entry.player] for entry in standings.at_rank(1)
        ]
        report.violations.extend(check_invariants(tournament))
        report.snapshot = tournament.snapshot()
        report.elapsed = time.perf_counter() - start
        logger.info(
            f"Simulated {self.config.format.value} with {self.config.num_players} "
            f"players: {report.matches_played} matches, "
            f"{len(report.violations)} violations"
        )
        return report

    def _pending_matches(self, tournament: Tournament) -> List[Match]:
        return [
            tournament.get_match(item["id"])
            for item in tournament.visible_matches()
            if item["visible"]
            and item["winner"] is None
            and not item["is_bye"]
            and item["player2"] is not None
        ]

    def play_match(self, tournament: Tournament, match: Match) -> None:
        for slot, side in enumerate(self.results.games(match)):
            result = tournament.record_game(match.id, slot, side)
            if not result:
                raise RuntimeError(f"Simulator write rejected: {result.error}")

    def export_json(self, report: SimulationReport) -> str:
        return json.dumps(report.to_dict(), indent=2)


def check_invariants(tournament: Tournament) -> List[str]:
    """Structural checks that must hold for any finished tournament."""
    violations = list(check_state(tournament.state))
    standings = tournament.standings()

    for entry in standings.entries:
        if (entry.points * 2) != int(entry.points * 2):
            violations.append(f"Player {entry.player} has points {entry.points}")
        if (entry.quality_score * 2) != int(entry.quality_score * 2):
            violations.append(
                f"Player {entry.player} has quality score {entry.quality_score}"
            )

    fmt = tournament.state.format
    if fmt is Format.ROUND_ROBIN:
        expected = tournament.state.config.matches_per_player
        for entry in standings.entries:
            if entry.matches_played != expected:
                violations.append(
                    f"Player {entry.player} played {entry.matches_played} of {expected}"
                )
    elif fmt is Format.SINGLE_ELIMINATION:
        unbeaten = [entry for entry in standings.entries if entry.losses == 0]
        if len(unbeaten) != 1:
            violations.append(f"{len(unbeaten)} unbeaten players in single elimination")
    elif fmt is Format.DOUBLE_ELIMINATION:
        survivors = [entry for entry in standings.entries if entry.losses < 2]
        # Without a reset the winners bracket champion can fall in one loss
        allowed = (1,) if tournament.state.config.grand_final_reset else (1, 2)
        if len(survivors) not in allowed:
            violations.append(
                f"{len(survivors)} players finished double elimination "
                "with fewer than 2 losses"
            )

    if not tournament.is_complete():
        violations.append("Tournament finished with undecided matches")
    return violations
