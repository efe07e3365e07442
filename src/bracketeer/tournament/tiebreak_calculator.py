"""Standings calculation for all tournament formats."""

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

import functools
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from bracketeer.constants import (
    BRACKET_GRAND_FINALS,
    BRACKET_LOSERS,
    BRACKET_WINNERS,
    DEFAULT_TIEBREAK_ORDER,
    STAGE_GROUPS,
    STAGE_PLAYOFFS,
    TB_GAME_DIFFERENTIAL,
    TB_GAMES_WON,
    TB_QUALITY,
    TB_WIN_PERCENTAGE,
)
from bracketeer.models.side import Side
from bracketeer.models.tournament import (
    FormatConfig,
    Match,
    PlayerStats,
    ScoringWeights,
    Standings,
)
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

BRACKET_ORDER = {BRACKET_WINNERS: 0, BRACKET_LOSERS: 1, BRACKET_GRAND_FINALS: 2}


class TiebreakCalculator:
    """Derives player statistics and the ranked standings.

    Everything is recomputed from the match list on every call. Ranking
    order, descending:

    - Points (match wins, game wins and game losses, weighted)
    - Head-to-head, if the two players met directly
    - Quality score: sum of the point totals of every opponent beaten
    - Win percentage
    - Game differential
    - Total games won

    Players still level after all of these share a rank.
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        tiebreak_order: Optional[Sequence[str]] = None,
    ):
        self.weights = weights or ScoringWeights()
        self.tiebreak_order = list(tiebreak_order or DEFAULT_TIEBREAK_ORDER)

    def calculate_stats(
        self, matches: Iterable[Match], players: Iterable[int]
    ) -> Dict[int, PlayerStats]:
        """Tally every decided match involving ``players``.

        Args:
            matches: Matches to consider; undecided ones are ignored
            players: Roster indices to produce statistics for

        Returns:
            Mapping of roster index to statistics
        """
        stats = {player: PlayerStats(player=player) for player in players}

        for match in matches:
            if match.winner is None:
                continue
            if match.is_bye:
                if match.player1 in stats:
                    stats[match.player1].wins += 1
                    stats[match.player1].byes += 1
                continue
            if match.player1 not in stats or match.player2 not in stats:
                continue
            self._tally_match(match, stats)

        for entry in stats.values():
            entry.points = (
                entry.wins * self.weights.match_win
                + entry.games_won * self.weights.game_win
                + entry.games_lost * self.weights.game_loss
            )

        for entry in stats.values():
            # Plain sum; any scaling would break half-point granularity.
            entry.quality_score = sum(
                stats[opponent].points for opponent in entry.beaten
            )
            entry.tiebreakers = {
                TB_QUALITY: entry.quality_score,
                TB_WIN_PERCENTAGE: entry.win_percentage,
                TB_GAME_DIFFERENTIAL: entry.game_differential,
                TB_GAMES_WON: entry.games_won,
            }

        return stats

    def _tally_match(self, match: Match, stats: Dict[int, PlayerStats]) -> None:
        p1 = stats[match.player1]
        p2 = stats[match.player2]

        for game in match.games:
            if game is Side.SIDE1:
                p1.games_won += 1
                p2.games_lost += 1
            elif game is Side.SIDE2:
                p2.games_won += 1
                p1.games_lost += 1

        winner, loser = (p1, p2) if match.winner is Side.SIDE1 else (p2, p1)
        winner.wins += 1
        loser.losses += 1
        winner.beaten.add(loser.player)
        loser.lost_to.add(winner.player)
        winner.head_to_head[loser.player] = winner.head_to_head.get(loser.player, 0) + 1

    def calculate_head_to_head(self, p1: PlayerStats, p2: PlayerStats) -> int:
        """Return 1 if ``p1`` won more direct meetings, -1 if ``p2`` did, else 0."""
        p1_wins = p1.head_to_head.get(p2.player, 0)
        p2_wins = p2.head_to_head.get(p1.player, 0)
        if p1_wins == p2_wins:
            return 0
        return 1 if p1_wins > p2_wins else -1

    def compare_players(self, p1: PlayerStats, p2: PlayerStats) -> int:
        """Compare two players for standings order.

        Returns:
            1 if p1 ranks higher, -1 if p2 ranks higher, 0 if equal
        """
        if p1.points != p2.points:
            return 1 if p1.points > p2.points else -1

        head_to_head = self.calculate_head_to_head(p1, p2)
        if head_to_head:
            return head_to_head

        for tb_key in self.tiebreak_order:
            tb1 = p1.tiebreakers.get(tb_key, 0)
            tb2 = p2.tiebreakers.get(tb_key, 0)
            if tb1 != tb2:
                return 1 if tb1 > tb2 else -1

        return 0

    def rank(self, stats: Iterable[PlayerStats]) -> Standings:
        """Sort statistics into standings and assign shared ranks."""
        ordered: List[PlayerStats] = sorted(
            sorted(stats, key=lambda entry: entry.player),
            key=functools.cmp_to_key(self.compare_players),
            reverse=True,
        )

        counts: Dict[int, int] = {}
        for position, entry in enumerate(ordered):
            if position and self.compare_players(ordered[position - 1], entry) == 0:
                entry.rank = ordered[position - 1].rank
            else:
                entry.rank = position + 1
            counts[entry.rank] = counts.get(entry.rank, 0) + 1

        tied_ranks = {rank for rank, count in counts.items() if count > 1}
        for entry in ordered:
            entry.tied = entry.rank in tied_ranks

        return Standings(entries=ordered, tied_ranks=tied_ranks)

    def calculate_standings(
        self,
        matches: Iterable[Match],
        players: Iterable[int],
        placements: bool = False,
    ) -> Standings:
        matches = list(matches)
        stats = self.calculate_stats(matches, players)
        if placements:
            self.assign_placements(stats, matches)
        standings = self.rank(stats.values())
        logger.debug(
            f"Ranked {len(standings.entries)} players over {len(matches)} matches"
        )
        return standings

    # ========== Knockout placements ==========

    def assign_placements(
        self, stats: Dict[int, PlayerStats], matches: Sequence[Match]
    ) -> None:
        """Fill ``round_eliminated`` and ``final_position`` for a knockout.

        A loss eliminates a player unless it seats them in a later match;
        reaching the third place match still counts as going out in the
        semifinal.  Players go out in bracket order (winners, losers, grand
        finals) and then by round.  A decided third place match splits its
        two players, and the player who wins a match without moving on is
        the champion.
        """
        by_id = {match.id: match for match in matches}
        exits: Dict[int, Tuple[int, int]] = {}
        third_place: Optional[Match] = None

        for match in sorted(matches, key=lambda match: match.id):
            if match.winner is None or match.is_bye:
                continue
            if match.is_third_place:
                third_place = match
                continue
            loser, winner = match.loser_index, match.winner_index
            if loser in stats and not _moves_on(by_id, match.feeds_into_loss, loser):
                exits[loser] = (BRACKET_ORDER.get(match.bracket, 0), match.round)
                stats[loser].round_eliminated = match.round
            if winner in stats and not _moves_on(by_id, match.feeds_into_win, winner):
                stats[winner].final_position = 1

        for player, exit_key in exits.items():
            still_in = sum(1 for other in stats if other not in exits)
            later = sum(1 for other in exits.values() if other > exit_key)
            stats[player].final_position = still_in + later + 1

        if third_place is not None:
            winner, loser = third_place.winner_index, third_place.loser_index
            if winner in stats and loser in stats:
                stats[loser].final_position = stats[winner].final_position + 1


def _moves_on(by_id: Dict[int, Match], target_id: Optional[int], player: int) -> bool:
    target = by_id.get(target_id) if target_id is not None else None
    return target is not None and not target.is_third_place and target.involves(player)


def calculate_standings(
    matches: Iterable[Match],
    player_count: int,
    weights: Optional[ScoringWeights] = None,
    config: Optional[FormatConfig] = None,
) -> Standings:
    """Rank every player in a roster of ``player_count``."""
    return TiebreakCalculator(weights).calculate_standings(matches, range(player_count))


def elimination_standings(
    matches: Iterable[Match],
    player_count: int,
    weights: Optional[ScoringWeights] = None,
    config: Optional[FormatConfig] = None,
) -> Standings:
    """Standings for single and double elimination, with finishing places."""
    return TiebreakCalculator(weights).calculate_standings(
        matches, range(player_count), placements=True
    )


def group_stage_standings(
    matches: Iterable[Match],
    player_count: int,
    weights: Optional[ScoringWeights] = None,
    config: Optional[FormatConfig] = None,
) -> Standings:
    """Standings for the current stage of a group stage event.

    While groups are being played every player is ranked on group matches.
    Once the playoffs are seeded only the qualifiers are ranked, on playoff
    matches alone, with knockout finishing places.
    """
    calculator = TiebreakCalculator(weights)
    stage = getattr(config, "current_stage", STAGE_GROUPS)
    if stage != STAGE_PLAYOFFS:
        group_matches = [match for match in matches if match.stage == STAGE_GROUPS]
        return calculator.calculate_standings(group_matches, range(player_count))

    playoff_matches = [match for match in matches if match.stage == STAGE_PLAYOFFS]
    qualifiers = sorted(
        {
            player
            for match in playoff_matches
            for player in (match.player1, match.player2)
            if player is not None
        }
    )
    return calculator.calculate_standings(
        playoff_matches, qualifiers, placements=True
    )
