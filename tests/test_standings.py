from fractions import Fraction

from bracketeer import UNDECIDED, Match, ScoringWeights, Side
from bracketeer.constants import TB_QUALITY
from bracketeer.models.tournament import PlayerStats
from bracketeer.tournament import TiebreakCalculator, calculate_standings

S1 = Side.SIDE1
S2 = Side.SIDE2


def _decided(match_id, player1, player2, *games):
    match = Match(id=match_id, player1=player1, player2=player2)
    match.games = list(games) + [UNDECIDED] * (3 - len(games))
    wins = sum(1 for game in games if game is S1)
    match.winner = S1 if wins >= 2 else S2
    return match


def test_nothing_played_ties_everyone():
    standings = calculate_standings([], 4)
    assert [entry.rank for entry in standings.entries] == [1, 1, 1, 1]
    assert standings.tied_ranks == {1}
    assert all(entry.tied for entry in standings.entries)
    assert standings.ranked_players() == [0, 1, 2, 3]


def test_identical_records_share_a_rank():
    matches = [_decided(0, 0, 1, S1, S1), _decided(1, 2, 3, S1, S1)]
    standings = calculate_standings(matches, 4)

    assert [entry.rank for entry in standings.entries] == [1, 1, 3, 3]
    assert standings.tied_ranks == {1, 3}
    assert {entry.player for entry in standings.at_rank(1)} == {0, 2}


def test_points_count_match_and_game_results():
    standings = calculate_standings([_decided(0, 0, 1, S1, S2, S1)], 2)
    winner = standings.for_player(0)
    loser = standings.for_player(1)

    assert winner.points == 3 + 2 - 0.5
    assert loser.points == 1 - 1.0
    assert winner.game_differential == 1
    assert loser.game_differential == -1
    assert winner.win_percentage == Fraction(1)
    assert loser.win_percentage == Fraction(0)


def test_custom_weights():
    weights = ScoringWeights(match_win=2.0, game_win=0.0, game_loss=0.0)
    standings = calculate_standings([_decided(0, 0, 1, S1, S1)], 2, weights)
    assert standings.for_player(0).points == 2.0
    assert standings.for_player(1).points == 0.0


def test_quality_score_stays_on_half_points():
    matches = [
        _decided(0, 1, 2, S1, S2, S1),  # player 1: 4.5
        _decided(1, 0, 1, S1, S1),  # player 1: -1.0, player 0 beats them
    ]
    standings = calculate_standings(matches, 3)
    quality = standings.for_player(0).quality_score

    assert quality == 3.5
    assert (quality * 2).is_integer()
    # A halved quality score would fall off the half-point grid
    assert not (quality * 0.5 * 2).is_integer()


def test_quality_score_breaks_level_points():
    matches = [
        _decided(0, 0, 2, S1, S1),
        _decided(1, 1, 3, S1, S1),
        _decided(2, 2, 4, S1, S2, S1),
        _decided(3, 5, 3, S1, S1),
    ]
    standings = calculate_standings(matches, 6)
    # 0 and 1 both have one sweep; 0 beat the stronger opponent
    assert standings.for_player(0).points == standings.for_player(1).points
    assert standings.for_player(0).rank < standings.for_player(1).rank


def test_head_to_head_beats_quality():
    calculator = TiebreakCalculator()
    winner = PlayerStats(player=0, points=4.0, head_to_head={1: 1})
    winner.tiebreakers = {TB_QUALITY: 0.0}
    rival = PlayerStats(player=1, points=4.0)
    rival.tiebreakers = {TB_QUALITY: 10.0}

    assert calculator.compare_players(winner, rival) == 1
    assert calculator.compare_players(rival, winner) == -1


def test_without_head_to_head_quality_decides():
    calculator = TiebreakCalculator()
    first = PlayerStats(player=0, points=4.0, tiebreakers={TB_QUALITY: 1.0})
    second = PlayerStats(player=1, points=4.0, tiebreakers={TB_QUALITY: 2.0})
    assert calculator.compare_players(first, second) == -1


def test_win_percentage_is_exact():
    entry = PlayerStats(player=0, wins=1, losses=2)
    assert entry.win_percentage == Fraction(1, 3)
    assert PlayerStats(player=1).win_percentage == 0


def test_standings_serialize_to_plain_data():
    standings = calculate_standings([_decided(0, 0, 1, S1, S1)], 2)
    data = standings.to_dict()
    assert data["tied_ranks"] == []
    assert data["entries"][0]["player"] == 0
    assert data["entries"][0]["beaten"] == [1]
    assert data["entries"][1]["lost_to"] == [0]
