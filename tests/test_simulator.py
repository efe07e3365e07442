import json

import pytest

from bracketeer import Format, Tournament
from bracketeer.testing import (
    ResultPattern,
    SimulationConfig,
    TournamentSimulator,
    check_invariants,
)


@pytest.mark.parametrize(
    "fmt, num_players",
    [
        (Format.ROUND_ROBIN, 6),
        (Format.ROUND_ROBIN, 7),
        (Format.SINGLE_ELIMINATION, 2),
        (Format.SINGLE_ELIMINATION, 13),
        (Format.DOUBLE_ELIMINATION, 4),
        (Format.DOUBLE_ELIMINATION, 10),
        (Format.SWISS, 7),
        (Format.SWISS, 16),
        (Format.GROUP_STAGE, 8),
        (Format.GROUP_STAGE, 16),
    ],
)
@pytest.mark.parametrize("pattern", list(ResultPattern))
def test_simulated_tournaments_finish_cleanly(fmt, num_players, pattern):
    config = SimulationConfig(
        format=fmt, num_players=num_players, result_pattern=pattern, seed=2024
    )
    report = TournamentSimulator(config).run()

    assert report.passed, report.violations
    assert report.matches_played > 0
    assert report.champions


def test_explicit_config_is_used():
    config = SimulationConfig(
        format=Format.ROUND_ROBIN,
        num_players=6,
        config={"matches_per_player": 3},
        seed=1,
    )
    report = TournamentSimulator(config).run()
    assert report.passed, report.violations
    assert report.matches_played == 9


def test_swiss_rounds_are_advanced():
    config = SimulationConfig(
        format=Format.SWISS, num_players=8, config={"rounds": 3}, seed=3
    )
    report = TournamentSimulator(config).run()
    assert report.stages_advanced == 2
    assert report.matches_played == 12


def test_group_stage_advances_once():
    config = SimulationConfig(format=Format.GROUP_STAGE, num_players=8, seed=3)
    report = TournamentSimulator(config).run()
    assert report.stages_advanced == 1
    assert report.matches_played == 15


def test_same_seed_same_tournament():
    config = SimulationConfig(format=Format.DOUBLE_ELIMINATION, num_players=9, seed=77)
    first = TournamentSimulator(config).run()
    second = TournamentSimulator(config).run()
    assert first.snapshot == second.snapshot


def test_report_exports_json():
    simulator = TournamentSimulator(
        SimulationConfig(format=Format.SINGLE_ELIMINATION, num_players=4, seed=5)
    )
    report = simulator.run()
    data = json.loads(simulator.export_json(report))
    assert data["format"] == "single-elimination"
    assert data["violations"] == []


def test_unfinished_tournament_is_flagged():
    tournament = Tournament.create(
        [f"Player {i}" for i in range(4)], Format.SINGLE_ELIMINATION
    )
    violations = check_invariants(tournament)
    assert "Tournament finished with undecided matches" in violations
