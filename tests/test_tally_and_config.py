import pytest

from montyhall.simulation.common import has_converged
from montyhall.simulation.config import SimulationConfig
from montyhall.simulation.tally import HistorySample, Tally, win_rate


@pytest.mark.parametrize(
    "wins, losses, expected",
    [(0, 0, 0.0), (1, 2, 33.3), (2, 1, 66.7), (1, 15, 6.3), (3, 0, 100.0), (0, 4, 0.0)],
)
def test_win_rate(wins, losses, expected):
    assert win_rate(wins, losses) == expected


def test_record_and_rates():
    tally = Tally()
    tally.record(switched=False, won=True)
    tally.record(switched=False, won=False)
    tally.record(switched=False, won=False)
    tally.record(switched=True, won=True)

    assert (tally.stay_wins, tally.stay_losses, tally.switch_wins, tally.switch_losses) == (1, 2, 1, 0)
    assert tally.stay_win_rate == 33.3
    assert tally.switch_win_rate == 100.0


def test_snapshot_and_reset():
    tally = Tally(stay_wins=1, stay_losses=2, switch_wins=2, switch_losses=1)
    sample = tally.snapshot(3)
    assert sample == HistorySample(3, 33.3, 66.7)
    assert tally.history == [sample]
    assert tally.to_dict()["history"] == [
        {"trials_completed": 3, "stay_win_rate": 33.3, "switch_win_rate": 66.7}
    ]

    history = tally.history
    tally.reset()
    assert tally == Tally()
    assert history is tally.history


def test_has_converged():
    assert not has_converged([])
    assert has_converged([HistorySample(1000, 34.0, 66.0)])
    assert not has_converged([HistorySample(1000, 50.0, 50.0)])
    assert not has_converged([HistorySample(1000, 36.0, 64.0)], tolerance=1.0)


def test_config_defaults():
    cfg = SimulationConfig()
    assert (cfg.min_trials, cfg.max_trials, cfg.default_trials) == (1, 10_000, 1_000)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_trials": 0},
        {"min_trials": 10, "max_trials": 5, "default_trials": 5},
        {"default_trials": 20_000},
        {"max_batch_size": 0},
        {"history_points": 0},
    ],
)
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        SimulationConfig(**kwargs)


@pytest.mark.parametrize(
    "raw, expected",
    [(500, 500), ("250", 250), (0, 1), (-5, 1), (20_000, 10_000), ("abc", 1), (None, 1), ("", 1)],
)
def test_clamp_trials(raw, expected):
    assert SimulationConfig().clamp_trials(raw) == expected


@pytest.mark.parametrize(
    "trials, batch, interval",
    [(1, 1, 1), (7, 1, 1), (100, 5, 5), (1_000, 50, 50), (10_000, 50, 500)],
)
def test_batch_size_and_history_interval(trials, batch, interval):
    cfg = SimulationConfig()
    assert cfg.batch_size(trials) == batch
    assert cfg.history_interval(trials) == interval


def test_pause_schedule():
    cfg = SimulationConfig()
    assert [cfg.pause_seconds(n) for n in (10, 100, 500, 1_000)] == [0.1, 0.05, 0.03, 0.01]
    assert SimulationConfig(throttle=False).pause_seconds(10) == 0.0
