import asyncio

import numpy as np
import pytest

from montyhall.simulation.batch import BatchSimulator
from montyhall.simulation.config import SimulationConfig


def test_rgb_array_render(monkeypatch):
    pytest.importorskip("pygame")
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    from montyhall.environments.monty_hall.env import MontyHallEnv

    env = MontyHallEnv(render_mode="rgb_array", seed=2)
    closed = env.render()
    assert closed.shape == (190, 260, 3)
    assert closed.dtype == np.uint8

    env.step(0)
    revealed = env.render()
    assert not np.array_equal(closed, revealed)
    env.close()


def test_dashboard_run_and_reset():
    pytest.importorskip("ipywidgets")
    from montyhall.internal.dashboard import SimulationDashboard, history_html, stats_html

    dash = SimulationDashboard(BatchSimulator(SimulationConfig(throttle=False, seed=4)))
    assert dash.trials_input.value == 1_000

    tally = asyncio.run(dash.run(120))
    assert dash.progress.value == 120
    assert dash.progress.description == "100%"
    assert not dash.run_button.disabled
    assert dash.stats.value == stats_html(tally)
    assert "Switching" in dash.stats.value

    last = tally.history[-1]
    assert last.trials_completed == 120
    assert dash.history.value == history_html(tally.history)
    assert f"<tr><td>120</td><td>{last.stay_win_rate:.1f}%</td><td>{last.switch_win_rate:.1f}%</td></tr>" in dash.history.value

    dash._on_reset(None)
    assert dash.progress.value == 0
    assert dash.simulator.tally.stay_total == 0
    assert dash.history.value == history_html([])
    assert "<td>120</td>" not in dash.history.value


def test_dashboard_history_refreshes_on_progress():
    pytest.importorskip("ipywidgets")
    from montyhall.internal.dashboard import SimulationDashboard

    dash = SimulationDashboard(BatchSimulator(SimulationConfig(throttle=False, seed=4)))
    rows_seen = []
    on_progress = dash._on_progress

    def watch(completed):
        on_progress(completed)
        rows_seen.append(dash.history.value.count("<tr>"))

    dash._on_progress = watch
    asyncio.run(dash.run(1_000))
    # header + samples + theory row, growing as samples arrive
    assert rows_seen[0] == 3
    assert rows_seen[-1] == 22
    assert rows_seen == sorted(rows_seen)


def test_dashboard_double_click_starts_one_run():
    pytest.importorskip("ipywidgets")
    from montyhall.internal.dashboard import SimulationDashboard

    sim = BatchSimulator(SimulationConfig(throttle=False, seed=6))
    dash = SimulationDashboard(sim)
    dash.trials_input.value = 200
    started = []
    run = sim.run_batch

    async def counting_run(trial_count, on_progress=None):
        started.append(trial_count)
        return await run(trial_count, on_progress)

    sim.run_batch = counting_run

    async def scenario():
        dash._on_run(None)
        assert dash.run_button.disabled and dash.reset_button.disabled
        first = dash._task
        dash._on_run(None)
        assert dash._task is first
        await first

    asyncio.run(scenario())
    assert started == [200]
    assert not dash.run_button.disabled
    assert sim.tally.stay_wins + sim.tally.switch_wins == 200


def test_dashboard_logs_failed_runs():
    pytest.importorskip("ipywidgets")
    from loguru import logger

    from montyhall.internal.dashboard import SimulationDashboard

    sim = BatchSimulator(SimulationConfig(throttle=False, seed=6))
    dash = SimulationDashboard(sim)

    def boom(n_trials):
        raise RuntimeError("rng exploded")

    sim._simulate = boom
    messages = []
    sink = logger.add(messages.append, level="ERROR", format="{message}")
    try:
        async def scenario():
            dash._on_run(None)
            with pytest.raises(RuntimeError):
                await dash._task

        asyncio.run(scenario())
    finally:
        logger.remove(sink)

    assert any("Simulation run failed" in m for m in messages)
    assert not dash.run_button.disabled


def test_exercise_cases_pass_with_solutions():
    pytest.importorskip("ipywidgets")
    from montyhall.internal.tester import run_tests
    from notebooks.internal import exercises_1_monty_hall as cases
    from notebooks.solutions import monty_hall as solutions

    for func, case_list in [
        (solutions.win_rate, cases.win_rate_cases),
        (solutions.reveal_candidates, cases.reveal_candidates_cases),
        (solutions.stay_wins, cases.stay_wins_cases),
    ]:
        results = run_tests(func, case_list)
        assert all(ok for ok, _ in results), results


def test_tester_reports_failures():
    pytest.importorskip("ipywidgets")
    from montyhall.internal.tester import make_tester, run_tests
    from notebooks.internal.exercises_1_monty_hall import win_rate_cases

    results = run_tests(lambda wins, losses: 50.0, win_rate_cases, stop_on_first=True)
    assert len(results) == 1
    assert not results[0][0]

    def broken(wins, losses):
        return wins / (wins + losses)

    results = run_tests(broken, win_rate_cases)
    assert "ZeroDivisionError" in results[0][1]
    assert make_tester(broken, win_rate_cases).children
