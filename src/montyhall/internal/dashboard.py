"""Notebook front-end for :class:`~montyhall.simulation.batch.BatchSimulator`.

Example:
    >>> from montyhall.internal.dashboard import SimulationDashboard
    >>> SimulationDashboard().widget   # displayed as the cell output
"""
from __future__ import annotations

import asyncio

import ipywidgets as widgets
from loguru import logger

from montyhall.simulation.batch import BatchSimulator
from montyhall.simulation.common import THEORETICAL_STAY_RATE, THEORETICAL_SWITCH_RATE
from montyhall.simulation.config import SimulationConfig
from montyhall.simulation.tally import HistorySample, Tally


def stats_html(tally: Tally) -> str:
    """Statistics table in the same layout as the interactive game."""
    rows = [
        ("Staying", tally.stay_wins, tally.stay_losses, tally.stay_win_rate),
        ("Switching", tally.switch_wins, tally.switch_losses, tally.switch_win_rate),
    ]
    body = "".join(
        f"<tr><td><b>{name}</b></td><td>{wins}</td><td>{losses}</td><td>{rate:.1f}%</td></tr>"
        for name, wins, losses, rate in rows
    )
    return (
        "<table><tr><th>Strategy</th><th>Wins</th><th>Losses</th><th>Win rate</th></tr>"
        f"{body}</table>"
    )


def history_html(history: list[HistorySample]) -> str:
    """Win-rate convergence table, one row per history sample, next to the theoretical rates."""
    if not history:
        return "<p><i>Run a simulation to see the win rates converge.</i></p>"
    body = "".join(
        f"<tr><td>{s.trials_completed}</td><td>{s.stay_win_rate:.1f}%</td><td>{s.switch_win_rate:.1f}%</td></tr>"
        for s in history
    )
    return (
        "<h4>Win Rate Convergence</h4>"
        "<table><tr><th>Trials</th><th>Stay</th><th>Switch</th></tr>"
        f"{body}"
        f"<tr><td><i>theory</i></td><td><i>{THEORETICAL_STAY_RATE:.2f}%</i></td>"
        f"<td><i>{THEORETICAL_SWITCH_RATE:.2f}%</i></td></tr></table>"
    )


class SimulationDashboard:
    """Trial-count input, run/reset buttons, progress bar, statistics and convergence tables.

    Args:
        simulator (BatchSimulator | None, optional): the simulator to drive. Defaults to a new one.
    """

    def __init__(self, simulator: BatchSimulator | None = None) -> None:
        self.simulator = simulator if simulator is not None else BatchSimulator()
        cfg: SimulationConfig = self.simulator.config
        self.log = logger.bind(dashboard="SimulationDashboard")
        self._task: asyncio.Future | None = None

        self.trials_input = widgets.BoundedIntText(
            value=cfg.default_trials,
            min=cfg.min_trials,
            max=cfg.max_trials,
            description="Trials:",
        )
        self.run_button = widgets.Button(description="Run Simulation", button_style="primary", icon="play")
        self.reset_button = widgets.Button(description="Reset Stats", icon="refresh")
        self.progress = widgets.IntProgress(value=0, min=0, max=cfg.default_trials, description="0%")
        self.stats = widgets.HTML(stats_html(self.simulator.tally))
        self.history = widgets.HTML(history_html(self.simulator.history))

        self.run_button.on_click(self._on_run)
        self.reset_button.on_click(self._on_reset)

        self.widget = widgets.VBox([
            widgets.HBox([self.trials_input, self.run_button, self.reset_button]),
            self.progress,
            widgets.HBox([self.stats, self.history]),
        ])

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Private helpers                                  #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def _set_busy(self, busy: bool) -> None:
        self.run_button.disabled = busy
        self.reset_button.disabled = busy
        self.trials_input.disabled = busy

    def _refresh_tables(self) -> None:
        self.stats.value = stats_html(self.simulator.tally)
        self.history.value = history_html(self.simulator.history)

    def _on_progress(self, completed: int) -> None:
        self.progress.value = completed
        self.progress.description = f"{100 * completed // self.progress.max}%"
        self._refresh_tables()

    def _on_run(self, _) -> None:
        if self._task is not None and not self._task.done():
            return
        trial_count = self.simulator.config.clamp_trials(self.trials_input.value)
        self.log.info("Run requested for {n} trials", n=trial_count)
        # Disabled before the loop turns, so a second click cannot start another run
        self._set_busy(True)
        self._task = asyncio.ensure_future(self.run(trial_count))
        self._task.add_done_callback(self._on_run_done)

    def _on_run_done(self, task: asyncio.Future) -> None:
        if task.cancelled():
            self.log.warning("Simulation run was cancelled")
            return
        error = task.exception()
        if error is not None:
            self.log.opt(exception=error).error("Simulation run failed")

    def _on_reset(self, _) -> None:
        if self.simulator.is_running:
            return
        self.simulator.reset_tally()
        self.progress.value = 0
        self.progress.description = "0%"
        self._refresh_tables()

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                    Public API                                    #
    # ──────────────────────────────────────────────────────────────────────────────── #
    async def run(self, trial_count: int) -> Tally:
        """Runs the simulator while keeping the widgets in sync."""
        self._set_busy(True)
        self.progress.value = 0
        self.progress.max = trial_count
        try:
            return await self.simulator.run_batch(trial_count, self._on_progress)
        finally:
            self._set_busy(False)
            self._refresh_tables()
