"""batch.py

Throttled Monte Carlo simulation of the Monty Hall puzzle.

Each trial draws a prize position and a first pick and scores both strategies
at once with :func:`~montyhall.simulation.common.closed_form_outcomes`, so no
door is ever opened. Trials run in small batches; between batches the
coroutine yields to the event loop so a front-end can redraw the progress bar
and the running statistics.

Example:
    >>> import asyncio
    >>> from montyhall.simulation.batch import BatchSimulator
    >>> from montyhall.simulation.config import SimulationConfig
    >>> sim = BatchSimulator(SimulationConfig(throttle=False, seed=0))
    >>> tally = asyncio.run(sim.run_batch(1_000))
    >>> tally.stay_wins + tally.switch_wins
    1000
"""
from __future__ import annotations

import asyncio
from collections.abc import Callable

import numpy as np
from loguru import logger

from .common import closed_form_outcomes, has_converged
from .config import SimulationConfig
from .tally import HistorySample, Tally

ProgressCallback = Callable[[int], None]


class BatchSimulator:
    """Runs batches of randomized trials and accumulates a :class:`Tally`.

    Only one run may be outstanding at a time. The tally object is reset in
    place, so references handed out earlier (e.g. to a :class:`RoundController`)
    keep observing the same counters.

    Args:
        config (SimulationConfig | None, optional): bounds, pacing and seed. Defaults to ``SimulationConfig()``.
        tally (Tally | None, optional): statistics to write into. Defaults to a fresh one.
    """

    def __init__(self, config: SimulationConfig | None = None, tally: Tally | None = None) -> None:
        self.config: SimulationConfig = config if config is not None else SimulationConfig()
        self.tally: Tally = tally if tally is not None else Tally()
        self.rng: np.random.Generator = np.random.default_rng(self.config.seed)

        # ─── Run bookkeeping ─── #
        self.is_running: bool = False
        self.completed_trials: int = 0
        self.target_trials: int = 0
        self._cancel_requested: bool = False

        # ─── Logging ─── #
        self.log = logger.bind(simulator="BatchSimulator")

    @property
    def history(self) -> list[HistorySample]:
        return self.tally.history

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Private helpers                                  #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def _validate(self, trial_count) -> int:
        if isinstance(trial_count, bool) or not isinstance(trial_count, (int, np.integer)):
            raise ValueError(f"trial_count must be an integer, got {trial_count!r}.")
        if trial_count <= 0:
            raise ValueError(f"trial_count must be positive, got {trial_count}.")
        if self.is_running:
            raise RuntimeError("A simulation is already running; wait for it or cancel it first.")
        return int(trial_count)

    def _simulate(self, n_trials: int) -> int:
        """Plays ``n_trials`` trials and returns how many of them staying won."""
        prize = self.rng.integers(0, 3, size=n_trials)
        pick = self.rng.integers(0, 3, size=n_trials)
        return int(np.count_nonzero(closed_form_outcomes(prize, pick)))

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                    Public API                                    #
    # ──────────────────────────────────────────────────────────────────────────────── #
    async def run_batch(self, trial_count: int, on_progress: ProgressCallback | None = None) -> Tally:
        """Simulate ``trial_count`` trials, yielding to the event loop between batches.

        Args:
            trial_count (int): number of trials, must be a positive integer.
            on_progress (ProgressCallback | None, optional): called with the number of completed
                trials after every batch, and once more with ``trial_count`` at the end.

        Raises:
            ValueError: if ``trial_count`` is not a positive integer. The tally is left untouched.
            RuntimeError: if another run is still in progress.

        Returns:
            Tally: the simulator's tally, holding cumulative counters and the convergence history.
        """
        trial_count = self._validate(trial_count)

        self.tally.reset()
        self.is_running = True
        self._cancel_requested = False
        self.completed_trials = 0
        self.target_trials = trial_count

        batch_size = self.config.batch_size(trial_count)
        history_interval = self.config.history_interval(trial_count)
        pause = self.config.pause_seconds(trial_count)
        self.log.info(
            "Running {n} trials | batch: {batch} | history every {interval}",
            n=trial_count,
            batch=batch_size,
            interval=history_interval,
        )

        stay_wins = 0
        next_sample = history_interval
        try:
            for start in range(0, trial_count, batch_size):
                if self._cancel_requested:
                    self.log.warning(
                        "Simulation cancelled after {done}/{n} trials",
                        done=self.completed_trials,
                        n=trial_count,
                    )
                    return self.tally

                current = min(batch_size, trial_count - start)
                stay_wins += self._simulate(current)
                completed = start + current

                # Every trial scores both strategies, and they always disagree
                self.tally.stay_wins = stay_wins
                self.tally.stay_losses = completed - stay_wins
                self.tally.switch_wins = completed - stay_wins
                self.tally.switch_losses = stay_wins
                self.completed_trials = completed

                if completed >= next_sample or completed == trial_count:
                    sample = self.tally.snapshot(completed)
                    next_sample = (completed // history_interval + 1) * history_interval
                    self.log.info(
                        "Trials {done:>5d} | stay: {stay:.1f}% | switch: {switch:.1f}%",
                        done=sample.trials_completed,
                        stay=sample.stay_win_rate,
                        switch=sample.switch_win_rate,
                    )

                if on_progress is not None:
                    on_progress(completed)

                await asyncio.sleep(pause)

            self.completed_trials = trial_count
            if on_progress is not None:
                on_progress(trial_count)

            self.log.success(
                "Simulation complete | stay: {stay:.1f}% | switch: {switch:.1f}%",
                stay=self.tally.stay_win_rate,
                switch=self.tally.switch_win_rate,
            )
            if has_converged(self.tally.history):
                self.log.success("Win rates are within 5 points of 1/3 and 2/3")
            return self.tally
        except asyncio.CancelledError:
            self.log.warning("Simulation task cancelled after {done} trials", done=self.completed_trials)
            raise
        except Exception:
            self.log.exception("Simulation failed after {done} trials", done=self.completed_trials)
            raise
        finally:
            self.is_running = False
            self._cancel_requested = False

    def cancel(self) -> None:
        """Asks a running simulation to stop at the next batch boundary."""
        if self.is_running:
            self._cancel_requested = True

    def reset_tally(self) -> None:
        """Zeroes every counter and clears the convergence history."""
        self.tally.reset()
        self.completed_trials = 0
        self.target_trials = 0
