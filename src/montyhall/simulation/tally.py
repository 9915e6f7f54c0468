"""tally.py

Running win/loss counters for the two Monty Hall strategies, plus the
convergence history sampled during batch simulation.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field


def win_rate(wins: int, losses: int) -> float:
    """Percentage of wins for one strategy, rounded half-up to one decimal place.

    Args:
        wins (int): number of won trials.
        losses (int): number of lost trials.

    Returns:
        float: ``100 * wins / (wins + losses)`` rounded to 0.1, or ``0.0`` when no trials were played.
    """
    total = wins + losses
    if total == 0:
        return 0.0
    return math.floor(1000 * wins / total + 0.5) / 10


@dataclass(frozen=True, slots=True)
class HistorySample:
    """One point of the convergence curve."""

    trials_completed: int
    stay_win_rate: float
    switch_win_rate: float


@dataclass(slots=True)
class Tally:
    """Cumulative stay/switch outcomes.

    Shared between manual play and batch simulation, so it is always reset
    in place rather than replaced.

    Attributes:
        stay_wins (int): trials where keeping the first pick won.
        stay_losses (int): trials where keeping the first pick lost.
        switch_wins (int): trials where switching won.
        switch_losses (int): trials where switching lost.
        history (list[HistorySample]): convergence samples, strictly increasing in ``trials_completed``.
    """

    stay_wins: int = 0
    stay_losses: int = 0
    switch_wins: int = 0
    switch_losses: int = 0
    history: list[HistorySample] = field(default_factory=list)

    @property
    def stay_total(self) -> int:
        return self.stay_wins + self.stay_losses

    @property
    def switch_total(self) -> int:
        return self.switch_wins + self.switch_losses

    @property
    def stay_win_rate(self) -> float:
        return win_rate(self.stay_wins, self.stay_losses)

    @property
    def switch_win_rate(self) -> float:
        return win_rate(self.switch_wins, self.switch_losses)

    def record(self, *, switched: bool, won: bool) -> None:
        """Counts the outcome of one manually played round."""
        if switched:
            if won:
                self.switch_wins += 1
            else:
                self.switch_losses += 1
        elif won:
            self.stay_wins += 1
        else:
            self.stay_losses += 1

    def snapshot(self, trials_completed: int) -> HistorySample:
        """Appends the current win rates to the history and returns the new sample."""
        sample = HistorySample(trials_completed, self.stay_win_rate, self.switch_win_rate)
        self.history.append(sample)
        return sample

    def reset(self) -> None:
        self.stay_wins = self.stay_losses = 0
        self.switch_wins = self.switch_losses = 0
        self.history.clear()

    def to_dict(self) -> dict:
        return asdict(self)
