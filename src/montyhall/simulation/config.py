from dataclasses import dataclass


@dataclass(slots=True)
class SimulationConfig:
    """Bounds and pacing settings for :class:`~montyhall.simulation.batch.BatchSimulator`.

    Attributes:
        min_trials (int): smallest trial count a user may request.
        max_trials (int): largest trial count a user may request.
        default_trials (int): trial count offered before the user types anything.
        max_batch_size (int): upper bound on the trials simulated between two yields.
        history_points (int): roughly how many convergence samples a run records;
            also the divisor used for the batch size.
        throttle (bool): pause between batches so a front-end can animate progress.
            With ``False`` the simulator still yields, just without sleeping.
        seed (int | None): RNG seed for reproducibility. ``None`` disables seeding.
    """
    min_trials: int = 1
    max_trials: int = 10_000
    default_trials: int = 1_000

    max_batch_size: int = 50
    history_points: int = 20

    throttle: bool = True
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.min_trials < 1:
            raise ValueError("min_trials must be at least 1.")
        if self.max_trials < self.min_trials:
            raise ValueError(f"max_trials must be at least min_trials ({self.min_trials}).")
        if not (self.min_trials <= self.default_trials <= self.max_trials):
            raise ValueError(
                f"default_trials must be between {self.min_trials} and {self.max_trials}."
            )
        if self.max_batch_size < 1:
            raise ValueError("max_batch_size must be at least 1.")
        if self.history_points < 1:
            raise ValueError("history_points must be at least 1.")

    def clamp_trials(self, value) -> int:
        """Turns raw user input into a trial count within ``[min_trials, max_trials]``.

        Args:
            value: typically the text of an input field; anything that does not parse as an
                integer falls back to ``min_trials``.

        Returns:
            int: the clamped trial count.
        """
        try:
            trials = int(value)
        except (TypeError, ValueError):
            trials = self.min_trials
        return max(self.min_trials, min(self.max_trials, trials))

    def batch_size(self, trial_count: int) -> int:
        return max(1, min(self.max_batch_size, trial_count // self.history_points))

    def history_interval(self, trial_count: int) -> int:
        return max(1, trial_count // self.history_points)

    def pause_seconds(self, trial_count: int) -> float:
        """Delay between batches; small runs are slowed down more so they stay watchable."""
        if not self.throttle:
            return 0.0
        if trial_count < 100:
            return 0.1
        if trial_count < 500:
            return 0.05
        if trial_count < 1_000:
            return 0.03
        return 0.01
