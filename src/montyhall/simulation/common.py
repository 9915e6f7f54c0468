import numpy as np

from .tally import HistorySample

THEORETICAL_STAY_RATE = 100 / 3
THEORETICAL_SWITCH_RATE = 200 / 3


def closed_form_outcomes(prize: np.ndarray, pick: np.ndarray) -> np.ndarray:
    """Return, per trial, whether *staying* wins.

    Only valid for three doors and one prize with a host who always opens a
    non-prize, non-picked door: staying wins iff the first pick is the prize,
    and switching wins exactly when staying loses.

    Args:
        prize (np.ndarray): prize position of each trial, values in ``{0, 1, 2}``.
        pick (np.ndarray): first pick of each trial, same shape as ``prize``.

    Returns:
        np.ndarray: boolean mask, ``True`` where staying wins.
    """
    return np.asarray(prize) == np.asarray(pick)


def has_converged(history: list[HistorySample], tolerance: float = 5.0) -> bool:
    """Return ``True`` if the latest sample is close to the theoretical rates.

    Args:
        history (list[HistorySample]): convergence samples collected so far.
        tolerance (float, optional): allowed distance in percentage points from
            ``33.3`` (stay) and ``66.7`` (switch). Defaults to ``5.0``.

    Returns:
        bool: ``True`` when both strategies are within ``tolerance``.
    """
    if not history:
        return False
    latest = history[-1]
    return (
        abs(latest.stay_win_rate - THEORETICAL_STAY_RATE) <= tolerance
        and abs(latest.switch_win_rate - THEORETICAL_SWITCH_RATE) <= tolerance
    )
