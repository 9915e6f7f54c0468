import math

import numpy as np


def win_rate(wins: int, losses: int) -> float:
    """Return the win percentage of a strategy, rounded half-up to one decimal.

    Args:
        wins (int): number of wins.
        losses (int): number of losses.

    Returns:
        float: percentage in ``[0, 100]``, ``0.0`` when no games were played.
    """
    total = wins + losses
    if total == 0:
        return 0.0
    return math.floor(1000 * wins / total + 0.5) / 10


def reveal_candidates(doors: list[str], pick: int) -> list[int]:
    """Return the doors the host is allowed to open.

    Args:
        doors (list[str]): ``"car"`` or ``"goat"`` for every door.
        pick (int): the player's first pick.

    Returns:
        list[int]: indices that are neither picked nor hiding the car.
    """
    return [i for i, content in enumerate(doors) if i != pick and content != "car"]


def stay_wins(prize: np.ndarray, pick: np.ndarray) -> np.ndarray:
    """Return, for every trial, whether sticking with the first pick wins.

    Switching wins in exactly the other trials: once the host has opened the
    only other goat, the remaining door must hide the car.
    """
    return prize == pick
