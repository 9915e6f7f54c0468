import numpy as np

win_rate_cases = [
    # ─── No trials yet ───
    ((0, 0), 0.0, "no trials -> 0, not a division error"),

    # ─── Exact thirds ───
    ((1, 2), 33.3, "1 win out of 3"),
    ((2, 1), 66.7, "2 wins out of 3"),

    # ─── Half-up rounding at one decimal ───
    ((1, 7), 12.5, "1/8 = 12.5%"),
    ((1, 15), 6.3, "1/16 = 6.25% rounds up"),
    ((5, 0), 100.0, "all wins"),
]

reveal_candidates_cases = [
    # ── The player picked the car: two goats to choose from ──
    ((["car", "goat", "goat"], 0), [1, 2], "pick = car, both goats allowed"),

    # ── The player picked a goat: the host is forced ──
    ((["car", "goat", "goat"], 1), [2], "pick = goat, only the other goat"),
    ((["goat", "goat", "car"], 0), [1], "car at the end"),
]

stay_wins_cases = [
    # ── Prize position vs first pick, one entry per trial ──
    ((np.array([0, 1, 2]), np.array([0, 1, 2])),
     np.array([True, True, True]),
     "first pick always right -> staying always wins"),
    ((np.array([0, 1, 2]), np.array([1, 2, 0])),
     np.array([False, False, False]),
     "first pick always wrong -> switching always wins"),
    ((np.array([2, 0, 1, 1]), np.array([2, 1, 1, 0])),
     np.array([True, False, True, False]),
     "mixed"),
]
