"""rules.py

Transition rules of a single three-door Monty Hall round.

A round moves ``SELECTING -> REVEALED -> DECIDED``. Every function takes a
:class:`RoundState` and returns the next one; illegal clicks simply return
the state they were given.

Example:
    >>> rng = np.random.default_rng(0)
    >>> state = initialize_round(rng)
    >>> state = select_initial_door(state, 0, rng)
    >>> state = finalize_choice(state, state.remaining_door)
    >>> state.phase
    <Phase.DECIDED: 3>
"""
from __future__ import annotations

from dataclasses import replace

import numpy as np
from loguru import logger

from montyhall.simulation.tally import Tally
from .state import N_DOORS, DoorContent, Phase, RoundState


def _valid_door(door) -> bool:
    return isinstance(door, (int, np.integer)) and not isinstance(door, bool) and 0 <= door < N_DOORS


def initialize_round(rng: np.random.Generator, prize_door: int | None = None) -> RoundState:
    """Hides the prize behind one door and returns a fresh round.

    Args:
        rng (np.random.Generator): source of randomness for the prize position.
        prize_door (int | None, optional): force the prize position, mostly useful for tests.
            Defaults to None (uniformly random).

    Raises:
        ValueError: if ``prize_door`` is given but is not a door index.

    Returns:
        RoundState: a round in ``Phase.SELECTING`` with nothing picked or revealed.
    """
    if prize_door is None:
        prize_door = int(rng.integers(N_DOORS))
    elif not _valid_door(prize_door):
        raise ValueError(f"prize_door must be in [0, {N_DOORS - 1}], got {prize_door!r}.")

    doors = tuple(
        DoorContent.PRIZE if i == prize_door else DoorContent.EMPTY for i in range(N_DOORS)
    )
    return RoundState(doors=doors)


def reveal_candidates(state: RoundState, door: int) -> list[int]:
    """Doors the host may open after the player picks ``door``: not picked, not the prize."""
    return [
        i for i, content in enumerate(state.doors) if i != door and content is not DoorContent.PRIZE
    ]


def select_initial_door(state: RoundState, door: int, rng: np.random.Generator) -> RoundState:
    """Registers the player's first pick and lets the host open a goat door.

    When the first pick is the prize there are two goat doors left and the host
    picks one of them uniformly at random, so the reveal carries no extra information.

    Args:
        state (RoundState): current round.
        door (int): index of the picked door.
        rng (np.random.Generator): source of randomness for the host's choice.

    Returns:
        RoundState: the round in ``Phase.REVEALED``, or ``state`` unchanged when the pick is not allowed.
    """
    if state.phase is not Phase.SELECTING or not _valid_door(door):
        return state

    door = int(door)
    candidates = reveal_candidates(state, door)
    revealed = int(candidates[rng.integers(len(candidates))])

    return replace(
        state,
        selected_door=door,
        initial_door=door,
        revealed_door=revealed,
        phase=Phase.REVEALED,
    )


def finalize_choice(state: RoundState, door: int, tally: Tally | None = None) -> RoundState:
    """Registers the final pick (stay or switch) and scores the round.

    Args:
        state (RoundState): current round, expected in ``Phase.REVEALED``.
        door (int): index of the final pick; the revealed door cannot be chosen.
        tally (Tally | None, optional): when given, exactly one of its counters is incremented.

    Returns:
        RoundState: the round in ``Phase.DECIDED``, or ``state`` unchanged when the pick is not allowed.
    """
    if state.phase is not Phase.REVEALED or not _valid_door(door) or door == state.revealed_door:
        return state

    door = int(door)
    switched = door != state.selected_door
    won = state.doors[door] is DoorContent.PRIZE
    if tally is not None:
        tally.record(switched=switched, won=won)

    return replace(state, selected_door=door, won=won, switched=switched, phase=Phase.DECIDED)


class RoundController:
    """Keeps the current round for an interactive front-end.

    Args:
        tally (Tally | None, optional): statistics updated when a round is decided, typically
            shared with a :class:`~montyhall.simulation.batch.BatchSimulator`. Defaults to a private one.
        seed (int | None, optional): seed of the controller's generator. Defaults to None.
    """

    def __init__(self, tally: Tally | None = None, *, seed: int | None = None) -> None:
        self.tally = tally if tally is not None else Tally()
        self.rng = np.random.default_rng(seed)
        self.log = logger.bind(round="RoundController")
        self.state = initialize_round(self.rng)

    def new_round(self) -> RoundState:
        """Starts over with a freshly hidden prize ("play again")."""
        self.state = initialize_round(self.rng)
        return self.state

    def select_initial_door(self, door: int) -> RoundState:
        new_state = select_initial_door(self.state, door, self.rng)
        if new_state is self.state:
            self.log.debug("Ignored first pick {door} in phase {phase}", door=door, phase=self.state.phase.name)
        else:
            self.log.info(
                "Picked door {door}, host opens door {revealed}",
                door=door,
                revealed=new_state.revealed_door,
            )
        self.state = new_state
        return self.state

    def finalize_choice(self, door: int) -> RoundState:
        new_state = finalize_choice(self.state, door, self.tally)
        if new_state is self.state:
            self.log.debug("Ignored final pick {door} in phase {phase}", door=door, phase=self.state.phase.name)
        else:
            self.log.info(
                "Player {action} to door {door} and {outcome}",
                action="switched" if new_state.switched else "stayed",
                door=door,
                outcome="won" if new_state.won else "lost",
            )
        self.state = new_state
        return self.state
