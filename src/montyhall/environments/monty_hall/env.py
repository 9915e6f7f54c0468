"""
The classic three-door Monty Hall round as a Gymnasium environment, driven by the rules in ``rules.py``.
"""

from .renderer import MontyHallPygameRenderer
from .rules import finalize_choice, initialize_round, select_initial_door
from .state import N_DOORS, DoorState, Phase, RoundState

from typing import Optional, Literal

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from gymnasium.envs.registration import register

from montyhall.simulation.tally import Tally


class MontyHallEnv(gym.Env):
    """A Monty Hall round that follows Gymnasium's API.

    The first ``step`` picks a door and triggers the host's reveal, the second one
    is the final (stay or switch) pick. Picking the revealed door is ignored, just like
    an illegal click in the interactive game.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 4,
    }

    def __init__(
        self,
        *,
        render_mode: Literal["human", "rgb_array"] | None = None,
        seed: int | None = None,
        tally: Tally | None = None,
    ) -> None:
        """Initialises the Monty Hall environment.

        Args:
            render_mode (Literal or None): rendering mode of the environment. Defaults to None (no rendering needed).
            seed (int or None): controls the random number generation. Note that, setting this
             will cause deterministic behaviour, mostly useful for debugging only. Defaults to None (random seed).
            tally (Tally or None): statistics to update whenever a round is decided. Defaults to a private one.

        Raises:
            ValueError: for an invalid render mode
        """
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode '{render_mode}'.")

        self.n_doors = N_DOORS
        self.render_mode = render_mode
        self.tally = tally if tally is not None else Tally()

        # ─── Gym spaces ───
        # Observation/State Space: 1D NumPy vector of doors with value (0-3) from DoorState
        self.observation_space = spaces.MultiDiscrete(
            np.full(self.n_doors, len(DoorState), dtype=np.int64)
        )
        # Action Space: Discrete choice, given the number of doors
        self.action_space = spaces.Discrete(self.n_doors)

        # ─── renderer (optional) ───
        self._renderer: MontyHallPygameRenderer | None = None
        if render_mode is not None:
            self._renderer = MontyHallPygameRenderer(self.n_doors, self.metadata, render_mode)

        # ─── Initial episode state ───
        self.reset(seed=seed)

    @property
    def round_state(self) -> RoundState:
        return self._round

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Gymnasium API                                    #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def reset(self, *, seed: Optional[int] = None, options=None):
        """Resets the environment, whenever an episode has terminated.

        Args:
            seed (Optional[int]): reset the environment with a specific seed value. Defaults to None.
            options: unused, mandated by the Gymnasium interface. Defaults to None.

        Returns:
            Pair: 1D state vector of DoorStates, and info (dict) consisting of auxiliary information from _get_info()
        """
        super().reset(seed=seed)
        self._round = initialize_round(self.np_random)

        if self.render_mode is not None:
            self.render()
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        """Corresponds to env.step() in Gymnasium, corresponds to an atomic action taken in the environment.

        Args:
            action (int): the integer index of the door clicked.

        Raises:
            RuntimeError: if an action is performed on an already completed episode.
            ValueError: if an action ID is provided that is not valid.

        Returns:
            observation (1d Numpy): next observation of door states
            reward (float): 1.0 when the final pick wins the car, 0.0 otherwise
            terminated (bool): whether the round is decided
            truncated (bool): always False, a round is at most two legal steps long
            info (dict): auxiliary information of episode progress from _get_info()
        """
        if self._round.phase is Phase.DECIDED:
            raise RuntimeError(
                "Episode is already completed! Call reset() to start a new one."
            )
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}.")

        action = int(action)
        if self._round.phase is Phase.SELECTING:
            self._round = select_initial_door(self._round, action, self.np_random)
        else:
            self._round = finalize_choice(self._round, action, self.tally)

        terminated = self._round.phase is Phase.DECIDED
        reward = 1.0 if terminated and self._round.won else 0.0

        self.render()
        return self._get_obs(), reward, terminated, False, self._get_info()

    def render(self):
        """ Handles the rendering functionality by composition

        Raises:
            ValueError: if the renderer has already been closed.

        Returns:
            np.ndarray | None: np.ndarray corresponds to render_mode=rgb_array,
              and None corresponds to human (renders in the designated PyGame instance)
        """
        if self.render_mode is None:
            return None

        if not self._renderer:
            raise ValueError("Renderer is closed, create a new environment to render again.")
        return self._renderer.render(self._round)

    def close(self):
        """Closes the environment, performing some basic cleanup of resources."""
        if self._renderer:
            self._renderer.close()
            self._renderer = None

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Private helpers                                  #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def _action_mask(self) -> np.ndarray:
        """Binary vector of the doors that can be clicked in the current phase."""
        mask = np.zeros(self.n_doors, dtype=np.int8)
        if self._round.phase is Phase.SELECTING:
            mask[:] = 1
        elif self._round.phase is Phase.REVEALED:
            mask[:] = 1
            mask[self._round.revealed_door] = 0
        return mask

    def _get_obs(self):
        """Returns the door states as currently visible to the player"""
        return np.asarray(self._round.observation(), dtype=np.int64)

    def _get_info(self):
        """Provides full information of the currently running round.

        Returns:
            dict: consisting of
              - which door hides the car,
              - the chosen and revealed doors,
              - the progress phase of the round,
              - and which doors may be clicked next.
        """
        return {
            "prize_door": self._round.prize_door,
            "selected_door": self._round.selected_door,
            "revealed_door": self._round.revealed_door,
            "phase": self._round.phase.name,
            "action_mask": self._action_mask(),
        }


# Register the environment to allow usage with `gym.make``
register(
    id="MontyHall-v0",
    entry_point="montyhall.environments.monty_hall.env:MontyHallEnv",
)
