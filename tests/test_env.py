import gymnasium as gym
import numpy as np
import pytest

from montyhall.environments.monty_hall.env import MontyHallEnv
from montyhall.environments.monty_hall.state import DoorState, Phase


def test_reset_hides_everything():
    env = MontyHallEnv(seed=0)
    obs, info = env.reset(seed=0)
    assert obs.tolist() == [DoorState.CLOSED] * 3
    assert info["phase"] == "SELECTING"
    assert info["action_mask"].tolist() == [1, 1, 1]
    assert info["prize_door"] in (0, 1, 2)


def test_round_plays_in_two_steps():
    env = MontyHallEnv(seed=3)
    _, info = env.reset(seed=3)
    prize = info["prize_door"]

    obs, reward, terminated, truncated, info = env.step(0)
    revealed = info["revealed_door"]
    assert not terminated and not truncated and reward == 0.0
    assert obs[0] == DoorState.CHOSEN
    assert obs[revealed] == DoorState.GOAT
    assert revealed not in (0, prize)
    assert info["action_mask"][revealed] == 0

    # Clicking the open door does nothing
    obs_again, reward, terminated, _, info = env.step(revealed)
    assert not terminated and reward == 0.0
    assert np.array_equal(obs_again, obs)
    assert info["phase"] == "REVEALED"

    switch_to = env.round_state.remaining_door
    obs, reward, terminated, _, info = env.step(switch_to)
    assert terminated
    assert reward == (1.0 if switch_to == prize else 0.0)
    assert obs[prize] == DoorState.CAR
    assert info["action_mask"].tolist() == [0, 0, 0]
    assert env.tally.switch_total == 1

    with pytest.raises(RuntimeError):
        env.step(0)


def test_invalid_action_raises():
    env = MontyHallEnv(seed=0)
    with pytest.raises(ValueError):
        env.step(3)


def test_unsupported_render_mode():
    with pytest.raises(ValueError):
        MontyHallEnv(render_mode="ansi")


def test_render_without_mode_returns_none():
    assert MontyHallEnv().render() is None


def test_switching_wins_two_thirds_through_gym_make():
    env = gym.make("MontyHall-v0")
    env.reset(seed=11)
    wins = 0
    episodes = 3000
    for _ in range(episodes):
        env.reset()
        env.step(int(env.action_space.sample()))
        state = env.unwrapped.round_state
        assert state.phase is Phase.REVEALED
        _, reward, terminated, _, _ = env.step(state.remaining_door)
        assert terminated
        wins += reward
    env.close()
    assert abs(wins / episodes - 2 / 3) < 0.04
