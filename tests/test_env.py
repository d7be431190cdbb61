import numpy as np
import pytest

from flipfour.game.rules import GravityFourEnv


def test_reset_returns_board_observation():
    env = GravityFourEnv(difficulty="normal")
    obs, info = env.reset(seed=0)

    assert obs.shape == (6, 9)
    assert obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert env.action_space.n == 9
    assert int((obs == -1).sum()) == 5
    assert info["turn_count"] == 0
    assert info["gravity_down"] is True


def test_reset_with_seed_is_reproducible():
    env = GravityFourEnv(difficulty="hard")
    first, _ = env.reset(seed=42)
    second, _ = env.reset(seed=42)
    np.testing.assert_array_equal(first, second)


def test_step_plays_a_token():
    env = GravityFourEnv()
    env.reset(seed=1)
    action = env.state.board.legal_columns()[0]

    obs, reward, terminated, truncated, info = env.step(action)

    assert reward == env.reward_step
    assert not terminated and not truncated
    assert info["turn_count"] == 1
    assert info["current_player"] == 2
    assert int(np.isin(obs, (1, 2)).sum()) == 1


@pytest.mark.parametrize("action", [-1, 7])
def test_invalid_action_is_penalised_without_changing_state(action):
    env = GravityFourEnv()
    before, _ = env.reset(seed=3)

    obs, reward, terminated, truncated, info = env.step(action)

    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info["invalid_move"] is True
    np.testing.assert_array_equal(obs, before)


def test_heuristic_opponent_replies_in_the_same_step():
    env = GravityFourEnv(opponent="heuristic")
    env.reset(seed=4)
    action = env.state.board.legal_columns()[0]

    _, _, terminated, _, info = env.step(action)

    assert not terminated
    assert info["turn_count"] == 2
    assert info["current_player"] == 1


def test_random_episodes_terminate():
    rng = np.random.default_rng(9)
    for opponent in (None, "heuristic"):
        env = GravityFourEnv(difficulty="easy", opponent=opponent)
        _, info = env.reset(seed=5)
        terminated = False
        while not terminated:
            _, reward, terminated, truncated, info = env.step(int(rng.choice(info["valid_moves"])))
            assert not truncated
        assert reward in (env.reward_win, env.reward_lose, env.reward_draw)
        assert info["valid_moves"] == []


def test_ascii_render():
    env = GravityFourEnv(render_mode="ascii")
    env.reset(seed=0)
    frame = env.render()
    assert "#" in frame
    assert frame.splitlines()[0].strip().startswith("v")


def test_unknown_opponent_is_rejected():
    with pytest.raises(ValueError):
        GravityFourEnv(opponent="minimax")
