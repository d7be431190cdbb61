"""
rules.py - Gymnasium environment for FlipFour

GravityFourEnv exposes a GameState through the Gymnasium ``reset``/``step``
interface. With ``opponent="heuristic"`` the agent plays player 1 and the
heuristic opponent answers as player 2 inside the same step.
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, Tuple, Optional, Union

from flipfour.ai.heuristic import HeuristicPlayer
from flipfour.debug import debug
from flipfour.errors import ColumnFull, InvalidState
from flipfour.game.state import GameState
from flipfour.utils import CellValue, DEFAULT_DIFFICULTY, get_difficulty, render_board_ascii


class GravityFourEnv(gym.Env):
    """
    FlipFour environment following the Gymnasium interface.

    Observations are the raw board grid (-1 blocked, 0 empty, 1/2 tokens).
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, difficulty: str = DEFAULT_DIFFICULTY, opponent: Optional[str] = None,
                 seed_tokens: bool = False, render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            difficulty: Difficulty tier selecting the board size
            opponent: None for self-play, "heuristic" for a built-in player 2
            seed_tokens: Pre-seed random tokens (self-play only)
            render_mode: Mode for rendering the environment
        """
        if opponent not in (None, "heuristic"):
            raise ValueError(f"Unknown opponent: {opponent}")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unknown render mode: {render_mode}")

        debug.debug(f"Initializing GravityFourEnv ({difficulty}, opponent={opponent})", "env")

        self.difficulty, settings = get_difficulty(difficulty)
        self.opponent = opponent
        self.seed_tokens = seed_tokens
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(settings.cols)
        self.observation_space = spaces.Box(
            low=CellValue.BLOCKED.value, high=CellValue.TWO.value,
            shape=(settings.rows, settings.cols), dtype=np.int8
        )

        self.state: Optional[GameState] = None
        self._opponent_player: Optional[HeuristicPlayer] = None

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """Start a new game and return the first observation."""
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")

        ai_player = CellValue.TWO.value if self.opponent else None
        self.state = GameState(
            "Agent", "Heuristic" if self.opponent else "Agent",
            self.difficulty,
            seed_tokens=self.seed_tokens and ai_player is None,
            ai_player=ai_player,
            rng=self.np_random,
        )
        if ai_player is not None:
            self._opponent_player = HeuristicPlayer(ai_player, rng=self.np_random)

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play ``action`` for the player to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.state is None:
            raise RuntimeError("Call reset() before step()")

        mover = self.state.current_player
        try:
            self.state.submit_column(int(action))
        except (ColumnFull, InvalidState) as e:
            debug.warning(f"Invalid action {action}: {e.reason}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if not self.state.game_over and self._opponent_player is not None:
            reply = self._opponent_player.choose_column(self.state)
            self.state.submit_column(reply)
            debug.trace(f"Opponent replied with column {reply}", "env")

        reward = self.reward_step
        terminated = self.state.game_over
        if terminated:
            if self.state.winner == 0:
                reward = self.reward_draw
            elif self.state.winner == mover:
                reward = self.reward_win
            else:
                reward = self.reward_lose
            debug.info(f"Episode finished, winner {self.state.winner}, reward {reward}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode is None or self.state is None:
            return None

        frame = render_board_ascii(self.state.board.grid, self.state.gravity_down, self.state.winning_line)
        if self.render_mode == "human":
            print(frame)
            return None
        return frame

    def _get_observation(self) -> np.ndarray:
        return self.state.board.get_state()

    def _get_info(self) -> Dict:
        legal = [] if self.state.game_over else self.state.board.legal_columns()
        return {
            'valid_moves': legal,
            'num_valid_moves': len(legal),
            'current_player': self.state.current_player,
            'turn_count': self.state.turn_count,
            'gravity_down': self.state.gravity_down,
            'winner': self.state.winner,
            'last_move': self.state.last_move,
            'winning_line': list(self.state.winning_line),
        }
