"""
env.py - Gymnasium environment for gravity4

The agent plays player ONE; the built-in computer opponent of the chosen
tier answers every agent move as player TWO.
"""

import random
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from gravity4.ai.strategy import request_ai_move
from gravity4.config import get_preset
from gravity4.debug import debug
from gravity4.game.rules import GameState, apply_move, new_game, winning_line
from gravity4.utils import AITier, GameMode, GravityMode, Player


class GravityConnectFourEnv(gym.Env):
    """
    Connect Four with optional gravity reversal, following the Gymnasium API.

    Observations are the raw grid (0 empty, 1 agent, 2 opponent).
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, difficulty: str = "easy",
                 gravity_mode: GravityMode = GravityMode.FIXED,
                 ai_tier: AITier = AITier.EASY,
                 render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            difficulty: Board preset label
            gravity_mode: FIXED or REVERSING
            ai_tier: Strength of the opponent
            render_mode: 'ascii', 'human' or None
        """
        self.preset = get_preset(difficulty)
        self.gravity_mode = gravity_mode
        self.ai_tier = ai_tier
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.preset.cols)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.preset.rows, self.preset.cols), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

        self._rng = random.Random()
        self.state: GameState = self._new_state()

    def _new_state(self) -> GameState:
        return new_game(self.preset.rows, self.preset.cols, self.preset.prefill,
                        gravity_mode=self.gravity_mode, ai_tier=self.ai_tier,
                        game_mode=GameMode.HUMAN_VS_AI, rng=self._rng)

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(int(self.np_random.integers(2 ** 31)))

        self.state = self._new_state()
        debug.debug("Environment reset", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Play the agent's column, then the opponent's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if not apply_move(self.state, int(action)):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if not self.state.game_over:
            request_ai_move(self.state, self._rng)

        reward = self.reward_step
        terminated = self.state.game_over
        if terminated:
            if self.state.winner == Player.ONE:
                reward = self.reward_win
            elif self.state.winner == Player.TWO:
                reward = self.reward_lose
            else:
                reward = self.reward_draw
            debug.info(f"Episode over: winner={self.state.winner}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.state.render()
        if self.render_mode == "human":
            print(self.state.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.state.board.grid.astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.state.legal_columns()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.state.current_player.value,
            'gravity': self.state.gravity.name,
            'turn_count': self.state.turn_count,
            'winning_line': winning_line(self.state) or [],
            'last_move': self.state.last_move,
        }
