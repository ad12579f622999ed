"""Shared fixtures for the gravity4 test suite."""

import random

import numpy as np
import pytest

from gravity4.debug import DebugLevel, debug
from gravity4.game.board import Board
from gravity4.game.rules import GameState
from gravity4.utils import AITier, GameMode, Gravity, GravityMode, Player

SYMBOLS = {'.': Player.EMPTY, 'X': Player.ONE, 'O': Player.TWO}


def board_from_diagram(diagram):
    """Board from rows of '.', 'X' (player ONE) and 'O' (player TWO), top row first."""
    rows = [line.replace(' ', '') for line in diagram]
    board = Board(len(rows), len(rows[0]))
    board.grid = np.array([[SYMBOLS[ch].value for ch in line] for line in rows], dtype=int)
    return board


@pytest.fixture
def make_board():
    return board_from_diagram


@pytest.fixture
def make_state():
    """Factory building a GameState from a diagram."""
    def _make(diagram, current_player=Player.ONE, gravity=Gravity.DOWN,
              gravity_mode=GravityMode.FIXED, ai_tier=AITier.EASY,
              game_mode=GameMode.HUMAN_VS_AI, turn_count=0):
        state = GameState(board_from_diagram(diagram), gravity_mode=gravity_mode,
                          ai_tier=ai_tier, game_mode=game_mode,
                          player_names=("Player 1", "AI"))
        state.current_player = current_player
        state.gravity = gravity
        state.turn_count = turn_count
        return state
    return _make


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep log output quiet and restore the shared debug manager after each test."""
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
