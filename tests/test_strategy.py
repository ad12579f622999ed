import random

import numpy as np
import pytest

from gravity4.ai import strategy
from gravity4.ai.strategy import (choose_move, easy_move, hard_move, is_winning_move,
                                  legal_columns, medium_move, request_ai_move)
from gravity4.utils import AITier, GameMode, Gravity, Player

# TWO (O) can win in column 3, ONE (X) could win in column 6
WIN_AND_BLOCK = [
    ".......",
    ".......",
    ".......",
    "......X",
    "......X",
    "OOO...X",
]

# ONE (X) threatens column 6; TWO's row-3 three cannot be completed this move
BLOCK_ONLY = [
    ".......",
    ".......",
    ".......",
    "OOO...X",
    "XOX...X",
    "OXX...X",
]


class TestLegalColumns:
    def test_ascending_and_gravity_aware(self, make_state):
        state = make_state([
            "X.O.",
            "....",
            ".X.O",
        ])
        assert legal_columns(state) == [1, 3]
        state.gravity = Gravity.UP
        assert legal_columns(state) == [0, 2]

    def test_is_winning_move_restores_board(self, make_state):
        state = make_state(WIN_AND_BLOCK)
        before = state.board.get_state()
        assert is_winning_move(state, 3, Player.TWO)
        assert not is_winning_move(state, 3, Player.ONE)
        assert is_winning_move(state, 6, Player.ONE)
        assert np.array_equal(state.board.grid, before)


class TestEasy:
    def test_returns_legal_column(self, make_state):
        state = make_state([
            "X.X.X",
            ".....",
        ])
        for seed in range(20):
            assert easy_move(state, random.Random(seed)) in (1, 3)

    def test_none_when_board_full(self, make_state):
        state = make_state(["XO", "OX"])
        assert easy_move(state, random.Random(0)) is None
        assert choose_move(state, AITier.EASY) is None


class TestMedium:
    def test_prefers_own_win_over_block(self, make_state, rng):
        state = make_state(WIN_AND_BLOCK, current_player=Player.TWO)
        assert medium_move(state, rng) == 3

    def test_blocks_when_no_win_available(self, make_state, rng):
        state = make_state(BLOCK_ONLY, current_player=Player.TWO)
        assert not any(is_winning_move(state, col, Player.TWO) for col in legal_columns(state))
        assert medium_move(state, rng) == 6

    def test_blocks_under_reversed_gravity(self, make_state, rng):
        # with gravity UP, ONE's column-2 stack grows toward row 0
        state = make_state([
            ".......",
            ".......",
            ".......",
            "..X....",
            "..X....",
            "O.X..O.",
        ], gravity=Gravity.UP, current_player=Player.TWO)
        assert medium_move(state, rng) is not None
        assert not is_winning_move(state, 2, Player.ONE)

        state = make_state([
            "..X....",
            "..X....",
            "..X....",
            ".......",
            ".......",
            "O....O.",
        ], gravity=Gravity.UP, current_player=Player.TWO)
        assert medium_move(state, rng) == 2

    def test_falls_back_to_random_legal_column(self, make_state):
        state = make_state([
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "X.....O",
        ], current_player=Player.TWO)
        picks = {medium_move(state, random.Random(seed)) for seed in range(40)}
        assert picks <= set(range(7))
        assert len(picks) > 1


class TestHard:
    @pytest.mark.parametrize("gravity, diagram, winning_col", [
        (Gravity.DOWN, [
            ".......",
            ".......",
            ".......",
            ".......",
            "......X",
            "OOO..XX",
        ], 3),
        (Gravity.DOWN, [
            ".......",
            ".......",
            ".......",
            "...O...",
            "X..O...",
            "X..O..X",
        ], 3),
        (Gravity.UP, [
            "X..O..X",
            "X..O...",
            "...O...",
            ".......",
            ".......",
            ".......",
        ], 3),
    ])
    def test_takes_immediate_win(self, make_state, gravity, diagram, winning_col):
        state = make_state(diagram, current_player=Player.TWO, gravity=gravity,
                           ai_tier=AITier.HARD)
        assert request_ai_move(state) == winning_col
        assert state.game_over
        assert state.winner == Player.TWO

    def test_blocks_immediate_loss(self, make_state):
        state = make_state([
            ".......",
            ".......",
            ".......",
            ".......",
            "O......",
            "OO..XXX",
        ], current_player=Player.TWO, ai_tier=AITier.HARD)
        assert choose_move(state, AITier.HARD) == 3

    def test_search_leaves_state_untouched(self, make_state):
        state = make_state(BLOCK_ONLY, current_player=Player.TWO)
        before = state.board.get_state()
        hard_move(state, random.Random(0))
        assert np.array_equal(state.board.grid, before)
        assert state.turn_count == 0
        assert state.current_player == Player.TWO

    def test_falls_back_to_first_legal_column(self, make_state, monkeypatch):
        monkeypatch.setattr(strategy.MinimaxPlayer, "get_move", lambda self, state: None)
        state = make_state([
            "X.....",
            "O.....",
        ])
        assert hard_move(state, random.Random(0)) == 1

    def test_none_when_board_full(self, make_state):
        assert hard_move(make_state(["XO", "OX"]), random.Random(0)) is None


class TestRequestAIMove:
    def test_plays_when_due(self, make_state, rng):
        state = make_state(WIN_AND_BLOCK, current_player=Player.TWO, ai_tier=AITier.MEDIUM)
        assert request_ai_move(state, rng) == 3
        assert state.turn_count == 1
        assert state.last_move == (5, 3)
        assert state.current_player == Player.ONE

    def test_ignored_on_human_turn(self, make_state):
        state = make_state(WIN_AND_BLOCK, current_player=Player.ONE)
        assert request_ai_move(state) is None
        assert state.turn_count == 0

    def test_ignored_in_human_vs_human(self, make_state):
        state = make_state(WIN_AND_BLOCK, current_player=Player.TWO,
                           game_mode=GameMode.HUMAN_VS_HUMAN)
        assert request_ai_move(state) is None

    def test_ignored_after_game_over(self, make_state):
        state = make_state(WIN_AND_BLOCK, current_player=Player.TWO)
        state.game_over = True
        assert request_ai_move(state) is None

    def test_none_without_legal_moves(self, make_state):
        state = make_state(["XO", "OX"], current_player=Player.TWO)
        assert request_ai_move(state) is None
        assert state.turn_count == 0

    @pytest.mark.parametrize("tier", list(AITier))
    def test_every_tier_plays_a_legal_column(self, make_state, tier, rng):
        state = make_state(BLOCK_ONLY, current_player=Player.TWO, ai_tier=tier)
        legal = legal_columns(state)
        column = request_ai_move(state, rng)
        assert column in legal
        assert state.turn_count == 1
