"""
minimax.py - Minimax with alpha-beta pruning for gravity4

This module provides the positional evaluator and the MinimaxPlayer used by
the hard AI tier.

The search maximizes for player TWO and minimizes for player ONE. Moves are
simulated with raw placements on the live board (no win/draw bookkeeping)
and undone through Board.placed, so the grid is restored on every exit path.
Gravity is held fixed for the whole search, even in reversing mode.
"""

from functools import lru_cache
from typing import Optional, Sequence, Tuple

import numpy as np

from gravity4.config import AI_SEARCH_DEPTH, SEARCH_SCORE_BOUND, WINDOW_SCORES
from gravity4.debug import debug
from gravity4.game.rules import GameState
from gravity4.utils import CONNECT_N, Direction, Player

# Score for a window holding n tokens of a single player, indexed by n
_SCORE_TABLE = np.zeros(CONNECT_N + 1, dtype=int)
for _count, _score in WINDOW_SCORES.items():
    _SCORE_TABLE[_count] = _score


@lru_cache(maxsize=None)
def window_indices(rows: int, cols: int) -> np.ndarray:
    """
    Flat grid indices of every CONNECT_N-cell window on a rows x cols board.

    Returns:
        Integer array of shape (num_windows, CONNECT_N)
    """
    windows = []
    for row in range(rows):
        for col in range(cols):
            for direction in Direction:
                dr, dc = direction.vector
                end_row = row + dr * (CONNECT_N - 1)
                end_col = col + dc * (CONNECT_N - 1)
                if not (0 <= end_row < rows and 0 <= end_col < cols):
                    continue
                windows.append([(row + dr * i) * cols + (col + dc * i)
                                for i in range(CONNECT_N)])
    return np.array(windows, dtype=np.intp).reshape(-1, CONNECT_N)


def evaluate_window(window: Sequence[int]) -> int:
    """
    Score a single window of cell values from player TWO's point of view.

    A window holding both players' tokens can never become a win and scores 0.
    """
    ai_count = sum(1 for cell in window if cell == Player.TWO.value)
    opp_count = sum(1 for cell in window if cell == Player.ONE.value)
    if ai_count and opp_count:
        return 0
    return int(_SCORE_TABLE[ai_count] - _SCORE_TABLE[opp_count])


def evaluate_position(grid: np.ndarray) -> int:
    """
    Sum of evaluate_window over every horizontal, vertical and diagonal window.

    Positive scores favour player TWO.
    """
    indices = window_indices(*grid.shape)
    if not len(indices):
        return 0

    windows = grid.ravel()[indices]
    ai_counts = np.count_nonzero(windows == Player.TWO.value, axis=1)
    opp_counts = np.count_nonzero(windows == Player.ONE.value, axis=1)

    ai_score = np.where(opp_counts == 0, _SCORE_TABLE[ai_counts], 0).sum()
    opp_score = np.where(ai_counts == 0, _SCORE_TABLE[opp_counts], 0).sum()
    return int(ai_score - opp_score)


def evaluate(state: GameState) -> int:
    return evaluate_position(state.board.grid)


class MinimaxPlayer:
    """
    Depth-limited minimax search with alpha-beta pruning.

    Columns are tried in ascending order and the first column reaching the
    best score is kept, so results are deterministic for a given board.
    Node values are clamped to +/-SEARCH_SCORE_BOUND: when every child
    scores beyond the bound, the node reports the bound and its first column.
    """

    def __init__(self, depth: int = AI_SEARCH_DEPTH, prune: bool = True):
        """
        Initialize the minimax player.

        Args:
            depth: Search depth in plies
            prune: Cut off branches with alpha-beta (False searches exhaustively)
        """
        self.depth = depth
        self.prune = prune
        self.nodes_evaluated = 0  # For performance tracking

    def get_move(self, state: GameState) -> Optional[int]:
        """
        Choose player TWO's move.

        Returns:
            Best column, or None if the search had no move to offer
        """
        self.nodes_evaluated = 0

        with debug.timed("minimax_search", "minimax"):
            score, column = self.search(state, self.depth, True,
                                        -SEARCH_SCORE_BOUND, SEARCH_SCORE_BOUND)

        debug.debug(f"Minimax depth {self.depth}: column {column}, score {score}, "
                    f"{self.nodes_evaluated} nodes", "minimax")
        return column

    def search(self, state: GameState, depth: int, maximizing: bool,
               alpha: float, beta: float) -> Tuple[float, Optional[int]]:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            state: Game whose board is searched in place
            depth: Remaining search depth
            maximizing: True when player TWO is to move
            alpha: Best score the maximizer can guarantee so far
            beta: Best score the minimizer can guarantee so far

        Returns:
            (score, best column); the column is None at leaves
        """
        self.nodes_evaluated += 1

        if depth == 0 or state.game_over:
            return evaluate(state), None

        board = state.board
        columns = board.legal_columns(state.gravity)
        if not columns:
            return 0, None

        mover = Player.TWO if maximizing else Player.ONE
        best_score = -SEARCH_SCORE_BOUND if maximizing else SEARCH_SCORE_BOUND
        best_column = columns[0]

        for column in columns:
            with board.placed(column, mover, state.gravity) as row:
                if row is None:
                    continue
                score, _ = self.search(state, depth - 1, not maximizing, alpha, beta)

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_column = column
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_column = column
                beta = min(beta, score)

            if self.prune and beta <= alpha:
                break

        return best_score, best_column


def minimax(state: GameState, depth: int = AI_SEARCH_DEPTH, maximizing: bool = True,
            alpha: float = -SEARCH_SCORE_BOUND,
            beta: float = SEARCH_SCORE_BOUND) -> Tuple[float, Optional[int]]:
    """Run one alpha-beta search from ``state`` and return (score, column)."""
    return MinimaxPlayer(depth).search(state, depth, maximizing, alpha, beta)
