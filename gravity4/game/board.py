"""
board.py - Grid representation for gravity4

This module implements the Board class: a rows x cols numpy grid of cell
states with gravity-aware helpers for finding where a token lands, which
columns can still take a token, and a scoped place/undo guard used by the
AI when it simulates moves.
"""

import random
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

import numpy as np

from gravity4.debug import debug
from gravity4.utils import Gravity, Player, is_valid_position, render_board_ascii


class Board:
    """
    A Connect Four grid of arbitrary positive size.

    The board holds no turn or gravity state of its own; every gravity-aware
    method takes the direction to apply.
    """

    def __init__(self, rows: int, cols: int):
        """
        Create an empty board.

        Args:
            rows: Number of rows (>= 1)
            cols: Number of columns (>= 1)

        Raises:
            ValueError: If either dimension is not positive
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"board dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.reset()

    def reset(self):
        """Empty every cell."""
        self.grid = np.zeros((self.rows, self.cols), dtype=int)

    def copy(self) -> 'Board':
        new_board = Board(self.rows, self.cols)
        new_board.grid = self.grid.copy()
        return new_board

    def in_bounds(self, row: int, col: int) -> bool:
        return is_valid_position(self.grid, row, col)

    def get(self, row: int, col: int) -> Player:
        return Player(int(self.grid[row, col]))

    def place(self, row: int, col: int, player: Player):
        self.grid[row, col] = player.value

    def clear(self, row: int, col: int):
        self.grid[row, col] = Player.EMPTY.value

    def entry_row(self, gravity: Gravity) -> int:
        """Row through which tokens enter a column under ``gravity``."""
        return 0 if gravity == Gravity.DOWN else self.rows - 1

    def is_column_open(self, col: int, gravity: Gravity) -> bool:
        """A column is open (to the AI, and for draw detection) while its entry cell is empty."""
        if not (0 <= col < self.cols):
            return False
        return self.grid[self.entry_row(gravity), col] == Player.EMPTY.value

    def legal_columns(self, gravity: Gravity) -> List[int]:
        """Open columns in ascending order."""
        entry = self.grid[self.entry_row(gravity)]
        return [col for col in range(self.cols) if entry[col] == Player.EMPTY.value]

    def is_full(self, gravity: Gravity) -> bool:
        """True when every entry cell under ``gravity`` is occupied."""
        return not self.legal_columns(gravity)

    def landing_row(self, col: int, gravity: Gravity) -> Optional[int]:
        """
        Find the row a token dropped into ``col`` would occupy.

        The column is scanned from the far end toward the entry row and the
        first empty cell wins. A column whose entry cell is taken still takes
        a token while any cell behind it is empty.

        Returns:
            The landing row, or None if the column is out of range or full
        """
        if not (0 <= col < self.cols):
            return None

        if gravity == Gravity.DOWN:
            scan = range(self.rows - 1, -1, -1)
        else:
            scan = range(self.rows)

        for row in scan:
            if self.grid[row, col] == Player.EMPTY.value:
                return row
        return None

    @contextmanager
    def placed(self, col: int, player: Player, gravity: Gravity) -> Iterator[Optional[int]]:
        """
        Temporarily drop ``player``'s token into ``col``.

        Yields the landing row (None if the column is full, in which case
        nothing is placed). The cell is emptied again on every exit path.
        """
        row = self.landing_row(col, gravity)
        if row is None:
            yield None
            return

        self.grid[row, col] = player.value
        try:
            yield row
        finally:
            self.grid[row, col] = Player.EMPTY.value

    def empty_cells(self) -> List[Tuple[int, int]]:
        rows, cols = np.nonzero(self.grid == Player.EMPTY.value)
        return list(zip(rows.tolist(), cols.tolist()))

    def prefill(self, count: int, rng: random.Random):
        """
        Seed ``count`` distinct empty cells with random-coloured tokens.

        Cells are chosen uniformly among empty cells, colours uniformly
        between the two players. Gravity is ignored: prefilled tokens may
        float.

        Raises:
            ValueError: If ``count`` is negative or exceeds the empty cells
        """
        empty = self.empty_cells()
        if count < 0 or count > len(empty):
            raise ValueError(f"cannot prefill {count} cells on a board with {len(empty)} empty cells")

        for row, col in rng.sample(empty, count):
            self.grid[row, col] = rng.choice((Player.ONE, Player.TWO)).value
        debug.debug(f"Prefilled {count} cells", "board")

    def to_list(self) -> List[List[int]]:
        """Plain nested lists of cell values, for renderers."""
        return self.grid.tolist()

    def get_state(self) -> np.ndarray:
        return self.grid.copy()

    def render(self, highlight=(), gravity: Optional[Gravity] = None) -> str:
        return render_board_ascii(self.grid, highlight, gravity)

    def __str__(self) -> str:
        return self.render()
