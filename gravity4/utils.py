"""
utils.py - Shared constants, enumerations and grid helpers for gravity4

This module holds the cell/player, gravity and AI tier enumerations and the
board-size independent helpers used by the engine and the AI: bounds checks,
the four-direction win scan and ASCII rendering.
"""

from enum import Enum, auto
from typing import Iterable, Optional, Tuple

import numpy as np

CONNECT_N = 4  # Number of pieces in a row to win


class Player(Enum):
    """Cell states; ONE and TWO double as the two players."""
    EMPTY = 0
    ONE = 1    # First player (human side)
    TWO = 2    # Second player (AI side in human-vs-AI games)

    def other(self) -> 'Player':
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        return "O"


class Gravity(Enum):
    """Direction tokens travel when dropped into a column."""
    DOWN = auto()  # toward higher row indices
    UP = auto()

    def flipped(self) -> 'Gravity':
        return Gravity.UP if self == Gravity.DOWN else Gravity.DOWN


class GravityMode(Enum):
    """Whether gravity stays fixed or reverses periodically."""
    FIXED = "normal"
    REVERSING = "inverse"

    @classmethod
    def from_label(cls, label: Optional[str]) -> 'GravityMode':
        return cls.REVERSING if label == cls.REVERSING.value else cls.FIXED


class GameMode(Enum):
    HUMAN_VS_HUMAN = "human"
    HUMAN_VS_AI = "ai"

    @classmethod
    def from_label(cls, label: Optional[str]) -> 'GameMode':
        return cls.HUMAN_VS_AI if label == cls.HUMAN_VS_AI.value else cls.HUMAN_VS_HUMAN


class AITier(Enum):
    """Strength of the computer opponent."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def from_label(cls, label: Optional[str]) -> 'AITier':
        for tier in cls:
            if tier.value == label:
                return tier
        return cls.EASY


class Direction(Enum):
    """Axes scanned for four-in-a-row, in scan order."""
    HORIZONTAL = (0, 1)
    VERTICAL = (1, 0)
    DIAGONAL_DOWN = (1, 1)   # top-left to bottom-right
    DIAGONAL_UP = (1, -1)    # bottom-left to top-right, walked from its upper end

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """Check if (row, col) lies on the grid."""
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def count_run(grid: np.ndarray, row: int, col: int, dr: int, dc: int, value: int) -> int:
    """Count cells equal to ``value`` stepping from (row, col) by (dr, dc), exclusive of the start."""
    count = 0
    r, c = row + dr, col + dc
    while is_valid_position(grid, r, c) and grid[r, c] == value:
        count += 1
        r += dr
        c += dc
    return count


def check_win_at_position(grid: np.ndarray, row: int, col: int) -> bool:
    """
    Check whether the piece at (row, col) is part of a four-in-a-row.

    The player is read from the cell itself, so this works for real moves
    and for simulated placements alike.

    Args:
        grid: The game grid
        row: Row index of the piece
        col: Column index of the piece

    Returns:
        True if the piece completes CONNECT_N or more in any direction
    """
    player_value = grid[row, col]
    if player_value == Player.EMPTY.value:
        return False

    for direction in Direction:
        dr, dc = direction.vector
        count = 1
        count += count_run(grid, row, col, dr, dc, player_value)
        count += count_run(grid, row, col, -dr, -dc, player_value)
        if count >= CONNECT_N:
            return True

    return False


def render_board_ascii(grid: np.ndarray,
                       highlight: Iterable[Tuple[int, int]] = (),
                       gravity: Optional[Gravity] = None) -> str:
    """
    Render the grid as ASCII art.

    Args:
        grid: The game grid
        highlight: Cells drawn in brackets (e.g. the winning line)
        gravity: When given, an arrow row shows where tokens enter

    Returns:
        Multi-line string with column numbers underneath
    """
    rows, cols = grid.shape
    marked = set(highlight)
    width = cols * 3

    lines = []
    if gravity == Gravity.DOWN:
        lines.append(" " + " v " * cols)
    lines.append("+" + "-" * width + "+")
    for row in range(rows):
        cells = []
        for col in range(cols):
            symbol = str(Player(int(grid[row, col])))
            cells.append(f"[{symbol}]" if (row, col) in marked else f" {symbol} ")
        lines.append("|" + "".join(cells) + "|")
    lines.append("+" + "-" * width + "+")
    if gravity == Gravity.UP:
        lines.append(" " + " ^ " * cols)
    lines.append(" " + "".join(f"{col:^3}" for col in range(cols)))

    return "\n".join(lines)
