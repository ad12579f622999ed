"""
gravity4.game - Core game mechanics for gravity4

This package contains the board representation, the game state and the
move/win/draw rules.
"""

from gravity4.game.board import Board
from gravity4.game.rules import (GameState, apply_move, has_win_at, is_draw,
                                 new_game, winning_line)

__all__ = ['Board', 'GameState', 'apply_move', 'has_win_at', 'is_draw',
           'new_game', 'winning_line']
