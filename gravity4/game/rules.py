"""
rules.py - Game state and move sequencing for gravity4

This module provides:
1. GameState, the full state of one game
2. new_game, which builds a GameState and applies the random prefill
3. apply_move, the only state transition of real play (landing, periodic
   gravity reversal, win/draw detection, turn hand-over)
4. The win/draw detector used by apply_move and by renderers

All functions take the state explicitly; nothing here keeps global state.
"""

import random
from typing import List, Optional, Tuple

from gravity4.config import AI_PLAYER_NAME, DEFAULT_PLAYER_NAMES, GRAVITY_FLIP_INTERVAL
from gravity4.debug import debug
from gravity4.game.board import Board
from gravity4.utils import (CONNECT_N, AITier, Direction, GameMode, Gravity, GravityMode,
                            Player, check_win_at_position)


class GameState:
    """
    Mutable state of one game.

    Attributes:
        board: The grid
        current_player: Player to move next
        winner: Winning player, or None
        game_over: True once the game has been won or drawn
        last_move: (row, col) of the last accepted move, or None
        turn_count: Number of accepted moves (prefill excluded)
        gravity: Direction tokens currently travel
        gravity_mode: FIXED or REVERSING
        prefill: Number of tokens seeded before play
        ai_tier: Strength of the computer opponent
        game_mode: Whether player TWO is the computer
        player_names: Display labels for ONE and TWO
    """

    def __init__(self, board: Board,
                 gravity_mode: GravityMode = GravityMode.FIXED,
                 ai_tier: AITier = AITier.EASY,
                 game_mode: GameMode = GameMode.HUMAN_VS_HUMAN,
                 prefill: int = 0,
                 player_names: Tuple[str, str] = DEFAULT_PLAYER_NAMES):
        self.board = board
        self.current_player = Player.ONE
        self.winner: Optional[Player] = None
        self.game_over = False
        self.last_move: Optional[Tuple[int, int]] = None
        self.turn_count = 0
        self.gravity = Gravity.DOWN
        self.gravity_mode = gravity_mode
        self.prefill = prefill
        self.ai_tier = ai_tier
        self.game_mode = game_mode
        self.player_names = player_names

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def is_ai_turn(self) -> bool:
        """True when the computer (player TWO) should move next."""
        return (self.game_mode == GameMode.HUMAN_VS_AI
                and self.current_player == Player.TWO
                and not self.game_over)

    def legal_columns(self) -> List[int]:
        return self.board.legal_columns(self.gravity)

    def player_name(self, player: Player) -> str:
        return self.player_names[0] if player == Player.ONE else self.player_names[1]

    def render(self) -> str:
        return self.board.render(winning_line(self) or (), self.gravity)

    def __str__(self) -> str:
        return self.render()


def new_game(rows: int, cols: int, prefill: int = 0,
             gravity_mode: GravityMode = GravityMode.FIXED,
             ai_tier: AITier = AITier.EASY,
             game_mode: GameMode = GameMode.HUMAN_VS_HUMAN,
             player_names: Tuple[str, str] = DEFAULT_PLAYER_NAMES,
             rng: Optional[random.Random] = None) -> GameState:
    """
    Build a fresh game.

    Gravity starts DOWN in both gravity modes. ``prefill`` distinct cells are
    seeded with random colours before play; they are not moves.

    Args:
        rows: Board rows
        cols: Board columns
        prefill: Number of random tokens to seed
        gravity_mode: FIXED or REVERSING
        ai_tier: Computer opponent strength
        game_mode: Human vs human or human vs computer
        player_names: Display labels for ONE and TWO
        rng: Random source (defaults to a freshly seeded one)

    Returns:
        The new GameState

    Raises:
        ValueError: For non-positive dimensions or a prefill that does not fit
    """
    board = Board(rows, cols)
    board.prefill(prefill, rng or random.Random())

    name_one, name_two = player_names
    if game_mode == GameMode.HUMAN_VS_AI and not name_two:
        name_two = AI_PLAYER_NAME

    state = GameState(board, gravity_mode=gravity_mode, ai_tier=ai_tier,
                      game_mode=game_mode, prefill=prefill,
                      player_names=(name_one, name_two))
    debug.info(f"New {rows}x{cols} game, prefill={prefill}, mode={gravity_mode.value}, "
               f"{game_mode.value} opponent, tier={ai_tier.value}", "rules")
    return state


def apply_move(state: GameState, col: int) -> bool:
    """
    Drop the current player's token into ``col``.

    Rejected moves (column out of range or full, or game already over)
    leave the state untouched.

    Args:
        state: Game to mutate
        col: Column index

    Returns:
        True if the move was accepted, False otherwise
    """
    if state.game_over:
        debug.debug(f"Rejected move {col}: game is over", "rules")
        return False

    if not (0 <= col < state.cols):
        debug.debug(f"Rejected move {col}: out of range", "rules")
        return False

    row = state.board.landing_row(col, state.gravity)
    if row is None:
        debug.debug(f"Rejected move {col}: column full under gravity {state.gravity.name}", "rules")
        return False

    player = state.current_player
    state.board.place(row, col, player)
    state.last_move = (row, col)
    state.turn_count += 1
    debug.trace(f"Player {player} placed at ({row}, {col}), turn {state.turn_count}", "rules")

    if (state.gravity_mode == GravityMode.REVERSING
            and state.turn_count % GRAVITY_FLIP_INTERVAL == 0):
        state.gravity = state.gravity.flipped()
        debug.info(f"Gravity reversed to {state.gravity.name} after turn {state.turn_count}", "rules")

    if has_win_at(state, row, col):
        state.winner = player
        state.game_over = True
        debug.info(f"Player {player} wins on turn {state.turn_count}", "rules")
    elif is_draw(state):
        state.game_over = True
        debug.info(f"Draw on turn {state.turn_count}", "rules")

    state.current_player = player.other()
    return True


def has_win_at(state: GameState, row: int, col: int) -> bool:
    """True if the token at (row, col) is part of four or more in a row."""
    return check_win_at_position(state.board.grid, row, col)


def is_draw(state: GameState) -> bool:
    """True when no column can take a token under the current gravity."""
    return state.board.is_full(state.gravity)


def winning_line(state: GameState) -> Optional[List[Tuple[int, int]]]:
    """
    Recover the four cells of the winning line, for highlighting.

    Cells are scanned row-major; from each of the winner's cells the
    directions are tried in Direction order, and the first run of CONNECT_N
    matching cells is returned. Longer runs report their first four cells.

    Returns:
        List of CONNECT_N (row, col) positions, or None if nobody has won
    """
    if state.winner is None:
        return None

    grid = state.board.grid
    value = state.winner.value
    for r in range(state.rows):
        for c in range(state.cols):
            if grid[r, c] != value:
                continue
            for direction in Direction:
                dr, dc = direction.vector
                positions = [(r, c)]
                for i in range(1, CONNECT_N):
                    r2, c2 = r + dr * i, c + dc * i
                    if not state.board.in_bounds(r2, c2) or grid[r2, c2] != value:
                        break
                    positions.append((r2, c2))
                if len(positions) == CONNECT_N:
                    return positions
    return None
