"""
strategy.py - Computer opponent for gravity4

Three tiers are available:
- EASY plays a uniformly random legal column
- MEDIUM takes an immediate win, else blocks an immediate loss, else plays randomly
- HARD searches with minimax (see minimax.py)

The computer always plays as player TWO.
"""

import random
from typing import Callable, Dict, List, Optional

from gravity4.ai.minimax import MinimaxPlayer
from gravity4.config import AI_SEARCH_DEPTH
from gravity4.debug import debug
from gravity4.game.rules import GameState, apply_move, has_win_at
from gravity4.utils import AITier, Player

AI_PLAYER = Player.TWO


def legal_columns(state: GameState) -> List[int]:
    """Columns open under the current gravity, ascending."""
    return state.board.legal_columns(state.gravity)


def is_winning_move(state: GameState, col: int, player: Player) -> bool:
    """Would ``player`` complete four in a row by dropping into ``col``?"""
    with state.board.placed(col, player, state.gravity) as row:
        if row is None:
            return False
        return has_win_at(state, row, col)


def easy_move(state: GameState, rng: random.Random) -> Optional[int]:
    columns = legal_columns(state)
    if not columns:
        return None
    return rng.choice(columns)


def medium_move(state: GameState, rng: random.Random) -> Optional[int]:
    """One-ply lookahead: win if possible, otherwise block, otherwise random."""
    columns = legal_columns(state)
    if not columns:
        return None

    for col in columns:
        if is_winning_move(state, col, AI_PLAYER):
            debug.debug(f"Medium AI takes the win in column {col}", "ai")
            return col

    for col in columns:
        if is_winning_move(state, col, AI_PLAYER.other()):
            debug.debug(f"Medium AI blocks column {col}", "ai")
            return col

    return rng.choice(columns)


def hard_move(state: GameState, rng: random.Random) -> Optional[int]:
    columns = legal_columns(state)
    if not columns:
        return None

    column = MinimaxPlayer(AI_SEARCH_DEPTH).get_move(state)
    if column is None:
        debug.warning("Minimax returned no column, falling back to the first legal one", "ai")
        return columns[0]
    return column


STRATEGIES: Dict[AITier, Callable[[GameState, random.Random], Optional[int]]] = {
    AITier.EASY: easy_move,
    AITier.MEDIUM: medium_move,
    AITier.HARD: hard_move,
}


def choose_move(state: GameState, tier: AITier,
                rng: Optional[random.Random] = None) -> Optional[int]:
    """
    Pick player TWO's column for ``tier`` without playing it.

    Args:
        state: Current game (left unchanged)
        tier: AI strength
        rng: Random source for the random tiers

    Returns:
        Column index, or None if no column is open
    """
    column = STRATEGIES[tier](state, rng or random.Random())
    debug.debug(f"{tier.name} AI chose column {column}", "ai")
    return column


def request_ai_move(state: GameState, rng: Optional[random.Random] = None) -> Optional[int]:
    """
    Let the computer play its turn.

    Only acts when the game is human vs AI, player TWO is to move and the
    game is not over.

    Returns:
        The column played, or None if nothing was played
    """
    if not state.is_ai_turn:
        debug.debug("AI move requested out of turn, ignoring", "ai")
        return None

    column = choose_move(state, state.ai_tier, rng)
    if column is None:
        debug.info("AI has no legal move", "ai")
        return None

    if not apply_move(state, column):
        debug.error(f"AI chose column {column} but the move was rejected", "ai")
        return None
    return column
