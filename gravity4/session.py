"""
session.py - Lock-guarded game session for gravity4 callers

A GameSession owns exactly one GameState and serializes every call that
reads or mutates it. Front ends (terminal, web handlers, environments) hold
a session instead of sharing a global game: a human move and the AI's
deferred reply go through the same lock and can never interleave.
"""

import random
import threading
from typing import Any, Dict, NamedTuple, Optional

from gravity4.ai.strategy import request_ai_move
from gravity4.config import (AI_DELAY_MS, AI_PLAYER_NAME, DEFAULT_DIFFICULTY,
                             DEFAULT_PLAYER_NAMES, get_preset)
from gravity4.debug import debug
from gravity4.game.rules import GameState, apply_move, new_game, winning_line
from gravity4.utils import AITier, GameMode, GravityMode, Player


class GameSettings(NamedTuple):
    """Everything needed to (re)build a game."""
    difficulty: str = DEFAULT_DIFFICULTY
    gravity_mode: GravityMode = GravityMode.FIXED
    game_mode: GameMode = GameMode.HUMAN_VS_HUMAN
    ai_tier: AITier = AITier.EASY
    name_one: str = ""
    name_two: str = ""

    @classmethod
    def from_labels(cls, difficulty: Optional[str] = None, mode: Optional[str] = None,
                    game_mode: Optional[str] = None, ai_level: Optional[str] = None,
                    name_one: str = "", name_two: str = "") -> 'GameSettings':
        """
        Build settings from loose string labels such as form or query values.

        Unknown labels fall back to the defaults: fixed gravity, human
        opponent, easy AI.
        """
        return cls(difficulty=difficulty or DEFAULT_DIFFICULTY,
                   gravity_mode=GravityMode.from_label(mode),
                   game_mode=GameMode.from_label(game_mode),
                   ai_tier=AITier.from_label(ai_level),
                   name_one=name_one or "",
                   name_two=name_two or "")

    def normalized(self) -> 'GameSettings':
        """Fill in the AI's name so equal configurations compare equal."""
        if self.game_mode == GameMode.HUMAN_VS_AI and not self.name_two:
            return self._replace(name_two=AI_PLAYER_NAME)
        return self


class GameSession:
    """
    The single active game of one caller.

    Every public method takes the session lock, so callers may use the
    session from several threads (e.g. a request thread applying the human
    move and another applying the AI's delayed move).
    """

    def __init__(self, settings: Optional[GameSettings] = None,
                 rng: Optional[random.Random] = None):
        self._lock = threading.RLock()
        self._rng = rng or random.Random()
        self.settings = (settings or GameSettings()).normalized()
        self.state = self._build()

    def _build(self) -> GameState:
        preset = get_preset(self.settings.difficulty)
        return new_game(preset.rows, preset.cols, preset.prefill,
                        gravity_mode=self.settings.gravity_mode,
                        ai_tier=self.settings.ai_tier,
                        game_mode=self.settings.game_mode,
                        player_names=(self.settings.name_one, self.settings.name_two),
                        rng=self._rng)

    @property
    def lock(self) -> threading.RLock:
        """The session lock, for callers that need several calls to be atomic."""
        return self._lock

    def configure(self, settings: GameSettings) -> bool:
        """
        Switch to ``settings``, starting a new game only if they changed.

        Returns:
            True if a new game was started
        """
        settings = settings.normalized()
        with self._lock:
            if settings == self.settings:
                return False
            self.settings = settings
            self.state = self._build()
            debug.info(f"Session reconfigured: {settings}", "session")
            return True

    def rematch(self):
        """New game with the same settings."""
        with self._lock:
            self.state = self._build()
            debug.info("Rematch started", "session")

    def reset(self):
        """Forget the settings and start a default game."""
        with self._lock:
            self.settings = GameSettings().normalized()
            self.state = self._build()
            debug.info("Session reset", "session")

    def play(self, col: int) -> bool:
        """
        Apply a human move.

        Moves are rejected while it is the computer's turn.

        Returns:
            True if the move was accepted
        """
        with self._lock:
            if self.state.is_ai_turn:
                debug.debug(f"Rejected human move {col}: waiting for the AI", "session")
                return False
            return apply_move(self.state, col)

    def ai_move(self) -> Optional[int]:
        """Apply the computer's move if it is due; returns the column played."""
        with self._lock:
            return request_ai_move(self.state, self._rng)

    @property
    def ai_pending(self) -> bool:
        """True when the computer should be asked to move next."""
        with self._lock:
            return self.state.is_ai_turn

    def display_name(self, player: Player) -> str:
        name = self.state.player_name(player)
        if name:
            return name
        return DEFAULT_PLAYER_NAMES[0] if player == Player.ONE else DEFAULT_PLAYER_NAMES[1]

    def end_message(self) -> Optional[str]:
        """Outcome text once the game is over, else None."""
        with self._lock:
            state = self.state
            if not state.game_over:
                return None
            if state.winner is None:
                return "Draw!"
            if state.winner == Player.TWO and state.game_mode == GameMode.HUMAN_VS_AI:
                return "The AI wins!"
            return f"{self.display_name(state.winner)} wins!"

    def snapshot(self) -> Dict[str, Any]:
        """
        Read-only view of the game for renderers.

        Returns:
            Dictionary of plain values (no engine objects besides enum names)
        """
        with self._lock:
            state = self.state
            line = winning_line(state)
            return {
                'board': state.board.to_list(),
                'rows': state.rows,
                'cols': state.cols,
                'current_player': state.current_player.value,
                'winner': state.winner.value if state.winner else None,
                'game_over': state.game_over,
                'last_move': state.last_move,
                'turn_count': state.turn_count,
                'gravity': state.gravity.name,
                'gravity_mode': state.gravity_mode.value,
                'game_mode': state.game_mode.value,
                'ai_tier': state.ai_tier.value,
                'difficulty': self.settings.difficulty,
                'names': [self.display_name(Player.ONE), self.display_name(Player.TWO)],
                'legal_moves': state.legal_columns(),
                'winning_line': line or [],
                'end_message': self.end_message(),
                'ai_pending': state.is_ai_turn,
                'ai_delay_ms': AI_DELAY_MS,
            }
