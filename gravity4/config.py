"""
config.py - Tunable settings for gravity4

Board presets per difficulty label, AI search parameters and the deferred AI
move delay. A few values can be overridden through environment variables.
"""

import os
from typing import NamedTuple


class BoardPreset(NamedTuple):
    rows: int
    cols: int
    prefill: int


# --- Board presets ---
DIFFICULTY_PRESETS = {
    "easy": BoardPreset(rows=6, cols=7, prefill=0),
    "normal": BoardPreset(rows=7, cols=8, prefill=0),
    "hard": BoardPreset(rows=8, cols=10, prefill=7),
}
DEFAULT_DIFFICULTY = "easy"

# --- Rules ---
GRAVITY_FLIP_INTERVAL = 5  # reversing mode flips after every 5th move

# --- AI ---
AI_SEARCH_DEPTH = 4
SEARCH_SCORE_BOUND = 1000  # initial alpha/beta window of the root search
WINDOW_SCORES = {4: 100, 3: 10, 2: 2}

# Delay (ms) between a human move and the AI's deferred reply
AI_DELAY_MS = int(os.environ.get("GRAVITY4_AI_DELAY_MS", "1000"))

# --- Display labels ---
DEFAULT_PLAYER_NAMES = ("Player 1", "Player 2")
AI_PLAYER_NAME = "AI"


def get_preset(difficulty: str) -> BoardPreset:
    """Board preset for a difficulty label; unknown labels use the default."""
    return DIFFICULTY_PRESETS.get(difficulty, DIFFICULTY_PRESETS[DEFAULT_DIFFICULTY])
