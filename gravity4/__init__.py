"""
gravity4 - Connect Four with periodic gravity reversal and a tiered AI

This package provides the game engine (board, move sequencing, gravity
reversal, win/draw detection), the computer opponent (random, one-ply
heuristic and minimax tiers), a lock-guarded session handle for callers,
and terminal and gymnasium front ends.
"""

# Version number
__version__ = '0.1.0'
