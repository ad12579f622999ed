"""
gravity4/ai/__init__.py - Computer opponent for gravity4

Tier dispatch lives in strategy.py, the search and evaluator in minimax.py.
"""

from gravity4.ai.minimax import MinimaxPlayer, evaluate, minimax
from gravity4.ai.strategy import choose_move, request_ai_move

__all__ = ['MinimaxPlayer', 'choose_move', 'evaluate', 'minimax', 'request_ai_move']
