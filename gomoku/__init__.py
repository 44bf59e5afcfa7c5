"""Gomoku engine package providing board rules, evaluation, and AI search.

Modules:
- board: 15x15 grid, placement rules and win detection
- patterns: per-axis line pattern classification
- evaluator: whole-board and single-move pattern scoring
- ordering: tiered candidate ordering and branching limits
- ai: Negamax with alpha-beta pruning
- game: turn order and move history atop the board
"""

from .board import Board, Player, IllegalMove, GameAlreadyOver, GomokuError
from .config import SearchConfig
from .game import Game, MoveResult
from .ai import AIPlayer
from .evaluator import Evaluator

__all__ = [
    "Board",
    "Player",
    "IllegalMove",
    "GameAlreadyOver",
    "GomokuError",
    "SearchConfig",
    "Game",
    "MoveResult",
    "AIPlayer",
    "Evaluator",
]
