from __future__ import annotations

from collections import Counter
from typing import Dict

from .board import DIRECTIONS, Board, Player
from .patterns import Pattern, classify


class Evaluator:
    """Static pattern-based evaluation for Gomoku positions.

    ``evaluate`` scores a whole board for leaf nodes; ``move_importance``
    scores a single empty cell and is used only to order candidates.
    """

    # Whole-board weights, one entry per stone per axis.
    BOARD_SCORES: Dict[Pattern, int] = {
        Pattern.FIVE: 100000,
        Pattern.OPEN_FOUR: 10000,
        Pattern.FOUR: 1000,
        Pattern.OPEN_THREE: 1000,
        Pattern.THREE: 100,
        Pattern.OPEN_TWO: 100,
        Pattern.TWO: 10,
        Pattern.ONE: 1,
    }

    # Steeper weights for ranking a candidate move.
    MOVE_SCORES: Dict[Pattern, int] = {
        Pattern.FIVE: 50000,
        Pattern.OPEN_FOUR: 10000,
        Pattern.FOUR: 5000,
        Pattern.OPEN_THREE: 1000,
        Pattern.THREE: 500,
        Pattern.OPEN_TWO: 100,
        Pattern.TWO: 50,
        Pattern.ONE: 10,
    }

    WIN_IMPORTANCE = 50000
    BLOCK_IMPORTANCE = 45000
    OPPONENT_WEIGHT = 0.9

    @classmethod
    def count_patterns(cls, board: Board, player: Player) -> Counter:
        counts: Counter = Counter()
        for row, col in board.stones(player):
            for direction in DIRECTIONS:
                pattern = classify(board, row, col, direction, player)
                if pattern is not None:
                    counts[pattern] += 1
        return counts

    @classmethod
    def player_score(cls, board: Board, player: Player) -> int:
        counts = cls.count_patterns(board, player)
        return sum(cls.BOARD_SCORES[p] * n for p, n in counts.items())

    @classmethod
    def evaluate(cls, board: Board, perspective: Player = Player.WHITE) -> int:
        """Global score: perspective's pattern total minus the opponent's."""
        perspective = Player(perspective)
        return cls.player_score(board, perspective) - cls.player_score(board, perspective.opponent)

    @classmethod
    def move_pattern_score(cls, board: Board, row: int, col: int, player: Player) -> int:
        score = 0
        for direction in DIRECTIONS:
            pattern = classify(board, row, col, direction, player)
            if pattern is not None:
                score += cls.MOVE_SCORES[pattern]
        return score

    @classmethod
    def move_importance(cls, board: Board, row: int, col: int, mover: Player) -> float:
        """How urgent it is for ``mover`` to take the empty cell (row, col).

        Winning outright beats blocking an opponent win, and an opponent's
        threat is weighted slightly below an equal threat of our own.
        """
        mover = Player(mover)
        best = 0.0
        for player, weight in ((mover, 1.0), (mover.opponent, cls.OPPONENT_WEIGHT)):
            with board.trial(row, col, player):
                if board.check_win(row, col, player):
                    return cls.WIN_IMPORTANCE if player == mover else cls.BLOCK_IMPORTANCE
                best = max(best, cls.move_pattern_score(board, row, col, player) * weight)
        return best
