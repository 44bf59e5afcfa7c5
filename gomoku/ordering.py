"""Candidate generation and ordering for alpha-beta search.

Every empty cell is scored with ``Evaluator.move_importance`` and bucketed
into priority tiers so that winning moves and forced blocks are searched
first. The search then expands only a depth-dependent prefix of the list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

from .board import CENTER, Board, Coord, Player
from .config import SearchConfig
from .evaluator import Evaluator


class Tier(IntEnum):
    CRITICAL = 0
    GOOD = 1
    NORMAL = 2


@dataclass(frozen=True)
class Candidate:
    row: int
    col: int
    score: float
    tier: Tier

    @property
    def coord(self) -> Coord:
        return self.row, self.col


class MoveOrderer:
    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.config = config or SearchConfig()

    def tier_for(self, score: float) -> Tier:
        if score >= self.config.critical_threshold:
            return Tier.CRITICAL
        if score >= self.config.good_threshold:
            return Tier.GOOD
        return Tier.NORMAL

    def ordered_moves(self, board: Board, mover: Player) -> List[Candidate]:
        buckets: List[List[Candidate]] = [[], [], []]
        for row, col in board.empty_cells():
            score = Evaluator.move_importance(board, row, col, mover)
            tier = self.tier_for(score)
            buckets[tier].append(Candidate(row, col, score, tier))

        center_r, center_c = CENTER
        ordered: List[Candidate] = []
        for bucket in buckets:
            # Equal scores go to the cell nearest the centre.
            bucket.sort(key=lambda m: (-m.score, abs(m.row - center_r) + abs(m.col - center_c)))
            ordered.extend(bucket)
        return ordered

    def move_limit(self, depth: int, total: int) -> int:
        for min_depth, cap in self.config.limits:
            if depth >= min_depth:
                return min(total, cap)
        return total

    def candidates(self, board: Board, mover: Player, depth: int) -> List[Candidate]:
        moves = self.ordered_moves(board, mover)
        return moves[: self.move_limit(depth, len(moves))]
