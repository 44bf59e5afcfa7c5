"""Line pattern recognition around a single stone.

A pattern is never stored: it is derived on demand from the run of
same-colour stones through an anchor cell along one axis, together with what
terminates the run at each end.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .board import DIRECTIONS, Board, Player


class Pattern(Enum):
    # Declared strongest first.
    FIVE = "FIVE"
    OPEN_FOUR = "OPEN_FOUR"
    FOUR = "FOUR"
    OPEN_THREE = "OPEN_THREE"
    THREE = "THREE"
    OPEN_TWO = "OPEN_TWO"
    TWO = "TWO"
    ONE = "ONE"


@dataclass
class LineScan:
    count: int = 1
    left_blocked: bool = False
    right_blocked: bool = False
    left_empty: bool = False
    right_empty: bool = False


def _walk(board: Board, row: int, col: int, dr: int, dc: int, player: Player) -> Tuple[int, bool, bool]:
    """Extend from the anchor in one direction. Returns (stones, blocked, empty_beyond)."""
    grid = board.grid
    size = board.size
    stones = 0
    r, c = row + dr, col + dc
    while 0 <= r < size and 0 <= c < size:
        cell = grid[r][c]
        if cell == player:
            stones += 1
            r += dr
            c += dc
        elif cell == Player.EMPTY:
            return stones, False, True
        else:
            return stones, True, False
    # Ran off the board edge.
    return stones, True, False


def scan_line(board: Board, row: int, col: int, dr: int, dc: int, player: Player) -> LineScan:
    left, left_blocked, left_empty = _walk(board, row, col, -dr, -dc, player)
    right, right_blocked, right_empty = _walk(board, row, col, dr, dc, player)
    return LineScan(
        count=1 + left + right,
        left_blocked=left_blocked,
        right_blocked=right_blocked,
        left_empty=left_empty,
        right_empty=right_empty,
    )


def classify_scan(scan: LineScan) -> Optional[Pattern]:
    both_blocked = scan.left_blocked and scan.right_blocked
    neither_blocked = not scan.left_blocked and not scan.right_blocked
    open_both = neither_blocked and scan.left_empty and scan.right_empty

    if scan.count >= 5:
        return Pattern.FIVE
    if both_blocked:
        # An enclosed run cannot grow into five.
        return None
    if scan.count == 4:
        return Pattern.OPEN_FOUR if neither_blocked else Pattern.FOUR
    if scan.count == 3:
        return Pattern.OPEN_THREE if open_both else Pattern.THREE
    if scan.count == 2:
        return Pattern.OPEN_TWO if open_both else Pattern.TWO
    return Pattern.ONE


def classify(
    board: Board, row: int, col: int, direction: Tuple[int, int], player: Player
) -> Optional[Pattern]:
    dr, dc = direction
    return classify_scan(scan_line(board, row, col, dr, dc, player))


def patterns_at(board: Board, row: int, col: int, player: Player) -> List[Optional[Pattern]]:
    """One entry per axis in ``DIRECTIONS`` order; ``None`` where nothing counts."""
    return [classify(board, row, col, d, player) for d in DIRECTIONS]
