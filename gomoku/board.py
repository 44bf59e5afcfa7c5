from __future__ import annotations

from contextlib import contextmanager
from enum import IntEnum
from typing import Iterator, List, Optional, Sequence, Tuple

BOARD_SIZE = 15
CENTER: Tuple[int, int] = (BOARD_SIZE // 2, BOARD_SIZE // 2)
WIN_LENGTH = 5

# Horizontal, vertical, and the two diagonals. Reverse directions are implied.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))

Coord = Tuple[int, int]


class Player(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "Player":
        if self is Player.BLACK:
            return Player.WHITE
        if self is Player.WHITE:
            return Player.BLACK
        raise ValueError("EMPTY has no opponent")


_SYMBOLS = {Player.EMPTY: ".", Player.BLACK: "X", Player.WHITE: "O"}
_PARSE = {".": Player.EMPTY, "X": Player.BLACK, "B": Player.BLACK, "O": Player.WHITE, "W": Player.WHITE}


class GomokuError(ValueError):
    """Base class for rejected moves. Never fatal to the game."""


class IllegalMove(GomokuError):
    def __init__(self, row: int, col: int, reason: str) -> None:
        super().__init__(f"Illegal move ({row}, {col}): {reason}")
        self.row = row
        self.col = col


class GameAlreadyOver(GomokuError):
    def __init__(self, winner: Optional[Player]) -> None:
        name = winner.name.lower() if winner else "nobody"
        super().__init__(f"Game is already over ({name} won)")
        self.winner = winner


class Board:
    """Canonical 15x15 grid with placement rules and anchor-based win detection.

    The board is the only owner of the grid. Committed moves go through
    ``place``; the search and evaluator use ``trial`` so that every tentative
    stone is removed again on every exit path.
    """

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self.size = size
        self.grid: List[List[Player]] = [[Player.EMPTY] * size for _ in range(size)]
        self.game_over: bool = False
        self.winner: Optional[Player] = None
        self.move_count: int = 0

    def reset(self) -> None:
        self.grid = [[Player.EMPTY] * self.size for _ in range(self.size)]
        self.game_over = False
        self.winner = None
        self.move_count = 0

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Player:
        return self.grid[row][col]

    def is_legal(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.grid[row][col] == Player.EMPTY

    def is_empty_board(self) -> bool:
        return not any(any(r) for r in self.grid)

    def is_full(self) -> bool:
        return all(cell != Player.EMPTY for r in self.grid for cell in r)

    def empty_cells(self) -> Iterator[Coord]:
        for r in range(self.size):
            row = self.grid[r]
            for c in range(self.size):
                if row[c] == Player.EMPTY:
                    yield r, c

    def stones(self, player: Player) -> Iterator[Coord]:
        for r in range(self.size):
            row = self.grid[r]
            for c in range(self.size):
                if row[c] == player:
                    yield r, c

    def place(self, row: int, col: int, player: Player) -> bool:
        """Commit a stone and return True if it wins the game."""
        if self.game_over:
            raise GameAlreadyOver(self.winner)
        if not self.in_bounds(row, col):
            raise IllegalMove(row, col, "out of bounds")
        if self.grid[row][col] != Player.EMPTY:
            raise IllegalMove(row, col, "cell is occupied")

        player = Player(player)
        if player == Player.EMPTY:
            raise ValueError("Cannot place an EMPTY stone")
        self.grid[row][col] = player
        self.move_count += 1
        if self.check_win(row, col, player):
            self.game_over = True
            self.winner = player
            return True
        return False

    def check_win(self, row: int, col: int, player: Player) -> bool:
        grid = self.grid
        size = self.size
        for dr, dc in DIRECTIONS:
            count = 1
            for sign in (1, -1):
                for step in range(1, WIN_LENGTH):
                    r = row + sign * step * dr
                    c = col + sign * step * dc
                    if 0 <= r < size and 0 <= c < size and grid[r][c] == player:
                        count += 1
                    else:
                        break
            if count >= WIN_LENGTH:
                return True
        return False

    @contextmanager
    def trial(self, row: int, col: int, player: Player) -> Iterator[None]:
        """Tentatively occupy an empty cell for the duration of the block."""
        if self.grid[row][col] != Player.EMPTY:
            raise IllegalMove(row, col, "cell is occupied")
        self.grid[row][col] = player
        try:
            yield
        finally:
            self.grid[row][col] = Player.EMPTY

    def copy(self) -> "Board":
        other = Board(self.size)
        other.grid = [list(r) for r in self.grid]
        other.game_over = self.game_over
        other.winner = self.winner
        other.move_count = self.move_count
        return other

    def rotated(self) -> "Board":
        """Return a copy turned 90 degrees clockwise: (r, c) -> (c, size-1-r)."""
        other = self.copy()
        n = self.size
        other.grid = [[self.grid[n - 1 - c][r] for c in range(n)] for r in range(n)]
        return other

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        board = cls(len(rows))
        for r, line in enumerate(rows):
            if len(line) != board.size:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {board.size}")
            for c, ch in enumerate(line):
                try:
                    board.grid[r][c] = _PARSE[ch.upper()]
                except KeyError:
                    raise ValueError(f"Unknown cell symbol {ch!r} at ({r}, {c})") from None
        board.move_count = sum(1 for r in board.grid for cell in r if cell != Player.EMPTY)
        return board

    def to_rows(self) -> List[str]:
        return ["".join(_SYMBOLS[cell] for cell in r) for r in self.grid]

    def __str__(self) -> str:
        return "\n".join(self.to_rows())
