from __future__ import annotations

import pytest

from gomoku import Board, Player


def build_board(black=(), white=()) -> Board:
    board = Board()
    for r, c in black:
        board.grid[r][c] = Player.BLACK
        board.move_count += 1
    for r, c in white:
        board.grid[r][c] = Player.WHITE
        board.move_count += 1
    return board


@pytest.fixture
def make_board():
    return build_board
