from __future__ import annotations

from gomoku import Board, Evaluator, Player
from gomoku.patterns import Pattern


def test_empty_board_scores_zero():
    assert Evaluator.evaluate(Board()) == 0


def test_sign_follows_perspective(make_board):
    board = make_board(white=[(7, 7)])
    # A lone open stone is ONE on every axis.
    assert Evaluator.evaluate(board) == 4
    assert Evaluator.evaluate(board, Player.WHITE) == 4
    assert Evaluator.evaluate(board, Player.BLACK) == -4


def test_count_patterns_open_three(make_board):
    board = make_board(black=[(5, 5), (5, 6), (5, 7)])
    counts = Evaluator.count_patterns(board, Player.BLACK)
    assert counts[Pattern.OPEN_THREE] == 3
    assert counts[Pattern.ONE] == 9
    assert Evaluator.player_score(board, Player.BLACK) == 3 * 1000 + 9
    assert Evaluator.evaluate(board) == -3009


def test_evaluation_is_repeatable_and_pure(make_board):
    board = make_board(black=[(0, c) for c in range(5)], white=[(1, 0), (1, 1), (2, 2)])
    board.game_over = True
    before = board.to_rows()
    first = Evaluator.evaluate(board)
    assert Evaluator.evaluate(board) == first
    assert board.to_rows() == before
    assert first < -500000


def test_move_importance_prefers_own_win_over_block(make_board):
    board = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)], white=[(7, 2)])
    assert Evaluator.move_importance(board, 7, 7, Player.BLACK) == Evaluator.WIN_IMPORTANCE
    assert Evaluator.move_importance(board, 7, 7, Player.WHITE) == Evaluator.BLOCK_IMPORTANCE
    assert board.get(7, 7) == Player.EMPTY


def test_move_importance_weights_opponent_lower(make_board):
    assert Evaluator.move_importance(Board(), 7, 7, Player.BLACK) == 40

    board = make_board(black=[(5, 5), (5, 6), (5, 7)])
    # White blocking at (5, 4): black would make an open four (10000) plus
    # three single-stone axes (30), discounted as the opponent's threat.
    assert Evaluator.move_importance(board, 5, 4, Player.WHITE) == (10000 + 30) * Evaluator.OPPONENT_WEIGHT
    # Black extending there scores the same patterns at full weight.
    assert Evaluator.move_importance(board, 5, 4, Player.BLACK) == 10000 + 30


def test_move_importance_leaves_board_untouched(make_board):
    board = make_board(black=[(3, 3), (4, 4)], white=[(3, 4)])
    before = board.to_rows()
    for r, c in [(5, 5), (2, 2), (3, 5), (0, 0)]:
        Evaluator.move_importance(board, r, c, Player.WHITE)
    assert board.to_rows() == before
