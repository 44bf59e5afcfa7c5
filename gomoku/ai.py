from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from .board import CENTER, Board, Coord, Player
from .config import SearchConfig
from .evaluator import Evaluator
from .ordering import Candidate, MoveOrderer

logger = logging.getLogger(__name__)

# Must exceed any reachable sum of pattern scores so a forced win always wins
# the comparison. The remaining depth is added to prefer the quickest win.
WIN_SCORE = 100_000_000


@dataclass
class SearchResult:
    move: Optional[Coord]
    score: float
    nodes: int
    depth: int
    timed_out: bool = False


class AIPlayer:
    """Negamax with alpha-beta pruning over tier-ordered, depth-limited candidates.

    The search mutates the given board in place through ``Board.trial`` and
    leaves it exactly as it found it. One search per board at a time.
    """

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.config = config or SearchConfig()
        self.orderer = MoveOrderer(self.config)
        self.last_result: Optional[SearchResult] = None
        self._deadline_ts: Optional[float] = None
        self._nodes = 0

    def choose_move(
        self,
        board: Board,
        player: Player,
        depth: Optional[int] = None,
        time_limit_s: Optional[float] = None,
    ) -> Optional[Coord]:
        """Pick the move for ``player`` to commit next.

        An immediate win is taken without searching. A time limit aborts the
        whole search rather than returning a partial result; in that case,
        and when the search produces no move, a forced block is played if
        there is one, else the strategic fallback.
        """
        if board.game_over:
            return None
        if board.is_empty_board():
            return CENTER

        player = Player(player)
        depth = self.config.depth if depth is None else depth
        if time_limit_s is None:
            time_limit_s = self.config.time_limit_s

        forced = self.forced_move(board, player)
        if forced is not None and forced.score >= Evaluator.WIN_IMPORTANCE:
            self.last_result = SearchResult(move=forced.coord, score=WIN_SCORE + depth, nodes=1, depth=depth)
            return forced.coord

        self._nodes = 0
        self._deadline_ts = (time.time() + time_limit_s) if time_limit_s else None
        started = time.time()
        try:
            score, move = self.search(board, player, depth)
            self.last_result = SearchResult(move=move, score=score, nodes=self._nodes, depth=depth)
        except _SearchTimeout:
            logger.info("Search timed out after %.2fs at %d nodes", time.time() - started, self._nodes)
            self.last_result = SearchResult(
                move=None, score=0, nodes=self._nodes, depth=depth, timed_out=True
            )
        finally:
            self._deadline_ts = None

        logger.debug(
            "depth=%d nodes=%d score=%s move=%s in %.3fs",
            depth,
            self.last_result.nodes,
            self.last_result.score,
            self.last_result.move,
            time.time() - started,
        )
        if self.last_result.move is None:
            fallback = forced.coord if forced is not None else self.strategic_move(board)
            logger.info("No searched move for %s, falling back to %s", player.name, fallback)
            return fallback
        return self.last_result.move

    def forced_move(self, board: Board, player: Player) -> Optional[Candidate]:
        """The top-ranked cell if it wins outright or blocks an opponent win."""
        moves = self.orderer.ordered_moves(board, player)
        if moves and moves[0].score >= Evaluator.BLOCK_IMPORTANCE:
            return moves[0]
        return None

    def search(
        self,
        board: Board,
        player: Player,
        depth: int,
        alpha: float = -math.inf,
        beta: float = math.inf,
        color: int = 1,
    ) -> Tuple[float, Optional[Coord]]:
        """Negamax value of the position for the side to move, and its best move.

        ``color`` is +1 when ``player`` is to move and -1 when the opponent is.
        """
        self._guard_time()
        self._nodes += 1

        if depth == 0 or board.game_over:
            return color * Evaluator.evaluate(board, player), None

        mover = player if color > 0 else player.opponent
        candidates = self.orderer.candidates(board, mover, depth)
        if not candidates:
            # Full board: nothing left to play, score it as a leaf.
            return color * Evaluator.evaluate(board, player), None

        best_score = -math.inf
        best_move: Optional[Coord] = None
        for cand in candidates:
            with board.trial(cand.row, cand.col, mover):
                if board.check_win(cand.row, cand.col, mover):
                    return WIN_SCORE + depth, cand.coord
                score = -self.search(board, player, depth - 1, -beta, -alpha, -color)[0]

            if score > best_score:
                best_score = score
                best_move = cand.coord
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        return best_score, best_move

    def strategic_move(self, board: Board) -> Coord:
        """Centre if free, else the first free cell in growing rings around a stone."""
        if board.is_legal(*CENTER):
            return CENTER
        occupied = [
            (r, c) for r in range(board.size) for c in range(board.size) if board.grid[r][c] != Player.EMPTY
        ]
        for distance in range(1, self.config.fallback_radius + 1):
            for row, col in occupied:
                for dr in range(-distance, distance + 1):
                    for dc in range(-distance, distance + 1):
                        if board.is_legal(row + dr, col + dc):
                            return row + dr, col + dc
        return CENTER

    def _guard_time(self) -> None:
        if self._deadline_ts is None:
            return
        if time.time() >= self._deadline_ts:
            raise _SearchTimeout()


class _SearchTimeout(Exception):
    pass
