from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .ai import AIPlayer
from .board import Board, Coord, GomokuError, Player
from .config import SearchConfig

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    placed: bool
    won: bool = False
    winner: Optional[Player] = None
    row: Optional[int] = None
    col: Optional[int] = None
    player: Optional[Player] = None
    error: Optional[str] = None


class Game:
    """Owns a Board and the turn order around it.

    This is the surface the web layer talks to: commit moves, ask the engine
    for a reply, and report the state as plain data.
    """

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.board = Board()
        self.ai = AIPlayer(config)
        self.current_player: Player = Player.BLACK
        self.history: List[Tuple[int, int, Player]] = []
        self.ai_mode: bool = False
        self.ai_player: Player = Player.WHITE

    def reset(self) -> None:
        self.board.reset()
        self.current_player = Player.BLACK
        self.history = []

    def enable_ai(self, ai_player: Player = Player.WHITE) -> None:
        self.ai_mode = True
        self.ai_player = Player(ai_player)

    def disable_ai(self) -> None:
        self.ai_mode = False

    @property
    def game_over(self) -> bool:
        return self.board.game_over

    @property
    def winner(self) -> Optional[Player]:
        return self.board.winner

    def is_ai_turn(self) -> bool:
        return self.ai_mode and not self.game_over and self.current_player == self.ai_player

    def play(self, row: int, col: int, player: Optional[Player] = None) -> MoveResult:
        """Commit a move. Rule violations are reported, not raised."""
        mover = Player(player) if player is not None else self.current_player
        try:
            won = self.board.place(row, col, mover)
        except GomokuError as exc:
            logger.info("Rejected move (%s, %s) by %s: %s", row, col, mover.name, exc)
            return MoveResult(placed=False, row=row, col=col, player=mover, error=str(exc))

        self.history.append((row, col, mover))
        if won:
            return MoveResult(placed=True, won=True, winner=mover, row=row, col=col, player=mover)
        self.current_player = mover.opponent
        return MoveResult(placed=True, row=row, col=col, player=mover)

    def best_move(self, time_limit_s: Optional[float] = None) -> Optional[Coord]:
        return self.ai.choose_move(self.board, self.current_player, time_limit_s=time_limit_s)

    def play_ai(self, time_limit_s: Optional[float] = None) -> MoveResult:
        if self.game_over:
            return MoveResult(placed=False, winner=self.winner, error="Game is already over")
        move = self.best_move(time_limit_s=time_limit_s)
        if move is None:
            return MoveResult(placed=False, error="No move available")
        return self.play(*move)

    def snapshot(self) -> Dict[str, object]:
        last_move: Optional[Dict[str, int]] = None
        if self.history:
            row, col, player = self.history[-1]
            last_move = {"row": row, "col": col, "player": int(player)}

        return {
            "board": [[int(cell) for cell in r] for r in self.board.grid],
            "current_player": int(self.current_player),
            "game_over": self.game_over,
            "winner": int(self.winner) if self.winner else None,
            "move_history": [{"row": r, "col": c, "player": int(p)} for r, c, p in self.history],
            "last_move": last_move,
            "ai_mode": self.ai_mode,
            "ai_player": int(self.ai_player) if self.ai_mode else None,
        }
