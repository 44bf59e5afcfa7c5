from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gomoku import Game, Player, SearchConfig
from gomoku.config import WebConfig

logger = logging.getLogger(__name__)


def ai_time_budget(depth: int) -> Optional[float]:
    """Time budget for an engine reply so the UI stays responsive."""
    if depth >= 4:
        return min(1.5, 0.28 * depth)
    if depth == 3:
        return 1.2
    return None


def create_app(
    search_config: Optional[SearchConfig] = None,
    web_config: Optional[WebConfig] = None,
) -> Flask:
    app = Flask(__name__)

    search_config = search_config or SearchConfig.from_env()
    web_config = web_config or WebConfig.from_env()
    game = Game(search_config)
    # The search trials stones on the shared board, so only one request may touch it at a time.
    lock = threading.Lock()

    time_budget = web_config.ai_time_limit_s
    if time_budget is None:
        time_budget = search_config.time_limit_s or ai_time_budget(search_config.depth)
    app.config["AI_TIME_LIMIT_S"] = time_budget

    def _ai_reply() -> Optional[dict]:
        if not game.is_ai_turn():
            return None
        result = game.play_ai(time_limit_s=time_budget)
        if not result.placed:
            return None
        return {"row": result.row, "col": result.col}

    @app.get("/api/game-state")
    def api_game_state():
        with lock:
            return jsonify(game.snapshot())

    @app.post("/api/new-game")
    def api_new_game():
        data = request.get_json(silent=True) or {}
        with lock:
            game.reset()
            if data.get("ai"):
                ai_player = data.get("ai_player", int(Player.WHITE))
                if ai_player not in (Player.BLACK, Player.WHITE):
                    return jsonify({"error": "ai_player must be 1 or 2"}), 400
                game.enable_ai(Player(ai_player))
            elif "ai" in data:
                game.disable_ai()

            # If the engine plays black it opens immediately.
            ai_move = _ai_reply()
            snap = game.snapshot()
            snap["ai_move"] = ai_move
            return jsonify(snap)

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        row, col = payload.get("row"), payload.get("col")
        if not isinstance(row, int) or not isinstance(col, int) or isinstance(row, bool) or isinstance(col, bool):
            return jsonify({"error": "Invalid move coordinates"}), 400

        with lock:
            if game.is_ai_turn():
                return jsonify({"error": "Not your turn"}), 400

            result = game.play(row, col)
            if not result.placed:
                return jsonify({"error": result.error}), 400

            ai_move = _ai_reply()
            snap = game.snapshot()
            snap["ai_move"] = ai_move
            return jsonify(snap)

    @app.post("/api/ai-move")
    def api_ai_move():
        with lock:
            result = game.play_ai(time_limit_s=time_budget)
            if not result.placed:
                return jsonify({"error": result.error}), 400
            snap = game.snapshot()
            snap["ai_move"] = {"row": result.row, "col": result.col}
            return jsonify(snap)

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    web_config = WebConfig.from_env()
    app.run(host=web_config.host, port=web_config.port, debug=web_config.debug)
