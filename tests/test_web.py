from __future__ import annotations

import time

import pytest

from gomoku import SearchConfig
from gomoku.config import WebConfig
from web import create_app
from web.app import ai_time_budget


@pytest.fixture
def client():
    app = create_app(SearchConfig(depth=2))
    return app.test_client()


def test_new_game_and_state(client):
    r = client.post("/api/new-game", json={})
    assert r.status_code == 200
    data = r.get_json()
    assert len(data["board"]) == 15 and all(len(row) == 15 for row in data["board"])
    assert data["current_player"] == 1
    assert data["ai_move"] is None

    r = client.get("/api/game-state")
    assert r.status_code == 200
    assert r.get_json()["move_history"] == []


def test_two_player_moves(client):
    client.post("/api/new-game", json={})
    r = client.post("/api/move", json={"row": 7, "col": 7})
    assert r.status_code == 200
    data = r.get_json()
    assert data["board"][7][7] == 1
    assert data["current_player"] == 2
    assert data["ai_move"] is None


@pytest.mark.parametrize("payload", [{}, {"row": "7", "col": 7}, {"row": 7}, {"row": True, "col": 1}])
def test_move_rejects_bad_payload(client, payload):
    r = client.post("/api/move", json=payload)
    assert r.status_code == 400
    assert r.get_json()["error"] == "Invalid move coordinates"


def test_move_rejects_illegal_cells(client):
    client.post("/api/move", json={"row": 3, "col": 3})
    r = client.post("/api/move", json={"row": 3, "col": 3})
    assert r.status_code == 400
    assert "occupied" in r.get_json()["error"]
    r = client.post("/api/move", json={"row": 15, "col": 0})
    assert r.status_code == 400


def test_ai_replies_in_ai_mode(client):
    r = client.post("/api/new-game", json={"ai": True})
    assert r.get_json()["ai_mode"] is True
    r = client.post("/api/move", json={"row": 7, "col": 7})
    assert r.status_code == 200
    data = r.get_json()
    assert data["ai_move"] is not None
    ai_row, ai_col = data["ai_move"]["row"], data["ai_move"]["col"]
    assert (ai_row, ai_col) != (7, 7)
    assert data["board"][ai_row][ai_col] == 2
    assert data["current_player"] == 1


def test_ai_opens_when_playing_black(client):
    r = client.post("/api/new-game", json={"ai": True, "ai_player": 1})
    assert r.status_code == 200
    data = r.get_json()
    assert data["ai_move"] == {"row": 7, "col": 7}
    assert data["current_player"] == 2


def test_new_game_rejects_unknown_ai_player(client):
    r = client.post("/api/new-game", json={"ai": True, "ai_player": 3})
    assert r.status_code == 400


def test_ai_move_endpoint_and_game_over(client):
    r = client.post("/api/ai-move")
    assert r.status_code == 200
    assert r.get_json()["ai_move"] == {"row": 7, "col": 7}

    client.post("/api/new-game", json={})
    for col in range(4):
        client.post("/api/move", json={"row": 0, "col": col})
        client.post("/api/move", json={"row": 1, "col": col})
    r = client.post("/api/move", json={"row": 0, "col": 4})
    data = r.get_json()
    assert data["game_over"] and data["winner"] == 1

    r = client.post("/api/ai-move")
    assert r.status_code == 400
    r = client.post("/api/move", json={"row": 5, "col": 5})
    assert r.status_code == 400


def test_time_budget_follows_depth():
    assert ai_time_budget(6) == 1.5
    assert ai_time_budget(4) == pytest.approx(1.12)
    assert ai_time_budget(3) == 1.2
    assert ai_time_budget(2) is None


def test_default_app_replies_within_budget(monkeypatch):
    for name in ("GOMOKU_SEARCH_DEPTH", "GOMOKU_TIME_LIMIT", "GOMOKU_AI_TIME_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    app = create_app()
    assert app.config["AI_TIME_LIMIT_S"] == 1.5
    client = app.test_client()
    client.post("/api/new-game", json={"ai": True})

    for row, col in [(7, 7), (0, 0)]:
        start = time.time()
        r = client.post("/api/move", json={"row": row, "col": col})
        assert time.time() - start < 3.0
        assert r.status_code == 200
        assert r.get_json()["ai_move"] is not None


def test_configured_time_limit_wins(monkeypatch):
    monkeypatch.delenv("GOMOKU_TIME_LIMIT", raising=False)
    app = create_app(SearchConfig(depth=6), WebConfig(ai_time_limit_s=0.5))
    assert app.config["AI_TIME_LIMIT_S"] == 0.5


def test_module_level_app_serves_requests():
    from web.app import app

    r = app.test_client().get("/api/game-state")
    assert r.status_code == 200
    assert "AI_TIME_LIMIT_S" in app.config
