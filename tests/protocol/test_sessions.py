from __future__ import annotations

from fastapi.testclient import TestClient

from pokechess.engine.board import STARTPOS_FEN
from pokechess.protocol.http.app import create_app
from pokechess.protocol.http.session import InMemorySessionStore


def _client() -> TestClient:
    return TestClient(create_app())


def test_create_game_and_get_state() -> None:
    client = _client()
    r = client.post("/api/games")
    assert r.status_code == 200
    body = r.json()
    assert "game_id" in body and isinstance(body["game_id"], str) and body["game_id"]
    game_id = body["game_id"]
    assert body["fen"] == f"{STARTPOS_FEN} w"

    r2 = client.get(f"/api/games/{game_id}/state")
    assert r2.status_code == 200
    state = r2.json()
    assert state["game_id"] == game_id
    assert state["turn"] == "white"
    assert state["board"][0] == "rnbqkbnr"
    assert state["board"][4] == "........"
    assert len(state["moves"]) == 20
    assert state["last_move"] is None
    assert state["move_history"] == []
    assert state["captured"] == []


def test_get_state_unknown_id_404() -> None:
    client = _client()
    r = client.get("/api/games/does-not-exist/state")
    assert r.status_code == 404
    body = r.json()
    assert "error" in body
    assert body["error"]["code"] == "not_found"


def test_set_position_validation_and_success() -> None:
    client = _client()
    r = client.post("/api/games")
    game_id = r.json()["game_id"]

    r_bad = client.post(f"/api/games/{game_id}/position", json={"fen": "8/8/8 w"})
    assert r_bad.status_code == 400
    assert r_bad.json()["error"]["code"] == "bad_request"

    r_blank = client.post(f"/api/games/{game_id}/position", json={"fen": "   "})
    assert r_blank.status_code == 400
    assert r_blank.json()["error"]["message"] == "invalid FEN"

    fen = "4k3/8/8/8/8/8/4P3/4K3 b"
    r_ok = client.post(f"/api/games/{game_id}/position", json={"fen": fen})
    assert r_ok.status_code == 200
    state = r_ok.json()
    assert state["fen"] == fen
    assert state["turn"] == "black"
    assert state["move_history"] == []


def test_delete_game() -> None:
    store = InMemorySessionStore()
    client = TestClient(create_app(store))
    game_id = client.post("/api/games").json()["game_id"]
    assert len(store) == 1

    r = client.delete(f"/api/games/{game_id}")
    assert r.status_code == 204
    assert len(store) == 0
    assert client.get(f"/api/games/{game_id}/state").status_code == 404
    assert client.delete(f"/api/games/{game_id}").status_code == 404


def test_sessions_are_independent() -> None:
    client = _client()
    a = client.post("/api/games").json()["game_id"]
    b = client.post("/api/games").json()["game_id"]
    assert a != b
    client.post(f"/api/games/{a}/move", json={"move": "e2e4"})
    assert client.get(f"/api/games/{a}/state").json()["turn"] == "black"
    assert client.get(f"/api/games/{b}/state").json()["turn"] == "white"
