from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from pokechess.protocol.http.app import create_app


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app()

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=409, detail="oops")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 409
    body = r.json()
    assert "error" in body
    err = body["error"]
    assert err["code"] == "conflict"
    assert err["message"] == "oops"
    assert err["type"] == "client_error"
    assert err["request_id"]


def test_unknown_route_uses_envelope() -> None:
    client = TestClient(create_app())
    r = client.get("/no/such/route")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"


def test_unhandled_exception_maps_to_500() -> None:
    app: FastAPI = create_app()

    @app.get("/crash")
    def crash():  # type: ignore[no-redef]
        raise RuntimeError("kaboom")

    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/crash")
    assert r.status_code == 500
    err = r.json()["error"]
    assert err["code"] == "internal_error"
    assert err["type"] == "server_error"
    assert "kaboom" not in err["message"]
