from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from src.protocol.http.app import create_app
from src.rules.errors import IllegalOperation


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app()

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=400, detail="oops")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert err["message"] == "oops"
    assert err["type"] == "client_error"
    assert err["request_id"] == r.headers["x-request-id"]


def test_malformed_fen_reports_field() -> None:
    client = TestClient(create_app())
    r = client.post("/api/games", json={"fen": "4k3/8/8/8/8/8/8/4K3 w - e3 0 1"})
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert err["field_errors"][0]["field"] == "en_passant"


def test_request_validation_is_422() -> None:
    client = TestClient(create_app())
    game_id = client.post("/api/games").json()["game_id"]
    r = client.post(f"/api/games/{game_id}/move", json={})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any(fe["field"].endswith("move") for fe in err["field_errors"])


def test_internal_fault_is_500() -> None:
    app: FastAPI = create_app()

    @app.get("/fault")
    def fault():  # type: ignore[no-redef]
        raise IllegalOperation("unmake called with no prior move")

    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/fault")
    assert r.status_code == 500
    err = r.json()["error"]
    assert err["code"] == "internal_error"
    assert err["type"] == "server_error"
    # Internal details are not leaked
    assert "unmake" not in err["message"]


def test_non_ascii_clock_is_400_not_500() -> None:
    client = TestClient(create_app())
    r = client.post("/api/games", json={"fen": "4k3/8/8/8/8/8/8/4K3 w - - ² 1"})
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert err["field_errors"][0]["field"] == "halfmove_clock"
