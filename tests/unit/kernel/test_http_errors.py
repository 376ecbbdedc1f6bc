from __future__ import annotations

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from ventureai.api.middleware import RequestIDMiddleware
from ventureai.kernel.errors import InvalidTurnError, VentureError
from ventureai.kernel.http.errors import register_exception_handlers

pytestmark = [pytest.mark.unit]


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    return app


def test_venture_error_payload_includes_code_meta_and_request_id():
    app = _app()

    @app.get("/turn")
    async def turn():  # pragma: no cover - exercised via request
        raise InvalidTurnError(role="assistant")

    response = TestClient(app).get("/turn", headers={"X-Request-ID": "req_42"})

    assert response.status_code == 400
    assert response.json() == {
        "detail": "Last message must be from user",
        "code": "conversation.invalid_turn",
        "request_id": "req_42",
        "meta": {"role": "assistant"},
    }
    assert response.headers["X-Request-ID"] == "req_42"


def test_http_exception_keeps_detail_and_status():
    app = _app()

    @app.get("/missing")
    async def missing():  # pragma: no cover - exercised via request
        raise HTTPException(status_code=404, detail="Venture not found")

    response = TestClient(app).get("/missing")

    assert response.status_code == 404
    payload = response.json()
    assert payload["detail"] == "Venture not found"
    assert payload["code"] == "http.404"
    assert payload["request_id"] == response.headers["X-Request-ID"]


def test_request_validation_error_shape():
    app = _app()

    class Body(BaseModel):
        message: str

    @app.post("/chat")
    async def chat(body: Body):  # pragma: no cover - exercised via request
        return {"ok": True}

    response = TestClient(app).post("/chat", json={})

    assert response.status_code == 422
    payload = response.json()
    assert isinstance(payload["detail"], list)
    assert payload["code"] == "http.validation_error"


def test_unhandled_exception_is_hidden_behind_stable_payload():
    app = _app()

    @app.get("/crash")
    async def crash():  # pragma: no cover - exercised via request
        raise RuntimeError("database password is hunter2")

    response = TestClient(app, raise_server_exceptions=False).get("/crash")

    assert response.status_code == 500
    payload = response.json()
    assert payload["code"] == "internal.unhandled"
    assert "hunter2" not in response.text


def test_error_code_format_is_enforced():
    with pytest.raises(ValueError):
        VentureError(code="Bad Code", message="nope")
