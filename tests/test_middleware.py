"""Tests for the Content-Length check in front of the upload route."""

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from vehicle_docs.middleware import UploadSizeLimitMiddleware


def _app(calls):
    app = FastAPI()
    app.add_middleware(UploadSizeLimitMiddleware, max_bytes=10, paths=["/api/upload"], form_overhead=4)

    @app.post("/api/upload")
    async def upload(request: Request):
        calls.append(await request.body())
        return {"ok": True}

    @app.post("/api/other")
    async def other(request: Request):
        calls.append(await request.body())
        return {"ok": True}

    return app


def test_declared_oversize_is_rejected_before_the_route():
    calls = []
    client = TestClient(_app(calls))

    response = client.post("/api/upload", content=b"x" * 15)

    assert response.status_code == 400
    assert response.json() == {"message": "File upload error", "error": "File too large (max 10 bytes)"}
    assert calls == []


def test_body_within_overhead_reaches_the_route():
    calls = []
    client = TestClient(_app(calls))

    response = client.post("/api/upload", content=b"x" * 14)

    assert response.status_code == 200
    assert calls == [b"x" * 14]


def test_other_paths_are_not_limited():
    calls = []
    client = TestClient(_app(calls))

    response = client.post("/api/other", content=b"x" * 100)

    assert response.status_code == 200
    assert len(calls) == 1
