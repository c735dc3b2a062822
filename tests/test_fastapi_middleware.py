"""Tests for FastAPI/Starlette middleware."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.testclient import TestClient

from siteline import PageviewData, Siteline
from siteline.middleware.fastapi import SitelineMiddleware


def _make_client():
    """Create a mock Siteline client with a sync track method."""
    return MagicMock(spec=Siteline)


def _make_app(client, **kwargs):
    """Create a FastAPI app with Siteline middleware."""
    app = FastAPI()
    app.add_middleware(SitelineMiddleware, client=client, **kwargs)

    @app.get("/api/search")
    async def search():
        return {"results": []}

    @app.post("/api/items")
    async def create_item():
        return PlainTextResponse("created", status_code=201)

    @app.get("/go")
    async def go():
        return RedirectResponse("https://redirect.com", status_code=307)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("Middleware error")

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


def _tracked(client) -> PageviewData:
    return client.track.call_args[0][0]


class TestFastAPIMiddlewareBasic:
    def test_passes_through_response(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        resp = test_client.get("/api/search")

        assert resp.status_code == 200
        assert resp.json() == {"results": []}
        client.track.assert_called_once()

    def test_preserves_status_and_body(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        resp = test_client.post("/api/items")

        assert resp.status_code == 201
        assert resp.text == "created"
        assert _tracked(client).status == 201
        assert _tracked(client).method == "POST"

    def test_preserves_redirect(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        resp = test_client.get("/go", follow_redirects=False)

        assert resp.status_code == 307
        assert _tracked(client).status == 307

    def test_tracks_not_found(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        test_client.get("/missing")

        assert _tracked(client).status == 404

    def test_excludes_health_from_tracking(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        test_client.get("/health")

        client.track.assert_not_called()

    def test_custom_exclude_paths(self):
        client = _make_client()
        test_client = TestClient(_make_app(client, exclude_paths={"/api/search"}))

        test_client.get("/api/search")
        test_client.get("/health")

        assert client.track.call_count == 1
        assert _tracked(client).url.endswith("/health")

    def test_app_errors_propagate_untracked(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        with pytest.raises(RuntimeError, match="Middleware error"):
            test_client.get("/boom")
        client.track.assert_not_called()


class TestFastAPIMiddlewareMetadata:
    def test_captures_request_metadata(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        test_client.get(
            "/api/search?q=shoes",
            headers={
                "user-agent": "Mozilla/5.0",
                "referer": "https://referrer.com",
                "x-forwarded-for": "203.0.113.1, 198.51.100.1",
            },
        )

        data = _tracked(client)
        assert isinstance(data, PageviewData)
        assert data.url == "http://testserver/api/search?q=shoes"
        assert data.method == "GET"
        assert data.status == 200
        assert data.duration >= 0
        assert data.user_agent == "Mozilla/5.0"
        assert data.ref == "https://referrer.com"
        assert data.ip == "203.0.113.1"

    def test_real_ip_header(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        test_client.get("/api/search", headers={"x-real-ip": "203.0.113.2"})

        assert _tracked(client).ip == "203.0.113.2"

    def test_falls_back_to_peer_address(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        test_client.get("/api/search")

        assert _tracked(client).ip == "testclient"

    def test_missing_referer(self):
        client = _make_client()
        test_client = TestClient(_make_app(client))

        test_client.get("/api/search")

        assert _tracked(client).ref is None


class TestFastAPIMiddlewareSharedClient:
    def test_uses_shared_client(self, monkeypatch):
        shared = _make_client()
        get_client = MagicMock(return_value=shared)
        monkeypatch.setattr("siteline.middleware.fastapi.get_client", get_client)

        app = _make_app(None, website_key="siteline_secret_" + "a" * 32, debug=True)
        TestClient(app).get("/api/search")

        get_client.assert_called_with(
            website_key="siteline_secret_" + "a" * 32,
            endpoint=None,
            debug=True,
            integration_type="fastapi",
        )
        shared.track.assert_called_once()

    def test_no_client_still_serves_requests(self, monkeypatch):
        monkeypatch.setattr(
            "siteline.middleware.fastapi.get_client", MagicMock(return_value=None)
        )
        app = _make_app(None)

        resp = TestClient(app).get("/api/search")

        assert resp.status_code == 200
        assert resp.json() == {"results": []}
