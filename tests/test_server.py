"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from aiohttp import test_utils

from linkvet.config import Config
from linkvet.pipeline.check import LinkChecker
from linkvet.server.app import CheckServer, create_app


def _app():
    return create_app(LinkChecker.from_config(Config(use_domain_age=False)))


@pytest.mark.asyncio
async def test_healthz_endpoint():
    async with test_utils.TestClient(test_utils.TestServer(_app())) as client:
        resp = await client.get("/healthz")
        assert resp.status == 200
        assert (await resp.json())["ok"] is True


@pytest.mark.asyncio
async def test_check_get_reports_ok():
    async with test_utils.TestClient(test_utils.TestServer(_app())) as client:
        resp = await client.get("/api/check")
        assert resp.status == 200
        assert await resp.json() == {"ok": True}


@pytest.mark.asyncio
async def test_check_post_returns_envelope():
    async with test_utils.TestClient(test_utils.TestServer(_app())) as client:
        resp = await client.post(
            "/api/check",
            json={
                "url": "https://urldefense.proofpoint.com/v2/url?u=https-3A__secure-login.top_reset",
                "context": "Reset your Microsoft password",
            },
        )
        assert resp.status == 200
        data = await resp.json()
        assert data["label"] == "LOW"
        assert data["score"] == 20
        assert data["target"] == {
            "original": "https://urldefense.proofpoint.com/v2/url?u=https-3A__secure-login.top_reset",
            "display": "https://secure-login.top/reset",
            "baseDomain": "secure-login.top",
            "via": ["Proofpoint"],
        }
        assert data["reasons"] == [
            "Uses risky top-level domain (.top)",
            "Domain does not match expected brand",
        ]
        assert data["meta"] == {"ageDays": None, "isGateway": False, "isVendorAsset": False}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload,error",
    [
        ({}, "Invalid URL provided"),
        ({"url": 7}, "Invalid URL provided"),
        ({"url": "not a url"}, "Invalid URL format"),
    ],
)
async def test_check_post_rejects_bad_input(payload, error):
    async with test_utils.TestClient(test_utils.TestServer(_app())) as client:
        resp = await client.post("/api/check", json=payload)
        assert resp.status == 400
        assert (await resp.json())["error"] == error


@pytest.mark.asyncio
async def test_check_post_rejects_invalid_json():
    async with test_utils.TestClient(test_utils.TestServer(_app())) as client:
        resp = await client.post("/api/check", data="{nope", headers={"Content-Type": "application/json"})
        assert resp.status == 400
        assert (await resp.json())["error"] == "Invalid JSON payload"


@pytest.mark.asyncio
async def test_check_post_resolution_error():
    async with test_utils.TestClient(test_utils.TestServer(_app())) as client:
        resp = await client.post(
            "/api/check",
            json={"url": "https://safelinks.protection.outlook.com/?url=nowhere"},
        )
        assert resp.status == 422
        data = await resp.json()
        assert data["gateway"] == "SafeLinks"
        assert "nowhere" not in data["error"]


class _ExplodingChecker(LinkChecker):
    async def check(self, url, context=None):  # noqa: ANN001
        raise RuntimeError("secret internal detail")


@pytest.mark.asyncio
async def test_unexpected_error_is_generic_500():
    server = CheckServer(_ExplodingChecker())
    async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
        resp = await client.post("/api/check", json={"url": "https://example.com"})
        assert resp.status == 500
        data = await resp.json()
        assert data == {"error": "Internal server error"}
