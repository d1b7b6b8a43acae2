"""
Tests for the Mihomo client and the profile proxy route.

Run with: pytest tests/test_mihomo_client.py -v
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from shared.mihomo_client import MihomoClient

PROFILE = b'{"player": {"uid": "800123456", "nickname": "Trailblazer"}}'


async def test_fetch_profile_builds_request():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=PROFILE)

    client = MihomoClient(transport=httpx.MockTransport(handler))

    status_code, body = await client.fetch_profile("800123456", lang="jp")

    assert (status_code, body) == (200, PROFILE)
    assert seen[0].url.path == "/sr_info_parsed/800123456"
    assert seen[0].url.params["lang"] == "jp"
    assert str(seen[0].url).startswith("https://api.mihomo.me/")


async def test_fetch_profile_passes_upstream_errors_through():
    client = MihomoClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(404, content=b'{"detail": "Invalid uid"}'))
    )

    status_code, body = await client.fetch_profile("1")

    assert status_code == 404
    assert body == b'{"detail": "Invalid uid"}'


async def test_route_passes_body_and_status_through(client, monkeypatch):
    fetch = AsyncMock(return_value=(200, PROFILE))
    monkeypatch.setattr(MihomoClient, "fetch_profile", fetch)

    response = await client.get("/api/mihomo/800123456")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json()["player"]["nickname"] == "Trailblazer"
    fetch.assert_awaited_once_with("800123456")


async def test_route_returns_502_when_upstream_unreachable(client, monkeypatch):
    monkeypatch.setattr(
        MihomoClient,
        "fetch_profile",
        AsyncMock(side_effect=httpx.ConnectError("connection refused")),
    )

    response = await client.get("/api/mihomo/800123456")

    assert response.status_code == 502
    assert response.json()["message"] == "Failed to fetch from Mihomo API"
    assert response.json()["error_category"] == "external_api_error"


@pytest.mark.parametrize("uid", ["abc", "12a", "1" * 21])
async def test_route_rejects_non_numeric_uid(client, uid):
    response = await client.get(f"/api/mihomo/{uid}")

    assert response.status_code == 422


async def test_route_is_rate_limited(client, monkeypatch):
    monkeypatch.setattr(MihomoClient, "fetch_profile", AsyncMock(return_value=(200, PROFILE)))

    for _ in range(30):
        assert (await client.get("/api/mihomo/800123456")).status_code == 200

    response = await client.get("/api/mihomo/800123456")

    assert response.status_code == 429
