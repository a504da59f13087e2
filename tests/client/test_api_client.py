"""
Tests du client HTTP de l'API d'administration (rafraîchissement du token).
"""
import asyncio
import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.client.api_client import AdminApiClient
from src.client.exceptions import ApiError, AuthenticationExpiredError
from src.config import settings
from src.main import app
from src.users.models import Account

pytestmark = pytest.mark.asyncio

BASE_URL = "http://api.test/api/v1"


class FakeApi:
    """Serveur simulé: seul le token 'fresh' est accepté, le refresh token 'r1' est valide."""

    def __init__(self, refresh_ok: bool = True):
        self.refresh_ok = refresh_ok
        self.refresh_calls = 0
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path, request.headers.get("Authorization")))
        if path.endswith("/auth/refresh"):
            self.refresh_calls += 1
            body = json.loads(request.content)
            if self.refresh_ok and body["refresh_token"] == "r1":
                return httpx.Response(200, json={"token": "fresh"})
            return httpx.Response(401, json={"detail": "Refresh token invalide."})
        if request.headers.get("Authorization") != "Bearer fresh":
            return httpx.Response(401, json={"detail": "Token invalide."})
        if path.endswith("/missing"):
            return httpx.Response(404, json={"detail": "Introuvable."})
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json={"path": path})


async def test_refreshes_once_and_retries():
    api = FakeApi()
    async with AdminApiClient(BASE_URL, "stale", "r1", transport=httpx.MockTransport(api)) as client:
        data = await client.get("/orders/")

    assert data == {"path": "/api/v1/orders/"}
    assert client.access_token == "fresh"
    assert api.refresh_calls == 1
    assert [call[2] for call in api.calls if call[1].endswith("/orders/")] == ["Bearer stale", "Bearer fresh"]

async def test_concurrent_401_share_a_single_refresh():
    """Teste que plusieurs requêtes rejetées en même temps ne déclenchent qu'un rafraîchissement."""
    api = FakeApi()
    async with AdminApiClient(BASE_URL, "stale", "r1", transport=httpx.MockTransport(api)) as client:
        results = await asyncio.gather(*(client.get(f"/products/{i}") for i in range(1, 6)))

    assert [r["path"] for r in results] == [f"/api/v1/products/{i}" for i in range(1, 6)]
    assert api.refresh_calls == 1

async def test_refresh_failure_clears_tokens():
    api = FakeApi(refresh_ok=False)
    client = AdminApiClient(BASE_URL, "stale", "r1", transport=httpx.MockTransport(api))
    with pytest.raises(AuthenticationExpiredError) as exc_info:
        await client.get("/orders/")
    await client.aclose()

    assert exc_info.value.status_code == 401
    assert client.access_token is None
    assert client.refresh_token is None
    assert api.refresh_calls == 1

async def test_without_refresh_token():
    api = FakeApi()
    async with AdminApiClient(BASE_URL, "stale", None, transport=httpx.MockTransport(api)) as client:
        with pytest.raises(AuthenticationExpiredError):
            await client.get("/orders/")
    assert api.refresh_calls == 0

async def test_error_status_raises_api_error():
    api = FakeApi()
    async with AdminApiClient(BASE_URL, "fresh", "r1", transport=httpx.MockTransport(api)) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.get("/missing")
        assert await client.delete("/discounts/1") is None

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Introuvable."
    assert api.refresh_calls == 0

async def test_login_and_call_real_app(test_client: AsyncClient, test_user: Account):
    """Teste le client contre l'application réelle (session de test partagée)."""
    transport = ASGITransport(app=app)
    async with AdminApiClient(f"http://test{settings.API_V1_PREFIX}", transport=transport) as client:
        data = await client.login("testuser@example.com", "testpassword")
        assert data["email"] == "testuser@example.com"
        assert client.refresh_token is not None

        client.access_token = "expired-or-garbage"
        me = await client.get("/auth/me")

    assert me["email"] == "testuser@example.com"
