"""
Tests des endpoints de tableaux de bord et de santé.
"""
import pytest
from httpx import AsyncClient
from fastapi import status

from src.config import settings

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio


async def test_health_check(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok", "message": "Server is running"}

async def test_read_dashboards(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], monkeypatch: pytest.MonkeyPatch
):
    """Teste que les URLs des rapports proviennent de la configuration."""
    monkeypatch.setattr(settings, "DASHBOARD_EMBED_URL", "https://bi.example.com/embed/overview")
    monkeypatch.setattr(settings, "REPORT_EMBED_URLS", {"ventes": "https://bi.example.com/embed/sales"})

    response = await test_client.get(f"{API_PREFIX}/dashboards/", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "dashboard_url": "https://bi.example.com/embed/overview",
        "reports": {"ventes": "https://bi.example.com/embed/sales"},
    }

async def test_read_dashboards_forbidden_for_customers(test_client: AsyncClient, auth_headers_user: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/dashboards/", headers=auth_headers_user)
    assert response.status_code == status.HTTP_403_FORBIDDEN
