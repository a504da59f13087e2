"""
Tests d'intégration pour les endpoints des réductions.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.core.dates import utc_now
from src.discounts.models import Discount
from src.product_variants.models import ProductVariant

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture(scope="function")
async def test_discount(db_session: AsyncSession, test_variant: ProductVariant) -> Discount:
    """Réduction de 10% active sur la variante de test, sans bornes de dates."""
    discount = Discount(
        product_variant_id=test_variant.id,
        code="SUMMER10",
        name="Soldes d'été",
        type="Percentage",
        value=Decimal("10"),
    )
    db_session.add(discount)
    await db_session.commit()
    await db_session.refresh(discount)
    return discount

# --- Droits d'accès ---

async def test_discounts_require_staff(test_client: AsyncClient, auth_headers_user: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/discounts/")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    response = await test_client.get(f"{API_PREFIX}/discounts/", headers=auth_headers_user)
    assert response.status_code == status.HTTP_403_FORBIDDEN

# --- Création ---

async def test_create_discount(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_variant: ProductVariant
):
    """Teste la création d'une réduction en cours de validité."""
    now = utc_now()
    discount_data = {
        "product_variant_id": test_variant.id,
        "code": "WELCOME5",
        "name": "Bienvenue",
        "type": "FixedAmount",
        "value": "5.00",
        "start_date": (now - timedelta(days=1)).isoformat(),
        "end_date": (now + timedelta(days=7)).isoformat(),
    }
    response = await test_client.post(f"{API_PREFIX}/discounts/", json=discount_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["code"] == "WELCOME5"
    assert data["status"] == "Active"
    assert data["variant_sku"] == "TSHIRT-RED-M"
    assert data["product_name"] == "T-shirt Basique"
    assert data["is_active_now"] is True

async def test_create_discount_future_is_not_active_now(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_variant: ProductVariant
):
    now = utc_now()
    discount_data = {
        "product_variant_id": test_variant.id,
        "code": "LATER",
        "name": "Plus tard",
        "type": "Percentage",
        "value": "20",
        "start_date": (now + timedelta(days=10)).isoformat(),
        "end_date": (now + timedelta(days=20)).isoformat(),
    }
    response = await test_client.post(f"{API_PREFIX}/discounts/", json=discount_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["is_active_now"] is False

async def test_create_discount_percentage_over_100(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_variant: ProductVariant
):
    discount_data = {
        "product_variant_id": test_variant.id,
        "code": "TOOMUCH",
        "name": "Trop",
        "type": "Percentage",
        "value": "150",
    }
    response = await test_client.post(f"{API_PREFIX}/discounts/", json=discount_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_create_discount_end_before_start(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_variant: ProductVariant
):
    now = utc_now()
    discount_data = {
        "product_variant_id": test_variant.id,
        "code": "BACKWARDS",
        "name": "A l'envers",
        "type": "FixedAmount",
        "value": "3",
        "start_date": now.isoformat(),
        "end_date": (now - timedelta(days=1)).isoformat(),
    }
    response = await test_client.post(f"{API_PREFIX}/discounts/", json=discount_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_create_discount_unknown_type(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_variant: ProductVariant
):
    discount_data = {
        "product_variant_id": test_variant.id,
        "code": "BOGUS",
        "name": "Inconnu",
        "type": "BuyOneGetOne",
        "value": "1",
    }
    response = await test_client.post(f"{API_PREFIX}/discounts/", json=discount_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

async def test_create_discount_unknown_variant(test_client: AsyncClient, auth_headers_manager: dict[str, str]):
    discount_data = {"product_variant_id": 999, "code": "GHOST", "name": "Fantôme", "type": "FixedAmount", "value": "1"}
    response = await test_client.post(f"{API_PREFIX}/discounts/", json=discount_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_create_discount_duplicate_code(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_discount: Discount
):
    discount_data = {
        "product_variant_id": test_discount.product_variant_id,
        "code": test_discount.code,
        "name": "Doublon",
        "type": "FixedAmount",
        "value": "1",
    }
    response = await test_client.post(f"{API_PREFIX}/discounts/", json=discount_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_409_CONFLICT

# --- Lecture ---

async def test_read_discount(test_client: AsyncClient, auth_headers_admin: dict[str, str], test_discount: Discount):
    response = await test_client.get(f"{API_PREFIX}/discounts/{test_discount.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["code"] == "SUMMER10"
    assert data["is_active_now"] is True

async def test_read_discount_not_found(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/discounts/9999", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_list_discounts_filters(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_manager: dict[str, str],
    test_discount: Discount,
):
    """Teste les filtres par statut, type et recherche textuelle."""
    db_session.add(Discount(
        product_variant_id=test_discount.product_variant_id,
        code="OLD5",
        name="Ancienne offre",
        type="FixedAmount",
        value=Decimal("5"),
        status="Inactive",
    ))
    await db_session.commit()

    response = await test_client.get(f"{API_PREFIX}/discounts/", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["total"] == 2
    assert response.headers["Content-Range"] == "discounts 0-1/2"

    response = await test_client.get(f"{API_PREFIX}/discounts/", params={"status": "Inactive"}, headers=auth_headers_manager)
    data = response.json()
    assert [d["code"] for d in data["items"]] == ["OLD5"]
    assert data["items"][0]["is_active_now"] is False

    response = await test_client.get(f"{API_PREFIX}/discounts/", params={"type": "Percentage"}, headers=auth_headers_manager)
    assert [d["code"] for d in response.json()["items"]] == ["SUMMER10"]

    response = await test_client.get(f"{API_PREFIX}/discounts/", params={"search": "été"}, headers=auth_headers_manager)
    assert [d["code"] for d in response.json()["items"]] == ["SUMMER10"]

async def test_list_discounts_invalid_sort(test_client: AsyncClient, auth_headers_manager: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/discounts/", params={"sort_by": "password"}, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

# --- Mise à jour / suppression ---

async def test_update_discount_deactivate(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_discount: Discount
):
    response = await test_client.put(
        f"{API_PREFIX}/discounts/{test_discount.id}", json={"status": "Inactive"}, headers=auth_headers_manager
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "Inactive"
    assert data["is_active_now"] is False
    assert data["code"] == "SUMMER10"

async def test_update_discount_validates_against_stored_type(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_discount: Discount
):
    """Teste qu'une nouvelle valeur seule est validée avec le type déjà enregistré."""
    response = await test_client.put(
        f"{API_PREFIX}/discounts/{test_discount.id}", json={"value": "120"}, headers=auth_headers_manager
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_update_discount_empty_body(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_discount: Discount
):
    response = await test_client.put(f"{API_PREFIX}/discounts/{test_discount.id}", json={}, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_delete_discount(test_client: AsyncClient, auth_headers_manager: dict[str, str], test_discount: Discount):
    response = await test_client.delete(f"{API_PREFIX}/discounts/{test_discount.id}", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    response = await test_client.get(f"{API_PREFIX}/discounts/{test_discount.id}", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_delete_discount_not_found(test_client: AsyncClient, auth_headers_manager: dict[str, str]):
    response = await test_client.delete(f"{API_PREFIX}/discounts/9999", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_404_NOT_FOUND
