"""
Tests d'intégration pour les attributs de variantes et leurs valeurs.
"""
import pytest
from httpx import AsyncClient
from fastapi import status

from src.attributes.models import Attribute
from src.config import settings
from src.product_variants.models import ProductVariant

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio


async def test_create_attribute_and_values(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    """Teste la création d'un attribut puis l'ajout de valeurs."""
    response = await test_client.post(f"{API_PREFIX}/attributes/", json={"name": "Matière"}, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_201_CREATED
    attribute_id = response.json()["id"]
    assert response.json()["values"] == []

    response = await test_client.post(
        f"{API_PREFIX}/attributes/{attribute_id}/values", json={"value": "Coton"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["attribute_id"] == attribute_id

    response = await test_client.get(f"{API_PREFIX}/attributes/{attribute_id}")
    assert response.status_code == status.HTTP_200_OK
    assert [v["value"] for v in response.json()["values"]] == ["Coton"]

async def test_create_attribute_duplicate(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], color_attribute: Attribute
):
    response = await test_client.post(f"{API_PREFIX}/attributes/", json={"name": "Couleur"}, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_409_CONFLICT

async def test_add_duplicate_value(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], color_attribute: Attribute
):
    response = await test_client.post(
        f"{API_PREFIX}/attributes/{color_attribute.id}/values", json={"value": "Rouge"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_409_CONFLICT

async def test_list_attributes(test_client: AsyncClient, color_attribute: Attribute, size_attribute: Attribute):
    response = await test_client.get(f"{API_PREFIX}/attributes/", params={"sort_by": "name", "sort_order": "asc"})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 2
    assert [a["name"] for a in data["items"]] == ["Couleur", "Taille"]
    assert response.headers["Content-Range"] == "attributes 0-1/2"

async def test_rename_attribute(test_client: AsyncClient, auth_headers_admin: dict[str, str], size_attribute: Attribute):
    response = await test_client.put(
        f"{API_PREFIX}/attributes/{size_attribute.id}", json={"name": "Pointure"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Pointure"

async def test_update_attribute_null_name(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], size_attribute: Attribute
):
    response = await test_client.put(
        f"{API_PREFIX}/attributes/{size_attribute.id}", json={"name": None}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == size_attribute.name

async def test_delete_attribute_with_values(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], color_attribute: Attribute
):
    """Teste qu'un attribut possédant des valeurs ne peut pas être supprimé."""
    response = await test_client.delete(f"{API_PREFIX}/attributes/{color_attribute.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_delete_value_used_by_variant(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_variant: ProductVariant, color_attribute: Attribute
):
    attribute = (await test_client.get(f"{API_PREFIX}/attributes/{color_attribute.id}")).json()
    red = next(v for v in attribute["values"] if v["value"] == "Rouge")
    response = await test_client.delete(
        f"{API_PREFIX}/attributes/{color_attribute.id}/values/{red['id']}", headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_delete_unused_value_then_attribute(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], size_attribute: Attribute
):
    attribute = (await test_client.get(f"{API_PREFIX}/attributes/{size_attribute.id}")).json()
    value_id = attribute["values"][0]["id"]
    response = await test_client.delete(
        f"{API_PREFIX}/attributes/{size_attribute.id}/values/{value_id}", headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = await test_client.delete(f"{API_PREFIX}/attributes/{size_attribute.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_204_NO_CONTENT

async def test_delete_value_wrong_attribute(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], color_attribute: Attribute, size_attribute: Attribute
):
    attribute = (await test_client.get(f"{API_PREFIX}/attributes/{size_attribute.id}")).json()
    value_id = attribute["values"][0]["id"]
    response = await test_client.delete(
        f"{API_PREFIX}/attributes/{color_attribute.id}/values/{value_id}", headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
