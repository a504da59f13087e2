"""
Tests d'intégration pour les endpoints des produits.
"""
from decimal import Decimal

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from src.categories.models import Category
from src.config import settings
from src.orders.models import Order, OrderItem
from src.product_variants.models import ProductVariant
from src.products.models import Product
from src.users.models import Customer

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio


async def add_product(session: AsyncSession, name: str, category: Category, brand: str = None, sold: int = 0) -> Product:
    product = Product(name=name, brand=brand, category_id=category.id)
    session.add(product)
    await session.flush()
    if sold:
        session.add(ProductVariant(
            sku=f"{name[:3].upper()}-{product.id}", price=Decimal("10.00"), stock_quantity=5,
            product_id=product.id, sold_quantity=sold,
        ))
    await session.commit()
    await session.refresh(product)
    return product

# --- Création ---

async def test_create_product_success(test_client: AsyncClient, auth_headers_admin: dict[str, str], test_category: Category):
    """Teste la création d'un produit par un admin: détail sans variantes."""
    product_data = {
        "name": "Polo Piqué",
        "description": "Polo manches courtes",
        "brand": "Maison",
        "category_id": test_category.id,
    }
    response = await test_client.post(f"{API_PREFIX}/products/", json=product_data, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "Polo Piqué"
    assert data["category_name"] == test_category.name
    assert data["variants"] == []
    assert data["attributes"] == []

async def test_create_product_unknown_category(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    response = await test_client.post(
        f"{API_PREFIX}/products/", json={"name": "Orphelin", "category_id": 999}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_create_product_forbidden_for_manager(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_category: Category
):
    response = await test_client.post(
        f"{API_PREFIX}/products/", json={"name": "Interdit", "category_id": test_category.id}, headers=auth_headers_manager
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN

# --- Lecture ---

async def test_get_product_detail_with_variants(test_client: AsyncClient, test_variant: ProductVariant):
    """Teste le détail produit: variantes et attributs agrégés triés par nom."""
    response = await test_client.get(f"{API_PREFIX}/products/{test_variant.product_id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [v["sku"] for v in data["variants"]] == ["TSHIRT-RED-M"]
    assert [a["name"] for a in data["attributes"]] == ["Couleur", "Taille"]
    assert [v["value"] for v in data["attributes"][0]["values"]] == ["Rouge"]
    variant_attributes = {a["attribute_name"]: a["value"] for a in data["variants"][0]["attributes"]}
    assert variant_attributes == {"Couleur": "Rouge", "Taille": "M"}

async def test_get_product_not_found(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/products/9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_list_products_filters(test_client: AsyncClient, db_session: AsyncSession, test_category: Category):
    """Teste les filtres CSV catégorie et marque."""
    other = Category(name="Pulls")
    db_session.add(other)
    await db_session.commit()
    await add_product(db_session, "Pull Marin", other, brand="Armor")
    await add_product(db_session, "T-shirt Col V", test_category, brand="Maison")
    await add_product(db_session, "T-shirt Rayé", test_category, brand="Armor")

    response = await test_client.get(f"{API_PREFIX}/products/", params={"category_id": str(test_category.id)})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["total"] == 2

    response = await test_client.get(f"{API_PREFIX}/products/", params={"brand": "Armor"})
    assert {p["name"] for p in response.json()["items"]} == {"Pull Marin", "T-shirt Rayé"}

    response = await test_client.get(
        f"{API_PREFIX}/products/", params={"brand": "Armor,Maison", "category_id": f"{other.id}"}
    )
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["category_name"] == "Pulls"
    assert response.headers["Content-Range"] == "products 0-0/1"

async def test_list_products_sorted_by_sales(test_client: AsyncClient, db_session: AsyncSession, test_category: Category):
    await add_product(db_session, "Peu vendu", test_category, sold=1)
    await add_product(db_session, "Best-seller", test_category, sold=50)
    await add_product(db_session, "Jamais vendu", test_category)

    response = await test_client.get(
        f"{API_PREFIX}/products/", params={"sort_by": "total_sold_quantity", "sort_order": "desc"}
    )
    assert response.status_code == status.HTTP_200_OK
    items = response.json()["items"]
    assert [p["name"] for p in items] == ["Best-seller", "Peu vendu", "Jamais vendu"]
    assert items[0]["total_sold_quantity"] == 50
    assert items[2]["total_sold_quantity"] == 0

async def test_list_products_search(test_client: AsyncClient, db_session: AsyncSession, test_category: Category):
    await add_product(db_session, "Chemise Oxford", test_category)
    await add_product(db_session, "Short", test_category)
    response = await test_client.get(f"{API_PREFIX}/products/", params={"search": "oxford"})
    assert [p["name"] for p in response.json()["items"]] == ["Chemise Oxford"]

async def test_list_products_invalid_sort(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/products/", params={"sort_by": "price"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_list_brands(test_client: AsyncClient, db_session: AsyncSession, test_category: Category):
    await add_product(db_session, "A", test_category, brand="Zeta")
    await add_product(db_session, "B", test_category, brand="Alpha")
    await add_product(db_session, "C", test_category, brand="Alpha")
    await add_product(db_session, "D", test_category)
    response = await test_client.get(f"{API_PREFIX}/products/brands")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == ["Alpha", "Zeta"]

async def test_list_products_by_category(test_client: AsyncClient, test_product: Product):
    response = await test_client.get(f"{API_PREFIX}/products/category/{test_product.category_id}")
    assert response.status_code == status.HTTP_200_OK
    assert [p["id"] for p in response.json()] == [test_product.id]

    response = await test_client.get(f"{API_PREFIX}/products/category/9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND

# --- Mise à jour / suppression ---

async def test_update_product(test_client: AsyncClient, auth_headers_admin: dict[str, str], test_product: Product):
    response = await test_client.put(
        f"{API_PREFIX}/products/{test_product.id}",
        json={"name": "T-shirt Premium", "brand": "Luxe"},
        headers=auth_headers_admin,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "T-shirt Premium"
    assert data["brand"] == "Luxe"
    assert data["description"] == test_product.description

async def test_update_product_null_name_kept(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_product: Product
):
    """Teste qu'un nom ou une catégorie à null ne vide pas les colonnes obligatoires."""
    response = await test_client.put(
        f"{API_PREFIX}/products/{test_product.id}",
        json={"name": None, "category_id": None, "brand": "Luxe"},
        headers=auth_headers_admin,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == test_product.name
    assert data["category_id"] == test_product.category_id
    assert data["brand"] == "Luxe"

async def test_update_product_unknown_category(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_product: Product
):
    response = await test_client.put(
        f"{API_PREFIX}/products/{test_product.id}", json={"category_id": 999}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_delete_product_cascades_variants(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_variant: ProductVariant
):
    """Teste que la suppression d'un produit supprime ses variantes."""
    response = await test_client.delete(f"{API_PREFIX}/products/{test_variant.product_id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = await test_client.get(f"{API_PREFIX}/products/{test_variant.product_id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    response = await test_client.get(f"{API_PREFIX}/variants/{test_variant.id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_delete_ordered_product(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_admin: dict[str, str],
    test_variant: ProductVariant,
    test_customer: Customer,
):
    """Teste qu'un produit dont une variante a été commandée ne peut pas être supprimé."""
    order = Order(customer_id=test_customer.id, shipping_address="1 rue des Tests")
    db_session.add(order)
    await db_session.flush()
    db_session.add(OrderItem(order_id=order.id, product_variant_id=test_variant.id, quantity=1, unit_price=test_variant.price))
    await db_session.commit()

    response = await test_client.delete(f"{API_PREFIX}/products/{test_variant.product_id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
