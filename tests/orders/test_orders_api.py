"""
Tests d'intégration pour les endpoints des commandes et de leur cycle de vie.
"""
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.orders.models import Order, OrderItem
from src.product_variants.models import ProductVariant
from src.users.models import Customer, Manager

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio


async def insert_order(
    session: AsyncSession,
    customer: Customer,
    variant: ProductVariant,
    order_status: str = "Pending",
    payment_status: str = "Pending",
) -> Order:
    order = Order(
        customer_id=customer.id,
        shipping_address="1 rue des Tests, Paris",
        status=order_status,
        payment_status=payment_status,
        payment_amount=variant.price,
    )
    session.add(order)
    await session.flush()
    session.add(OrderItem(order_id=order.id, product_variant_id=variant.id, quantity=1, unit_price=variant.price))
    await session.commit()
    await session.refresh(order)
    return order

@pytest_asyncio.fixture(scope="function")
async def test_order(db_session: AsyncSession, test_customer: Customer, test_variant: ProductVariant) -> Order:
    """Commande en attente du client de test."""
    return await insert_order(db_session, test_customer, test_variant)

# --- Création ---

async def test_create_order_by_customer(
    test_client: AsyncClient, auth_headers_user: dict[str, str], test_customer: Customer, test_variant: ProductVariant
):
    """Teste qu'un client commande pour lui-même au prix courant de la variante."""
    order_data = {
        "shipping_address": "1 rue des Tests, Paris",
        "items": [{"product_variant_id": test_variant.id, "quantity": 3, "note": "Emballage cadeau"}],
    }
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_user)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["customer_id"] == test_customer.id
    assert data["status"] == "Pending"
    assert data["payment_status"] == "Pending"
    assert data["payment_method"] == "Credit Card"
    assert Decimal(str(data["payment_amount"])) == Decimal("59.97")
    assert data["customer_name"] == "Test User"
    assert data["customer_phone"] == "0600000001"

    item = data["items"][0]
    assert item["quantity"] == 3
    assert Decimal(str(item["unit_price"])) == Decimal("19.99")
    assert item["variant_sku"] == "TSHIRT-RED-M"
    assert item["product_name"] == "T-shirt Basique"
    assert item["note"] == "Emballage cadeau"

    assert len(data["history"]) == 1
    assert data["history"][0]["previous_status"] is None
    assert data["history"][0]["new_status"] == "Pending"
    assert data["history"][0]["manager_id"] is None

async def test_create_order_defaults_to_customer_address(
    test_client: AsyncClient, auth_headers_user: dict[str, str], test_customer: Customer, test_variant: ProductVariant
):
    """Teste qu'une commande sans adresse de livraison part à l'adresse du client."""
    order_data = {"items": [{"product_variant_id": test_variant.id, "quantity": 1}]}
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_user)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["shipping_address"] == "1 rue des Tests, Paris"

async def test_create_order_without_any_address(
    test_client: AsyncClient, auth_headers_user_2: dict[str, str], test_variant: ProductVariant
):
    order_data = {"shipping_address": "  ", "items": [{"product_variant_id": test_variant.id, "quantity": 1}]}
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_user_2)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_create_order_ignores_customer_id_for_customers(
    test_client: AsyncClient,
    auth_headers_user: dict[str, str],
    test_customer: Customer,
    test_customer_2: Customer,
    test_variant: ProductVariant,
):
    order_data = {
        "customer_id": test_customer_2.id,
        "shipping_address": "1 rue des Tests, Paris",
        "items": [{"product_variant_id": test_variant.id, "quantity": 1}],
    }
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_user)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["customer_id"] == test_customer.id

async def test_create_order_by_staff_for_customer(
    test_client: AsyncClient,
    auth_headers_manager: dict[str, str],
    staff_manager: Manager,
    test_customer: Customer,
    test_variant: ProductVariant,
):
    order_data = {
        "customer_id": test_customer.id,
        "shipping_address": "Retrait en boutique",
        "payment_method": "Cash",
        "items": [{"product_variant_id": test_variant.id, "quantity": 1}],
    }
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["customer_id"] == test_customer.id
    assert data["payment_method"] == "Cash"
    assert data["history"][0]["manager_id"] == staff_manager.id
    assert data["history"][0]["manager_name"] == "Manager User"

async def test_create_order_by_staff_without_customer(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_variant: ProductVariant
):
    order_data = {"shipping_address": "Boutique", "items": [{"product_variant_id": test_variant.id, "quantity": 1}]}
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_create_order_by_staff_unknown_customer(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_variant: ProductVariant
):
    order_data = {
        "customer_id": 999,
        "shipping_address": "Boutique",
        "items": [{"product_variant_id": test_variant.id, "quantity": 1}],
    }
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_create_order_without_items(test_client: AsyncClient, auth_headers_user: dict[str, str]):
    order_data = {"shipping_address": "1 rue des Tests, Paris", "items": []}
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_user)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_create_order_unknown_variant(test_client: AsyncClient, auth_headers_user: dict[str, str]):
    order_data = {"shipping_address": "1 rue des Tests, Paris", "items": [{"product_variant_id": 999, "quantity": 1}]}
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_user)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_create_order_zero_quantity(
    test_client: AsyncClient, auth_headers_user: dict[str, str], test_variant: ProductVariant
):
    order_data = {
        "shipping_address": "1 rue des Tests, Paris",
        "items": [{"product_variant_id": test_variant.id, "quantity": 0}],
    }
    response = await test_client.post(f"{API_PREFIX}/orders/", json=order_data, headers=auth_headers_user)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

# --- Lecture ---

async def test_read_own_order(test_client: AsyncClient, auth_headers_user: dict[str, str], test_order: Order):
    response = await test_client.get(f"{API_PREFIX}/orders/{test_order.id}", headers=auth_headers_user)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == test_order.id
    assert len(data["items"]) == 1

async def test_read_other_customer_order_forbidden(
    test_client: AsyncClient, auth_headers_user_2: dict[str, str], test_order: Order
):
    response = await test_client.get(f"{API_PREFIX}/orders/{test_order.id}", headers=auth_headers_user_2)
    assert response.status_code == status.HTTP_403_FORBIDDEN

async def test_read_order_not_found(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/orders/9999", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_list_orders_scoped_to_customer(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_user: dict[str, str],
    auth_headers_manager: dict[str, str],
    test_order: Order,
    test_customer_2: Customer,
    test_variant: ProductVariant,
):
    """Teste qu'un client ne voit que ses commandes, le personnel toutes."""
    await insert_order(db_session, test_customer_2, test_variant)

    response = await test_client.get(f"{API_PREFIX}/orders/", headers=auth_headers_user)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["id"] == test_order.id

    response = await test_client.get(f"{API_PREFIX}/orders/", headers=auth_headers_manager)
    assert response.json()["total"] == 2
    assert response.headers["Content-Range"] == "orders 0-1/2"

async def test_list_orders_filters_and_search(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_manager: dict[str, str],
    test_order: Order,
    test_customer_2: Customer,
    test_variant: ProductVariant,
):
    paid = await insert_order(db_session, test_customer_2, test_variant, "Processing", "Paid")

    response = await test_client.get(f"{API_PREFIX}/orders/", params={"status": "Processing"}, headers=auth_headers_manager)
    assert [o["id"] for o in response.json()["items"]] == [paid.id]

    response = await test_client.get(
        f"{API_PREFIX}/orders/", params={"payment_status": "Pending,Refunded"}, headers=auth_headers_manager
    )
    assert [o["id"] for o in response.json()["items"]] == [test_order.id]

    response = await test_client.get(f"{API_PREFIX}/orders/", params={"search": str(paid.id)}, headers=auth_headers_manager)
    assert [o["id"] for o in response.json()["items"]] == [paid.id]

    response = await test_client.get(f"{API_PREFIX}/orders/", params={"search": "second"}, headers=auth_headers_manager)
    items = response.json()["items"]
    assert [o["id"] for o in items] == [paid.id]
    assert items[0]["customer_email"] == "testuser2@example.com"

async def test_list_orders_sorted_by_amount(
    test_client: AsyncClient, auth_headers_user: dict[str, str], test_order: Order
):
    """Teste le tri par montant croissant."""
    response = await test_client.get(
        f"{API_PREFIX}/orders/", params={"sort_by": "payment_amount", "sort_order": "asc"}, headers=auth_headers_user
    )
    assert response.status_code == status.HTTP_200_OK

async def test_list_orders_invalid_sort(test_client: AsyncClient, auth_headers_manager: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/orders/", params={"sort_by": "shipping_address"}, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

# --- Cycle de vie ---

async def test_pay_then_deliver_order(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_order: Order
):
    """Teste le parcours Pending -> Processing (paiement) -> Completed (livraison)."""
    response = await test_client.put(f"{API_PREFIX}/orders/{test_order.id}/pay", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["payment_status"] == "Paid"
    assert data["status"] == "Processing"
    assert data["payment_date"] is not None

    response = await test_client.put(f"{API_PREFIX}/orders/{test_order.id}/pay", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = await test_client.put(f"{API_PREFIX}/orders/{test_order.id}/deliver", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "Completed"
    assert [h["new_status"] for h in data["history"]] == ["Completed", "Processing"]

async def test_deliver_unpaid_order(test_client: AsyncClient, auth_headers_manager: dict[str, str], test_order: Order):
    response = await test_client.put(f"{API_PREFIX}/orders/{test_order.id}/deliver", headers=auth_headers_manager)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_pay_order_requires_staff(test_client: AsyncClient, auth_headers_user: dict[str, str], test_order: Order):
    response = await test_client.put(f"{API_PREFIX}/orders/{test_order.id}/pay", headers=auth_headers_user)
    assert response.status_code == status.HTTP_403_FORBIDDEN

async def test_cancel_own_order_with_reason(
    test_client: AsyncClient, auth_headers_user: dict[str, str], test_order: Order
):
    response = await test_client.put(
        f"{API_PREFIX}/orders/{test_order.id}/cancel",
        json={"reason": "Commande passée par erreur"},
        headers=auth_headers_user,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "Cancelled"
    assert data["history"][0]["note"] == "Commande passée par erreur"
    assert data["history"][0]["previous_status"] == "Pending"

    response = await test_client.put(f"{API_PREFIX}/orders/{test_order.id}/cancel", headers=auth_headers_user)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_cancel_other_customer_order(
    test_client: AsyncClient, auth_headers_user_2: dict[str, str], test_order: Order
):
    response = await test_client.put(f"{API_PREFIX}/orders/{test_order.id}/cancel", headers=auth_headers_user_2)
    assert response.status_code == status.HTTP_403_FORBIDDEN

async def test_update_status_unknown_value(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_order: Order
):
    response = await test_client.put(
        f"{API_PREFIX}/orders/{test_order.id}/update-status", json={"new_status": "Shipped"}, headers=auth_headers_manager
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_update_status_completed_requires_payment(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_order: Order
):
    response = await test_client.put(
        f"{API_PREFIX}/orders/{test_order.id}/update-status", json={"new_status": "Completed"}, headers=auth_headers_manager
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_update_status_final_order_admin_only(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_manager: dict[str, str],
    auth_headers_admin: dict[str, str],
    test_customer: Customer,
    test_variant: ProductVariant,
):
    """Teste qu'une commande livrée ne peut être rouverte que par un administrateur."""
    order = await insert_order(db_session, test_customer, test_variant, "Completed", "Paid")

    response = await test_client.put(
        f"{API_PREFIX}/orders/{order.id}/update-status", json={"new_status": "Processing"}, headers=auth_headers_manager
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await test_client.put(
        f"{API_PREFIX}/orders/{order.id}/update-status", json={"new_status": "Processing"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "Processing"
    assert data["history"][0]["previous_status"] == "Completed"
    assert data["history"][0]["manager_name"] == "Admin User"

async def test_update_status_same_value(
    test_client: AsyncClient, auth_headers_manager: dict[str, str], test_order: Order
):
    response = await test_client.put(
        f"{API_PREFIX}/orders/{test_order.id}/update-status", json={"new_status": "Pending"}, headers=auth_headers_manager
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
