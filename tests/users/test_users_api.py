"""
Tests d'intégration pour les endpoints de l'API du module Utilisateur.
"""
import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.orders.models import Order
from src.roles.models import Role
from src.users.models import Account, Customer

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio

# --- Création de comptes (POST /users/) ---

async def test_create_customer_account_admin(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    """Teste la création d'un compte client par un administrateur."""
    account_data = {
        "full_name": "Client Créé",
        "email": "created@example.com",
        "password": "password123",
        "account_type": "customer",
        "phone_number": "0611223344",
        "address": "2 avenue du Test",
    }
    response = await test_client.post(f"{API_PREFIX}/users/", json=account_data, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["email"] == "created@example.com"
    assert data["account_type"] == "customer"
    assert data["customer_id"] is not None
    assert data["phone_number"] == "0611223344"
    assert data["username"] == "created"
    assert "password" not in data
    assert "password_hash" not in data

async def test_create_manager_account_with_role(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], manager_role: Role
):
    account_data = {
        "full_name": "Nouveau Manager",
        "email": "newmanager@example.com",
        "password": "password123",
        "account_type": "manager",
        "role_id": manager_role.id,
    }
    response = await test_client.post(f"{API_PREFIX}/users/", json=account_data, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["account_type"] == "manager"
    assert data["role_name"] == "manager"

async def test_create_manager_without_role(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    account_data = {
        "full_name": "Sans Rôle",
        "email": "norole@example.com",
        "password": "password123",
        "account_type": "manager",
    }
    response = await test_client.post(f"{API_PREFIX}/users/", json=account_data, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_create_account_duplicate_email(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], admin_user: Account
):
    """Teste l'échec de la création d'un compte avec un email déjà existant."""
    account_data = {
        "full_name": "Doublon",
        "email": admin_user.email,
        "password": "password123",
        "account_type": "customer",
    }
    response = await test_client.post(f"{API_PREFIX}/users/", json=account_data, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_409_CONFLICT

async def test_create_account_forbidden_for_manager(test_client: AsyncClient, auth_headers_manager: dict[str, str]):
    """Teste que seul un administrateur peut créer des comptes."""
    account_data = {
        "full_name": "Interdit",
        "email": "forbidden@example.com",
        "password": "password123",
        "account_type": "customer",
    }
    response = await test_client.post(f"{API_PREFIX}/users/", json=account_data, headers=auth_headers_manager)
    assert response.status_code == status.HTTP_403_FORBIDDEN

# --- Lecture ---

async def test_list_accounts_filtered_by_type(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_user: Account
):
    response = await test_client.get(
        f"{API_PREFIX}/users/", params={"account_type": "customer"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["email"] == test_user.email
    assert response.headers["Content-Range"] == "accounts 0-0/1"

async def test_list_accounts_search(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_user: Account, test_user_2: Account
):
    response = await test_client.get(f"{API_PREFIX}/users/", params={"search": "second"}, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_200_OK
    emails = [item["email"] for item in response.json()["items"]]
    assert emails == [test_user_2.email]

async def test_list_accounts_invalid_sort(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/users/", params={"sort_by": "password_hash"}, headers=auth_headers_admin)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_read_account_not_found(test_client: AsyncClient, auth_headers_admin: dict[str, str]):
    response = await test_client.get(f"{API_PREFIX}/users/9999", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_read_own_profile(test_client: AsyncClient, auth_headers_user: dict[str, str], test_customer: Customer):
    response = await test_client.get(f"{API_PREFIX}/users/profile", headers=auth_headers_user)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["customer_id"] == test_customer.id
    assert data["address"] == "1 rue des Tests, Paris"

# --- Mise à jour ---

async def test_update_account_status_and_address(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_user: Account
):
    response = await test_client.put(
        f"{API_PREFIX}/users/{test_user.id}",
        json={"status": "Locked", "address": "Nouvelle adresse"},
        headers=auth_headers_admin,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "Locked"
    assert data["address"] == "Nouvelle adresse"

async def test_update_account_invalid_status(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_user: Account
):
    response = await test_client.put(
        f"{API_PREFIX}/users/{test_user.id}", json={"status": "Unknown"}, headers=auth_headers_admin
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_update_own_profile_email_taken(
    test_client: AsyncClient, auth_headers_user: dict[str, str], test_user_2: Account
):
    response = await test_client.put(
        f"{API_PREFIX}/users/profile", json={"email": test_user_2.email}, headers=auth_headers_user
    )
    assert response.status_code == status.HTTP_409_CONFLICT

# --- Suppression ---

async def test_delete_customer_account(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], test_user_2: Account
):
    response = await test_client.delete(f"{API_PREFIX}/users/{test_user_2.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = await test_client.get(f"{API_PREFIX}/users/{test_user_2.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_404_NOT_FOUND

async def test_delete_own_account_forbidden(
    test_client: AsyncClient, auth_headers_admin: dict[str, str], admin_user: Account
):
    response = await test_client.delete(f"{API_PREFIX}/users/{admin_user.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

async def test_delete_customer_with_orders(
    test_client: AsyncClient,
    db_session: AsyncSession,
    auth_headers_admin: dict[str, str],
    test_user: Account,
    test_customer: Customer,
):
    """Teste qu'un client ayant des commandes ne peut pas être supprimé."""
    db_session.add(Order(customer_id=test_customer.id, shipping_address="1 rue des Tests"))
    await db_session.commit()
    response = await test_client.delete(f"{API_PREFIX}/users/{test_user.id}", headers=auth_headers_admin)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
