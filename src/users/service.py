"""
Module contenant la logique métier (services) pour les comptes.

Un compte est soit un client (profil customer), soit un manager (profil
manager porteur d'un rôle). Les règles de suppression protègent les
comptes encore référencés par des commandes ou des réponses aux avis.
"""
import logging
from typing import Optional

from src.auth.security import get_password_hash
from src.core.pagination import PageParams, PaginatedResponse, resolve_sort_field
from src.roles.interfaces.repositories import AbstractRoleRepository
from src.roles.exceptions import RoleNotFoundException
from src.users.config import ALLOWED_ACCOUNT_STATUS, ACCOUNT_SORT_FIELDS, ACCOUNT_DEFAULT_SORT
from src.users.exceptions import (
    UserNotFoundError,
    UserAlreadyExistsError,
    InvalidAccountStatusError,
    MissingRoleError,
    AccountDeletionForbiddenError,
)
from src.users.interfaces.repositories import AbstractUserRepository
from src.users.models import AccountCreate, AccountRead, AccountUpdate, ProfileUpdate
from src.users.utils import username_from_email

logger = logging.getLogger(__name__)


class UserService:
    """Service pour gérer les comptes clients et managers."""

    def __init__(self, repository: AbstractUserRepository, role_repository: AbstractRoleRepository):
        self.repository = repository
        self.role_repository = role_repository

    async def _ensure_email_available(self, email: str, exclude_id: Optional[int] = None) -> None:
        existing = await self.repository.get_by_email(email)
        if existing and existing.id != exclude_id:
            logger.warning(f"[UserService] Email déjà existant: {email}")
            raise UserAlreadyExistsError(email)

    async def _ensure_role_exists(self, role_id: int) -> None:
        if not await self.role_repository.get_by_id(role_id):
            raise RoleNotFoundException(role_id)

    @staticmethod
    def _check_status(status: str) -> None:
        if status not in ALLOWED_ACCOUNT_STATUS:
            raise InvalidAccountStatusError(status, ALLOWED_ACCOUNT_STATUS)

    async def get_account(self, account_id: int) -> AccountRead:
        account = await self.repository.get_read(account_id)
        if not account:
            raise UserNotFoundError(account_id)
        return account

    async def list_accounts(
        self,
        params: PageParams,
        status: Optional[str] = None,
        role_id: Optional[int] = None,
        account_type: Optional[str] = None,
    ) -> PaginatedResponse[AccountRead]:
        sort_by = resolve_sort_field(params.sort_by, ACCOUNT_SORT_FIELDS, ACCOUNT_DEFAULT_SORT)
        logger.debug(f"[UserService] List accounts: page={params.page}, type={account_type}, sort={sort_by}")
        accounts, total = await self.repository.list(
            limit=params.limit,
            offset=params.offset,
            search=params.search_pattern,
            status=status,
            role_id=role_id,
            account_type=account_type if account_type in ("manager", "customer") else None,
            sort_by=sort_by,
            descending=params.descending,
        )
        return PaginatedResponse[AccountRead](items=accounts, total=total, page=params.page, page_size=params.page_size)

    async def create_account(self, account_data: AccountCreate) -> AccountRead:
        logger.info(f"[UserService] Create {account_data.account_type} account: {account_data.email}")
        self._check_status(account_data.status)
        await self._ensure_email_available(account_data.email)

        customer_data = None
        manager_data = None
        if account_data.account_type == "manager":
            if account_data.role_id is None:
                raise MissingRoleError()
            await self._ensure_role_exists(account_data.role_id)
            manager_data = {"role_id": account_data.role_id}
        else:
            customer_data = {"phone_number": account_data.phone_number, "address": account_data.address}

        return await self.repository.create(
            account_data={
                "email": account_data.email,
                "username": username_from_email(account_data.email),
                "full_name": account_data.full_name,
                "status": account_data.status,
                "password_hash": get_password_hash(account_data.password),
            },
            customer_data=customer_data,
            manager_data=manager_data,
        )

    async def register_customer(self, full_name: str, email: str, password: str) -> AccountRead:
        """Inscription publique: compte actif + profil client vide."""
        return await self.create_account(AccountCreate(
            full_name=full_name,
            email=email,
            password=password,
            account_type="customer",
        ))

    async def update_account(self, account_id: int, account_data: AccountUpdate) -> AccountRead:
        logger.info(f"[UserService] Update account ID: {account_id}")
        current = await self.get_account(account_id)
        update_data = account_data.model_dump(exclude_unset=True)

        if "email" in update_data and update_data["email"] is not None:
            await self._ensure_email_available(update_data["email"], exclude_id=account_id)
        if update_data.get("status") is not None:
            self._check_status(update_data["status"])

        account_fields = {
            key: update_data[key] for key in ("full_name", "email", "status")
            if update_data.get(key) is not None
        }
        manager_fields = None
        customer_fields = None
        if current.account_type == "manager" and update_data.get("role_id") is not None:
            await self._ensure_role_exists(update_data["role_id"])
            manager_fields = {"role_id": update_data["role_id"]}
        if current.account_type == "customer":
            customer_fields = {
                key: update_data[key] for key in ("phone_number", "address") if key in update_data
            }

        return await self.repository.update(
            account_id=account_id,
            account_data=account_fields,
            customer_data=customer_fields,
            manager_data=manager_fields,
        )

    async def update_profile(self, account_id: int, profile_data: ProfileUpdate) -> AccountRead:
        logger.info(f"[UserService] Update own profile, account ID: {account_id}")
        await self.get_account(account_id)
        update_data = profile_data.model_dump(exclude_unset=True, exclude_none=True)

        account_fields = {}
        if "full_name" in update_data:
            account_fields["full_name"] = update_data["full_name"]
        if "email" in update_data:
            await self._ensure_email_available(update_data["email"], exclude_id=account_id)
            account_fields["email"] = update_data["email"]
        if "password" in update_data:
            account_fields["password_hash"] = get_password_hash(update_data["password"])

        return await self.repository.update(account_id=account_id, account_data=account_fields)

    async def set_password(self, account_id: int, new_password: str) -> None:
        await self.repository.update(
            account_id=account_id,
            account_data={"password_hash": get_password_hash(new_password)},
        )

    async def delete_account(self, account_id: int, requesting_account_id: int) -> None:
        logger.info(f"[UserService] Delete account ID: {account_id} (by {requesting_account_id})")
        if account_id == requesting_account_id:
            raise AccountDeletionForbiddenError("Vous ne pouvez pas supprimer votre propre compte")

        account = await self.get_account(account_id)
        if account.customer_id is not None:
            if await self.repository.count_customer_orders(account.customer_id) > 0:
                raise AccountDeletionForbiddenError("Impossible de supprimer un client qui possède des commandes")
        if account.manager_id is not None:
            if await self.repository.count_manager_responses(account.manager_id) > 0:
                raise AccountDeletionForbiddenError("Impossible de supprimer un manager ayant répondu à des avis")

        await self.repository.delete(account_id)
