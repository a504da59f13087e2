"""
Routes API pour la gestion des comptes (clients et managers).

- /profile : consultation et mise à jour de son propre compte
- / et /{account_id} : administration des comptes (Admin requis)
"""
import logging
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from src.auth.dependencies import AdminUserDep, CurrentUserDep
from src.core.exceptions import InvalidSortFieldException
from src.core.pagination import PageParamsDep, PaginatedResponse, set_content_range
from src.roles.exceptions import RoleNotFoundException
from src.users.dependencies import UserServiceDep
from src.users.exceptions import (
    UserNotFoundError,
    UserAlreadyExistsError,
    InvalidAccountStatusError,
    MissingRoleError,
    AccountDeletionForbiddenError,
)
from src.users.models import AccountCreate, AccountRead, AccountUpdate, ProfileUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_user_service_errors(e: Exception):
    if isinstance(e, (UserNotFoundError, RoleNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, UserAlreadyExistsError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, (InvalidAccountStatusError, MissingRoleError, AccountDeletionForbiddenError, InvalidSortFieldException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.exception(f"[User API] Unexpected error: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")

# --- Profil de l'utilisateur connecté --- #

@router.get("/profile", response_model=AccountRead)
async def read_own_profile(service: UserServiceDep, current_user: CurrentUserDep):
    try:
        return await service.get_account(current_user.id)
    except Exception as e:
        handle_user_service_errors(e)

@router.put("/profile", response_model=AccountRead)
async def update_own_profile(profile: ProfileUpdate, service: UserServiceDep, current_user: CurrentUserDep):
    logger.info(f"API update_profile: account ID={current_user.id}")
    try:
        return await service.update_profile(account_id=current_user.id, profile_data=profile)
    except Exception as e:
        handle_user_service_errors(e)

# --- Administration des comptes --- #

@router.get("/", response_model=PaginatedResponse[AccountRead])
async def list_accounts(
    service: UserServiceDep,
    current_admin_user: AdminUserDep,
    response: Response,
    params: PageParamsDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    role_id: Optional[int] = Query(None, ge=1),
    account_type: Literal["manager", "customer", "all"] = Query("all"),
):
    """Liste paginée des comptes avec filtres (Admin requis)."""
    logger.info(f"API list_accounts: page={params.page}, type={account_type}")
    try:
        result = await service.list_accounts(
            params=params, status=status_filter, role_id=role_id, account_type=account_type
        )
    except Exception as e:
        handle_user_service_errors(e)
    set_content_range(response, "accounts", params.offset, len(result.items), result.total)
    return result

@router.get("/{account_id}", response_model=AccountRead)
async def read_account(
    service: UserServiceDep,
    current_admin_user: AdminUserDep,
    account_id: int = Path(..., ge=1),
):
    try:
        return await service.get_account(account_id)
    except Exception as e:
        handle_user_service_errors(e)

@router.post("/", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
async def create_account(account: AccountCreate, service: UserServiceDep, current_admin_user: AdminUserDep):
    logger.info(f"API create_account by admin {current_admin_user.email}: {account.email} ({account.account_type})")
    try:
        return await service.create_account(account)
    except Exception as e:
        handle_user_service_errors(e)

@router.put("/{account_id}", response_model=AccountRead)
async def update_account(
    account: AccountUpdate,
    service: UserServiceDep,
    current_admin_user: AdminUserDep,
    account_id: int = Path(..., ge=1),
):
    logger.info(f"API update_account by admin {current_admin_user.email}: ID={account_id}")
    try:
        return await service.update_account(account_id, account)
    except Exception as e:
        handle_user_service_errors(e)

@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    service: UserServiceDep,
    current_admin_user: AdminUserDep,
    account_id: int = Path(..., ge=1),
):
    logger.info(f"API delete_account by admin {current_admin_user.email}: ID={account_id}")
    try:
        await service.delete_account(account_id, requesting_account_id=current_admin_user.id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_user_service_errors(e)

user_router = router
