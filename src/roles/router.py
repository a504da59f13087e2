import logging
from typing import List

from fastapi import APIRouter, HTTPException, Path, Response, status

from .dependencies import RoleServiceDep
from .models import (
    RoleCreate, RoleUpdate, RoleRead, RoleReadWithPermissions,
    PermissionCreate, PermissionRead
)
from .exceptions import (
    RoleNotFoundException,
    DuplicateRoleNameException,
    RoleInUseException,
    EmptyRoleUpdateException,
    PermissionNotFoundException,
    DuplicatePermissionNameException
)
from src.auth.dependencies import AdminUserDep

logger = logging.getLogger(__name__)

role_router = APIRouter()
permission_router = APIRouter()


def handle_role_service_errors(e: Exception):
    if isinstance(e, (RoleNotFoundException, PermissionNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, (DuplicateRoleNameException, DuplicatePermissionNameException)):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, (RoleInUseException, EmptyRoleUpdateException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Role API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing role request.")

# --- Roles --- #

@role_router.get("/", response_model=List[RoleRead])
async def read_roles(service: RoleServiceDep, current_admin_user: AdminUserDep):
    """Liste tous les rôles, actifs et inactifs (Admin requis)."""
    try:
        return await service.list_roles()
    except Exception as e:
        handle_role_service_errors(e)

@role_router.get("/{role_id}", response_model=RoleReadWithPermissions)
async def read_role(
    service: RoleServiceDep,
    current_admin_user: AdminUserDep,
    role_id: int = Path(..., ge=1)
):
    """Récupère un rôle avec les IDs de ses permissions."""
    try:
        return await service.get_role(role_id=role_id)
    except Exception as e:
        handle_role_service_errors(e)

@role_router.post("/", response_model=RoleReadWithPermissions, status_code=status.HTTP_201_CREATED)
async def create_role(role: RoleCreate, service: RoleServiceDep, current_admin_user: AdminUserDep):
    logger.info(f"API create_role by admin {current_admin_user.email}: name={role.name}")
    try:
        return await service.create_role(role_data=role)
    except Exception as e:
        handle_role_service_errors(e)

@role_router.put("/{role_id}", response_model=RoleReadWithPermissions)
async def update_role(
    role: RoleUpdate,
    service: RoleServiceDep,
    current_admin_user: AdminUserDep,
    role_id: int = Path(..., ge=1)
):
    logger.info(f"API update_role by admin {current_admin_user.email}: ID={role_id}")
    try:
        return await service.update_role(role_id=role_id, role_data=role)
    except Exception as e:
        handle_role_service_errors(e)

@role_router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    service: RoleServiceDep,
    current_admin_user: AdminUserDep,
    role_id: int = Path(..., ge=1)
):
    logger.info(f"API delete_role by admin {current_admin_user.email}: ID={role_id}")
    try:
        await service.delete_role(role_id=role_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_role_service_errors(e)

# --- Permissions --- #

@permission_router.get("/", response_model=List[PermissionRead])
async def read_permissions(service: RoleServiceDep, current_admin_user: AdminUserDep):
    """Liste toutes les permissions triées par nom (Admin requis)."""
    try:
        return await service.list_permissions()
    except Exception as e:
        handle_role_service_errors(e)

@permission_router.post("/", response_model=PermissionRead, status_code=status.HTTP_201_CREATED)
async def create_permission(permission: PermissionCreate, service: RoleServiceDep, current_admin_user: AdminUserDep):
    logger.info(f"API create_permission by admin {current_admin_user.email}: name={permission.name}")
    try:
        return await service.create_permission(permission_data=permission)
    except Exception as e:
        handle_role_service_errors(e)
