import logging
from typing import List

from .interfaces.repositories import AbstractRoleRepository
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
    DuplicatePermissionNameException,
    RoleOperationFailedException
)

logger = logging.getLogger(__name__)


class RoleService:
    """Service applicatif pour la gestion des rôles et permissions via Repository."""

    def __init__(self, repository: AbstractRoleRepository):
        self.repository = repository

    async def list_roles(self) -> List[RoleRead]:
        logger.debug("[RoleService] List Roles")
        return await self.repository.list_all()

    async def get_role(self, role_id: int) -> RoleReadWithPermissions:
        logger.debug(f"[RoleService] Get Role ID: {role_id}")
        role = await self.repository.get_by_id(role_id=role_id)
        if not role:
            raise RoleNotFoundException(role_id)
        permission_ids = await self.repository.get_permission_ids(role_id=role_id)
        return RoleReadWithPermissions(**role.model_dump(), permission_ids=permission_ids)

    async def _check_permissions_exist(self, permission_ids: List[int]) -> None:
        missing = await self.repository.find_missing_permissions(permission_ids)
        if missing:
            raise PermissionNotFoundException(missing)

    async def create_role(self, role_data: RoleCreate) -> RoleReadWithPermissions:
        logger.info(f"[RoleService] Create Role: {role_data.name}")
        if await self.repository.get_by_name(name=role_data.name):
            raise DuplicateRoleNameException(role_data.name)
        await self._check_permissions_exist(role_data.permission_ids)

        try:
            role = await self.repository.create(
                name=role_data.name,
                status=role_data.status,
                permission_ids=role_data.permission_ids
            )
        except DuplicateRoleNameException:
            raise
        except Exception as e:
            logger.error(f"[RoleService] Error creating role {role_data.name}: {e}", exc_info=True)
            raise RoleOperationFailedException(f"Échec de la création du rôle: {e}")

        logger.info(f"[RoleService] Role ID {role.id} created.")
        return await self.get_role(role.id)

    async def update_role(self, role_id: int, role_data: RoleUpdate) -> RoleReadWithPermissions:
        logger.info(f"[RoleService] Update Role ID: {role_id}")
        if not role_data.model_dump(exclude_unset=True):
            raise EmptyRoleUpdateException()

        existing = await self.repository.get_by_id(role_id=role_id)
        if not existing:
            raise RoleNotFoundException(role_id)

        if role_data.name:
            same_name = await self.repository.get_by_name(name=role_data.name)
            if same_name and same_name.id != role_id:
                raise DuplicateRoleNameException(role_data.name)
        if role_data.permission_ids:
            await self._check_permissions_exist(role_data.permission_ids)

        try:
            await self.repository.update(role_id=role_id, role_data=role_data)
        except DuplicateRoleNameException:
            raise
        except Exception as e:
            logger.error(f"[RoleService] Error updating role {role_id}: {e}", exc_info=True)
            raise RoleOperationFailedException(f"Échec de la mise à jour du rôle: {e}")

        return await self.get_role(role_id)

    async def delete_role(self, role_id: int) -> None:
        logger.info(f"[RoleService] Delete Role ID: {role_id}")
        if not await self.repository.get_by_id(role_id=role_id):
            raise RoleNotFoundException(role_id)

        manager_count = await self.repository.count_managers(role_id=role_id)
        if manager_count > 0:
            raise RoleInUseException(role_id, manager_count)

        await self.repository.delete(role_id=role_id)
        logger.info(f"[RoleService] Role ID {role_id} deleted with its permission links.")

    async def list_permissions(self) -> List[PermissionRead]:
        return await self.repository.list_permissions()

    async def create_permission(self, permission_data: PermissionCreate) -> PermissionRead:
        logger.info(f"[RoleService] Create Permission: {permission_data.name}")
        if await self.repository.get_permission_by_name(permission_data.name):
            raise DuplicatePermissionNameException(permission_data.name)
        return await self.repository.create_permission(permission_data)
