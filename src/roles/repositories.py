# src/roles/repositories.py
import logging
from typing import List, Optional

from fastcrud import FastCRUD
from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.roles.exceptions import DuplicateRoleNameException, DuplicatePermissionNameException
from src.roles.interfaces.repositories import AbstractRoleRepository
from src.roles.models import (
    Role, RoleRead, RoleUpdate, RolePermission,
    Permission, PermissionCreate, PermissionRead
)
from src.users.models import Manager

logger = logging.getLogger(__name__)


class SQLAlchemyRoleRepository(AbstractRoleRepository):
    """Implémentation SQLAlchemy du repository des rôles avec FastCRUD."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD(Role)
        self.permission_crud = FastCRUD(Permission)

    async def get_by_id(self, role_id: int) -> Optional[RoleRead]:
        logger.debug(f"[RoleRepository] Getting role by ID: {role_id}")
        return await self.crud.get(db=self.db, schema_to_select=RoleRead, return_as_model=True, id=role_id)

    async def get_by_name(self, name: str) -> Optional[Role]:
        result = await self.db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> List[RoleRead]:
        result = await self.db.execute(select(Role).order_by(Role.name))
        return [RoleRead.model_validate(role) for role in result.scalars().all()]

    async def get_permission_ids(self, role_id: int) -> List[int]:
        stmt = (
            select(RolePermission.permission_id)
            .where(RolePermission.role_id == role_id)
            .order_by(RolePermission.permission_id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _replace_permissions(self, role_id: int, permission_ids: List[int]) -> None:
        await self.db.execute(delete(RolePermission).where(RolePermission.role_id == role_id))
        for permission_id in dict.fromkeys(permission_ids):
            self.db.add(RolePermission(role_id=role_id, permission_id=permission_id))

    async def create(self, name: str, status: str, permission_ids: List[int]) -> RoleRead:
        logger.debug(f"[RoleRepository] Creating role: {name}")
        role = Role(name=name, status=status)
        self.db.add(role)
        try:
            await self.db.flush()
            for permission_id in dict.fromkeys(permission_ids):
                self.db.add(RolePermission(role_id=role.id, permission_id=permission_id))
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[RoleRepository] Integrity error creating role {name}: {e}")
            raise DuplicateRoleNameException(name)
        await self.db.refresh(role)
        return RoleRead.model_validate(role)

    async def update(self, role_id: int, role_data: RoleUpdate) -> RoleRead:
        logger.debug(f"[RoleRepository] Updating role ID: {role_id}")
        role = await self.db.get(Role, role_id)
        # name et status sont obligatoires: un null explicite est ignoré
        update_data = role_data.model_dump(exclude_none=True, exclude={"permission_ids"})
        for key, value in update_data.items():
            setattr(role, key, value)
        try:
            if role_data.permission_ids is not None:
                await self._replace_permissions(role_id, role_data.permission_ids)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[RoleRepository] Integrity error updating role {role_id}: {e}")
            raise DuplicateRoleNameException(role_data.name or "<unknown>")
        await self.db.refresh(role)
        return RoleRead.model_validate(role)

    async def count_managers(self, role_id: int) -> int:
        result = await self.db.execute(select(func.count(Manager.id)).where(Manager.role_id == role_id))
        return result.scalar_one() or 0

    async def delete(self, role_id: int) -> None:
        logger.debug(f"[RoleRepository] Deleting role ID: {role_id}")
        await self.db.execute(delete(RolePermission).where(RolePermission.role_id == role_id))
        await self.db.execute(delete(Role).where(Role.id == role_id))
        await self.db.commit()

    async def list_permissions(self) -> List[PermissionRead]:
        result = await self.db.execute(select(Permission).order_by(Permission.name))
        return [PermissionRead.model_validate(p) for p in result.scalars().all()]

    async def find_missing_permissions(self, permission_ids: List[int]) -> List[int]:
        if not permission_ids:
            return []
        result = await self.db.execute(select(Permission.id).where(Permission.id.in_(permission_ids)))
        existing = set(result.scalars().all())
        return [pid for pid in dict.fromkeys(permission_ids) if pid not in existing]

    async def get_permission_by_name(self, name: str) -> Optional[Permission]:
        result = await self.db.execute(select(Permission).where(Permission.name == name))
        return result.scalar_one_or_none()

    async def create_permission(self, permission_data: PermissionCreate) -> PermissionRead:
        try:
            permission = await self.permission_crud.create(db=self.db, object=permission_data)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[RoleRepository] Integrity error creating permission {permission_data.name}: {e}")
            raise DuplicatePermissionNameException(permission_data.name)
        await self.db.refresh(permission)
        return PermissionRead.model_validate(permission)
