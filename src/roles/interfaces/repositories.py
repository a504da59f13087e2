# src/roles/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import List, Optional

from src.roles.models import (
    Role, RoleRead, RoleUpdate,
    Permission, PermissionCreate, PermissionRead
)


class AbstractRoleRepository(ABC):
    """Interface abstraite pour le repository des rôles et permissions."""

    @abstractmethod
    async def get_by_id(self, role_id: int) -> Optional[RoleRead]:
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Role]:
        pass

    @abstractmethod
    async def list_all(self) -> List[RoleRead]:
        """Liste tous les rôles (actifs et inactifs), triés par nom."""
        pass

    @abstractmethod
    async def get_permission_ids(self, role_id: int) -> List[int]:
        pass

    @abstractmethod
    async def create(self, name: str, status: str, permission_ids: List[int]) -> RoleRead:
        """Crée le rôle et ses liens de permissions dans une seule transaction."""
        pass

    @abstractmethod
    async def update(self, role_id: int, role_data: RoleUpdate) -> RoleRead:
        """Met à jour le rôle; remplace l'ensemble des permissions si fourni."""
        pass

    @abstractmethod
    async def count_managers(self, role_id: int) -> int:
        pass

    @abstractmethod
    async def delete(self, role_id: int) -> None:
        pass

    @abstractmethod
    async def list_permissions(self) -> List[PermissionRead]:
        pass

    @abstractmethod
    async def find_missing_permissions(self, permission_ids: List[int]) -> List[int]:
        """Retourne les IDs de permissions qui n'existent pas."""
        pass

    @abstractmethod
    async def get_permission_by_name(self, name: str) -> Optional[Permission]:
        pass

    @abstractmethod
    async def create_permission(self, permission_data: PermissionCreate) -> PermissionRead:
        pass
