from typing import List, Optional

from sqlmodel import SQLModel, Field

from src.roles.constants import ROLE_STATUS_ACTIVE

# --- Modèles de base ---

class RoleBase(SQLModel):
    """Modèle de base pour les rôles des managers."""
    name: str = Field(index=True, unique=True, max_length=100)
    status: str = Field(default=ROLE_STATUS_ACTIVE, max_length=20)

class PermissionBase(SQLModel):
    name: str = Field(index=True, unique=True, max_length=100)

# --- Tables ---

class Role(RoleBase, table=True):
    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)

class Permission(PermissionBase, table=True):
    __tablename__ = "permissions"

    id: Optional[int] = Field(default=None, primary_key=True)

class RolePermission(SQLModel, table=True):
    """Table d'association rôle <-> permission."""
    __tablename__ = "role_permissions"

    role_id: int = Field(foreign_key="roles.id", primary_key=True)
    permission_id: int = Field(foreign_key="permissions.id", primary_key=True)

# --- Schémas API ---

class RoleCreate(RoleBase):
    permission_ids: List[int] = []

class RoleRead(RoleBase):
    id: int

class RoleReadWithPermissions(RoleRead):
    permission_ids: List[int] = []

class RoleUpdate(SQLModel):
    name: Optional[str] = None
    status: Optional[str] = None
    # None = ne pas toucher aux permissions, [] = tout retirer
    permission_ids: Optional[List[int]] = None

class PermissionCreate(PermissionBase):
    pass

class PermissionRead(PermissionBase):
    id: int
