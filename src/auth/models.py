"""
Module définissant les schémas SQLModel pour l'authentification.

Ce module contient :
- AuthenticatedAccount : compte courant résolu depuis le token (avec son rôle).
- Les schémas de requête et de réponse des endpoints /auth.
"""
from typing import Optional

from pydantic import EmailStr
from sqlmodel import SQLModel, Field

from src.roles.constants import ROLE_ADMIN, STAFF_ROLES

# =====================================================
# Compte authentifié
# =====================================================

class AuthenticatedAccount(SQLModel):
    """Compte courant tel que vu par les dépendances d'autorisation."""
    id: int
    email: str
    full_name: str
    status: str
    role: str
    customer_id: Optional[int] = None
    manager_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

class MeResponse(SQLModel):
    id: int
    name: str
    email: str
    role: str

# =====================================================
# Schémas: Authentification (Token)
# =====================================================

class Token(SQLModel):
    """Schéma pour la réponse du token d'accès (flux OAuth2)."""
    access_token: str
    token_type: str

class LoginRequest(SQLModel):
    email: EmailStr
    password: str

class LoginResponse(MeResponse):
    token: str
    refresh_token: str

class RegisterRequest(SQLModel):
    full_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)

class RefreshRequest(SQLModel):
    refresh_token: Optional[str] = None

class RefreshResponse(SQLModel):
    token: str

class ProfileNameUpdate(SQLModel):
    full_name: str = Field(min_length=1, max_length=255)

class ChangePasswordRequest(SQLModel):
    current_password: str
    new_password: str = Field(min_length=6)

class MessageResponse(SQLModel):
    message: str
