# src/users/models.py
"""
Module définissant les modèles SQLModel pour les comptes.

Ce module contient :
- Account : compte de connexion (identifiants, statut).
- Customer / Manager : profils rattachés à un compte (un compte a au plus un profil).
- Les schémas API de création, lecture et mise à jour des comptes.
"""
from typing import Literal, Optional
from datetime import datetime

from sqlmodel import SQLModel, Field
from pydantic import EmailStr

from src.core.dates import utc_now
from src.users.config import ACCOUNT_STATUS_ACTIVE

AccountType = Literal["manager", "customer"]

# =====================================================
# Tables
# =====================================================

class AccountBase(SQLModel):
    """Champs communs d'un compte."""
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    full_name: str = Field(index=True, max_length=255)
    status: str = Field(default=ACCOUNT_STATUS_ACTIVE, index=True, max_length=20)

class Account(AccountBase, table=True):
    """Modèle de table pour les comptes de connexion."""
    __tablename__ = "accounts"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=100, index=True)
    password_hash: str = Field(nullable=False, max_length=255)
    created_at: datetime = Field(default_factory=utc_now, nullable=False, index=True)
    updated_at: Optional[datetime] = Field(default=None, sa_column_kwargs={"onupdate": utc_now})

class Customer(SQLModel, table=True):
    """Profil client rattaché à un compte."""
    __tablename__ = "customers"

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", unique=True, index=True)
    phone_number: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=500)

class Manager(SQLModel, table=True):
    """Profil manager rattaché à un compte, porteur du rôle."""
    __tablename__ = "managers"

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", unique=True, index=True)
    role_id: int = Field(foreign_key="roles.id", index=True)

# =====================================================
# Schémas API
# =====================================================

class AccountCreate(SQLModel):
    """Création d'un compte par un administrateur."""
    full_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)
    account_type: AccountType
    status: str = ACCOUNT_STATUS_ACTIVE
    role_id: Optional[int] = None  # Obligatoire pour un manager
    phone_number: Optional[str] = None
    address: Optional[str] = None

class AccountUpdate(SQLModel):
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    status: Optional[str] = None
    role_id: Optional[int] = None  # Managers uniquement
    phone_number: Optional[str] = None  # Clients uniquement
    address: Optional[str] = None

class ProfileUpdate(SQLModel):
    """Mise à jour de son propre profil."""
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)

class AccountRead(SQLModel):
    id: int
    username: str
    email: str
    full_name: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    account_type: Optional[AccountType] = None
    customer_id: Optional[int] = None
    manager_id: Optional[int] = None
    role_id: Optional[int] = None
    role_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
