"""
Service d'authentification pour l'API.

Contient la logique métier pour:
- L'authentification des comptes (email / mot de passe)
- L'émission et le rafraîchissement des tokens JWT
- La résolution du compte courant (et de son rôle) à partir d'un token
"""
import logging
from typing import Optional

from src.auth.exceptions import (
    InvalidCredentialsException,
    CurrentPasswordInvalidException,
    InactiveUserException,
    RefreshTokenMissingException,
    RefreshTokenInvalidException,
)
from src.auth.models import AuthenticatedAccount, LoginResponse
from src.auth.security import (
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)
from src.roles.constants import ROLE_USER
from src.users.config import ACCOUNT_STATUS_ACTIVE
from src.users.interfaces.repositories import AbstractUserRepository
from src.users.models import Account, AccountRead

logger = logging.getLogger(__name__)


def role_of(account: AccountRead) -> str:
    """Rôle applicatif d'un compte: nom du rôle manager, sinon 'user'."""
    if account.role_name:
        return account.role_name.lower()
    return ROLE_USER


def to_authenticated(account: AccountRead) -> AuthenticatedAccount:
    return AuthenticatedAccount(
        id=account.id,
        email=account.email,
        full_name=account.full_name,
        status=account.status,
        role=role_of(account),
        customer_id=account.customer_id,
        manager_id=account.manager_id,
    )


class AuthService:
    """Service pour gérer l'authentification des comptes."""

    def __init__(self, user_repository: AbstractUserRepository):
        self.user_repository = user_repository

    async def authenticate_user(self, email: str, password: str) -> Optional[Account]:
        """
        Authentifie un compte par email et mot de passe.
        Retourne le modèle Account (table) si succès, sinon None.
        """
        logger.debug(f"[AuthService] Tentative d'authentification pour: {email}")
        account = await self.user_repository.get_by_email(email)
        if account is None:
            logger.warning(f"[AuthService] Compte non trouvé: {email}")
            return None
        if not verify_password(password, account.password_hash):
            logger.warning(f"[AuthService] Mot de passe incorrect pour: {email}")
            return None
        logger.info(f"[AuthService] Authentification réussie pour: {email} (ID: {account.id})")
        return account

    def issue_tokens(self, principal: AuthenticatedAccount) -> LoginResponse:
        token = create_access_token(data={"sub": str(principal.id), "role": principal.role})
        refresh_token = create_refresh_token(data={"sub": str(principal.id)})
        return LoginResponse(
            id=principal.id,
            name=principal.full_name,
            email=principal.email,
            role=principal.role,
            token=token,
            refresh_token=refresh_token,
        )

    async def login(self, email: str, password: str) -> LoginResponse:
        account = await self.authenticate_user(email=email, password=password)
        if account is None:
            raise InvalidCredentialsException()
        if account.status != ACCOUNT_STATUS_ACTIVE:
            logger.warning(f"[AuthService] Connexion refusée, compte {account.id} au statut {account.status}")
            raise InactiveUserException()
        principal = to_authenticated(await self.user_repository.get_read(account.id))
        return self.issue_tokens(principal)

    async def get_user_from_token(self, token: str) -> Optional[AuthenticatedAccount]:
        """
        Récupère le compte courant à partir d'un token d'accès.
        Retourne None si le token est invalide ou si le compte n'existe plus.
        """
        account_id = decode_access_token(token)
        if account_id is None:
            logger.warning("[AuthService] Token invalide ou expiré")
            return None

        account = await self.user_repository.get_read(account_id)
        if account is None:
            logger.warning(f"[AuthService] Compte ID {account_id} du token non trouvé en base")
            return None

        logger.debug(f"[AuthService] Compte récupéré depuis token: ID {account_id}")
        return to_authenticated(account)

    async def refresh_access_token(self, refresh_token: Optional[str]) -> str:
        """Émet un nouveau token d'accès à partir d'un refresh token valide."""
        if not refresh_token:
            raise RefreshTokenMissingException()
        account_id = decode_refresh_token(refresh_token)
        if account_id is None:
            raise RefreshTokenInvalidException()

        account = await self.user_repository.get_read(account_id)
        if account is None:
            logger.warning(f"[AuthService] Refresh pour un compte supprimé: ID {account_id}")
            raise RefreshTokenInvalidException()

        principal = to_authenticated(account)
        logger.info(f"[AuthService] Token d'accès rafraîchi pour le compte ID {account_id}")
        return create_access_token(data={"sub": str(principal.id), "role": principal.role})

    async def check_current_password(self, account_id: int, current_password: str) -> None:
        account = await self.user_repository.get_by_id(account_id)
        if account is None or not verify_password(current_password, account.password_hash):
            logger.warning(f"[AuthService] Mot de passe actuel incorrect pour le compte ID {account_id}")
            raise CurrentPasswordInvalidException()
