"""
Module définissant les dépendances FastAPI pour l'authentification.

Fournit des dépendances pour:
- Le service d'authentification (AuthService)
- L'obtention du compte courant à partir du token JWT
- La vérification du rôle (admin, manager)
"""
import logging
from typing import Annotated, Callable, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from src.auth.config import OAUTH2_TOKEN_URL
from src.auth.exceptions import TokenMissingException, TokenInvalidException, InactiveUserException, PermissionDeniedException
from src.auth.models import AuthenticatedAccount
from src.auth.service import AuthService
from src.roles.constants import ROLE_ADMIN, STAFF_ROLES
from src.users.config import ACCOUNT_STATUS_ACTIVE
from src.users.dependencies import UserRepositoryDep

logger = logging.getLogger(__name__)

# --- Dépendances OAuth2 ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=OAUTH2_TOKEN_URL, auto_error=False)


def get_auth_service(user_repository: UserRepositoryDep) -> AuthService:
    """
    Fournit une instance du service d'authentification.

    Args:
        user_repository: Instance du repository des comptes fournie par dépendance.

    Returns:
        AuthService: Instance du service d'authentification.
    """
    logger.debug("Fourniture de AuthService avec UserRepository injecté")
    return AuthService(user_repository=user_repository)

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    auth_service: AuthServiceDep
) -> AuthenticatedAccount:
    """
    Vérifie le token JWT et retourne le compte courant.

    Raises:
        TokenMissingException: Si le token est manquant
        TokenInvalidException: Si le token est invalide ou le compte inexistant
    """
    if token is None:
        logger.warning("Token manquant dans la requête.")
        raise TokenMissingException()

    user = await auth_service.get_user_from_token(token)
    if user is None:
        logger.warning("Token invalide ou utilisateur non trouvé.")
        raise TokenInvalidException()

    logger.debug(f"Utilisateur authentifié: ID {user.id}, rôle {user.role}")
    return user


async def get_current_active_user(
    current_user: Annotated[AuthenticatedAccount, Depends(get_current_user)]
) -> AuthenticatedAccount:
    """Vérifie que le compte courant est actif."""
    if current_user.status != ACCOUNT_STATUS_ACTIVE:
        logger.warning(f"Tentative d'accès par un compte inactif: ID {current_user.id}")
        raise InactiveUserException()
    return current_user

CurrentUserDep = Annotated[AuthenticatedAccount, Depends(get_current_active_user)]


def require_roles(*roles: str) -> Callable:
    """Construit une dépendance qui n'autorise que les rôles indiqués."""
    async def role_checker(current_user: CurrentUserDep) -> AuthenticatedAccount:
        if current_user.role not in roles:
            logger.warning(
                f"Accès refusé au compte ID {current_user.id} (rôle '{current_user.role}', requis: {', '.join(roles)})"
            )
            raise PermissionDeniedException()
        return current_user
    return role_checker


get_current_admin_user = require_roles(ROLE_ADMIN)
get_current_staff_user = require_roles(*STAFF_ROLES)

AdminUserDep = Annotated[AuthenticatedAccount, Depends(get_current_admin_user)]
StaffUserDep = Annotated[AuthenticatedAccount, Depends(get_current_staff_user)]
