"""
Module définissant les routes API FastAPI pour l'authentification.

Contient les endpoints pour:
- /login, /token : Connexion et obtention des tokens JWT
- /register : Inscription d'un client
- /refresh : Renouvellement du token d'accès
- /me, /profile, /change-password : Compte de l'utilisateur connecté
- /logout : Déconnexion (sans état côté serveur)
"""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from src.auth.constants import MESSAGE_LOGOUT
from src.auth.dependencies import AuthServiceDep, CurrentUserDep
from src.auth.models import (
    Token,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RefreshRequest,
    RefreshResponse,
    MeResponse,
    ProfileNameUpdate,
    ChangePasswordRequest,
    MessageResponse,
)
from src.auth.service import to_authenticated
from src.users.dependencies import UserServiceDep
from src.users.exceptions import UserError, UserAlreadyExistsError, UserNotFoundError
from src.users.models import ProfileUpdate

logger = logging.getLogger(__name__)

# Définition du routeur
router = APIRouter()


def handle_account_errors(e: Exception):
    if isinstance(e, HTTPException):
        raise e
    elif isinstance(e, UserAlreadyExistsError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, UserNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, UserError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.exception(f"[Auth API] Unexpected error: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, auth_service: AuthServiceDep):
    """Connexion par email / mot de passe. Retourne le compte, le token et le refresh token."""
    logger.info("[Router] Tentative de login pour: %s", credentials.email)
    return await auth_service.login(email=credentials.email, password=credentials.password)


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    auth_service: AuthServiceDep
):
    """
    Authentifie l'utilisateur et retourne un token JWT (flux OAuth2 de la doc OpenAPI).

    - **username**: Email de l'utilisateur (utilisé comme identifiant)
    - **password**: Mot de passe de l'utilisateur
    """
    logger.info("[Router] Tentative de login OAuth2 pour: %s", form_data.username)
    result = await auth_service.login(email=form_data.username, password=form_data.password)
    return Token(access_token=result.token, token_type="bearer")


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, user_service: UserServiceDep, auth_service: AuthServiceDep):
    """Inscription publique d'un client. Le compte est actif immédiatement."""
    logger.info("[Router] Inscription: %s", payload.email)
    try:
        account = await user_service.register_customer(
            full_name=payload.full_name, email=payload.email, password=payload.password
        )
    except Exception as e:
        handle_account_errors(e)
    return auth_service.issue_tokens(to_authenticated(account))


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(payload: RefreshRequest, auth_service: AuthServiceDep):
    token = await auth_service.refresh_access_token(payload.refresh_token)
    return RefreshResponse(token=token)


@router.get("/me", response_model=MeResponse)
async def read_users_me(current_user: CurrentUserDep):
    """
    Récupère les informations de l'utilisateur actuellement connecté.

    Nécessite un token JWT valide dans l'en-tête Authorization.
    """
    logger.info("[Router] Récupération infos pour user ID: %s", current_user.id)
    return MeResponse(id=current_user.id, name=current_user.full_name, email=current_user.email, role=current_user.role)


@router.put("/profile", response_model=MeResponse)
async def update_profile(payload: ProfileNameUpdate, current_user: CurrentUserDep, user_service: UserServiceDep):
    logger.info("[Router] Mise à jour du nom pour user ID: %s", current_user.id)
    try:
        account = await user_service.update_profile(current_user.id, ProfileUpdate(full_name=payload.full_name))
    except Exception as e:
        handle_account_errors(e)
    principal = to_authenticated(account)
    return MeResponse(id=principal.id, name=principal.full_name, email=principal.email, role=principal.role)


@router.put("/change-password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: CurrentUserDep,
    auth_service: AuthServiceDep,
    user_service: UserServiceDep,
):
    logger.info("[Router] Changement de mot de passe pour user ID: %s", current_user.id)
    await auth_service.check_current_password(current_user.id, payload.current_password)
    try:
        await user_service.set_password(current_user.id, payload.new_password)
    except Exception as e:
        handle_account_errors(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    # Les tokens sont sans état: le client les supprime de son côté.
    return MessageResponse(message=MESSAGE_LOGOUT)


# Créer une instance du routeur pour l'export
auth_router = router
