"""
Module définissant les dépendances FastAPI pour le module des comptes.

Fournit le repository des comptes et le service UserService injecté avec
ses repositories.
"""
import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.roles.dependencies import RoleRepositoryDep
from src.users.interfaces.repositories import AbstractUserRepository
from src.users.repositories import SQLAlchemyUserRepository
from src.users.service import UserService

logger = logging.getLogger(__name__)

DbSessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_user_repository(session: DbSessionDep) -> AbstractUserRepository:
    logger.debug("Fourniture de SQLAlchemyUserRepository")
    return SQLAlchemyUserRepository(session=session)

UserRepositoryDep = Annotated[AbstractUserRepository, Depends(get_user_repository)]


def get_user_service(repository: UserRepositoryDep, role_repository: RoleRepositoryDep) -> UserService:
    """
    Fournit une instance du service de gestion des comptes.

    Args:
        repository: Repository des comptes
        role_repository: Repository des rôles (validation du role_id des managers)

    Returns:
        UserService: Instance du service de gestion des comptes
    """
    logger.debug("Fourniture de UserService")
    return UserService(repository=repository, role_repository=role_repository)

UserServiceDep = Annotated[UserService, Depends(get_user_service)]
