import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.roles.service import RoleService
from src.roles.interfaces.repositories import AbstractRoleRepository
from src.roles.repositories import SQLAlchemyRoleRepository

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_role_repository(session: SessionDep) -> AbstractRoleRepository:
    logger.debug("Providing SQLAlchemyRoleRepository")
    return SQLAlchemyRoleRepository(db_session=session)

RoleRepositoryDep = Annotated[AbstractRoleRepository, Depends(get_role_repository)]


def get_role_service(repository: RoleRepositoryDep) -> RoleService:
    logger.debug("Providing RoleService with injected repository")
    return RoleService(repository=repository)

RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]
