import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.attributes.service import AttributeService
from src.attributes.interfaces.repositories import AbstractAttributeRepository
from src.attributes.repositories import SQLAlchemyAttributeRepository

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_attribute_repository(session: SessionDep) -> AbstractAttributeRepository:
    logger.debug("Providing SQLAlchemyAttributeRepository")
    return SQLAlchemyAttributeRepository(db_session=session)

AttributeRepositoryDep = Annotated[AbstractAttributeRepository, Depends(get_attribute_repository)]


def get_attribute_service(repository: AttributeRepositoryDep) -> AttributeService:
    logger.debug("Providing AttributeService with injected repository")
    return AttributeService(repository=repository)

AttributeServiceDep = Annotated[AttributeService, Depends(get_attribute_service)]
