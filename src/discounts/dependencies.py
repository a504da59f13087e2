import logging
from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.discounts.service import DiscountService
from src.discounts.interfaces.repositories import AbstractDiscountRepository
from src.discounts.repositories import SQLAlchemyDiscountRepository

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]

def get_discount_repository(session: SessionDep) -> AbstractDiscountRepository:
    """Fournit une instance du repository des réductions."""
    logger.debug("Providing SQLAlchemyDiscountRepository")
    return SQLAlchemyDiscountRepository(db_session=session)

DiscountRepositoryDep = Annotated[AbstractDiscountRepository, Depends(get_discount_repository)]

def get_discount_service(repository: DiscountRepositoryDep) -> DiscountService:
    logger.debug("Providing DiscountService with injected repository")
    return DiscountService(repository=repository)

DiscountServiceDep = Annotated[DiscountService, Depends(get_discount_service)]
