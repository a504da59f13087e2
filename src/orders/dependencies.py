"""
Dépendances FastAPI pour le module orders.
"""
import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.orders.interfaces.repositories import AbstractOrderRepository
from src.orders.repositories import SQLAlchemyOrderRepository
from src.orders.service import OrderService

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_order_repository(session: SessionDep) -> AbstractOrderRepository:
    logger.debug("Providing SQLAlchemyOrderRepository")
    return SQLAlchemyOrderRepository(session=session)

OrderRepositoryDep = Annotated[AbstractOrderRepository, Depends(get_order_repository)]


def get_order_service(order_repository: OrderRepositoryDep) -> OrderService:
    """Fournit une instance du service des commandes."""
    logger.debug("Providing OrderService with injected repository")
    return OrderService(order_repository=order_repository)

OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
