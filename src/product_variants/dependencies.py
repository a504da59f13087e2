"""
Dépendances FastAPI pour le module product_variants.
"""
import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.product_variants.interfaces.repositories import AbstractProductVariantRepository
from src.product_variants.repositories import SQLAlchemyProductVariantRepository
from src.product_variants.service import ProductVariantService

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_product_variant_repository(session: SessionDep) -> AbstractProductVariantRepository:
    """
    Fournit une instance du repository des variantes de produits.

    Args:
        session: Session de base de données

    Returns:
        AbstractProductVariantRepository: Instance du repository
    """
    logger.debug("Providing SQLAlchemyProductVariantRepository")
    return SQLAlchemyProductVariantRepository(session=session)

ProductVariantRepositoryDep = Annotated[AbstractProductVariantRepository, Depends(get_product_variant_repository)]


def get_product_variant_service(repository: ProductVariantRepositoryDep) -> ProductVariantService:
    logger.debug("Providing ProductVariantService with injected repository")
    return ProductVariantService(repository=repository)

ProductVariantServiceDep = Annotated[ProductVariantService, Depends(get_product_variant_service)]
