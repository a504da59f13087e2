import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.product_variants.dependencies import ProductVariantRepositoryDep
from .interfaces.repositories import AbstractProductRepository
from .repositories import SQLAlchemyProductRepository
from .service import ProductService

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_product_repository(session: SessionDep) -> AbstractProductRepository:
    logger.debug("Providing SQLAlchemyProductRepository")
    return SQLAlchemyProductRepository(db=session)

ProductRepositoryDep = Annotated[AbstractProductRepository, Depends(get_product_repository)]


def get_product_service(
    product_repo: ProductRepositoryDep,
    variant_repo: ProductVariantRepositoryDep,
) -> ProductService:
    """Le service produit lit aussi les variantes (détail, attributs agrégés)."""
    return ProductService(product_repo=product_repo, variant_repo=variant_repo)

ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
