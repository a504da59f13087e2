import logging
from typing import List

from src.core.pagination import PageParams, PaginatedResponse, resolve_sort_field
from .config import CATEGORY_SORT_FIELDS, CATEGORY_DEFAULT_SORT
from .interfaces.repositories import AbstractCategoryRepository
from .models import CategoryCreate, CategoryUpdate, CategoryRead
from .exceptions import (
    CategoryNotFoundException,
    DuplicateCategoryNameException,
    CategoryInUseException,
    CategoryOperationFailedException
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Service applicatif pour la gestion des catégories via Repository."""

    def __init__(self, repository: AbstractCategoryRepository):
        self.repository = repository

    async def list_categories(self, params: PageParams) -> PaginatedResponse[CategoryRead]:
        """Liste les catégories avec pagination, recherche et tri."""
        sort_by = resolve_sort_field(params.sort_by, CATEGORY_SORT_FIELDS, CATEGORY_DEFAULT_SORT)
        logger.debug(f"[CategoryService] List Categories: page={params.page}, sort={sort_by} {params.sort_order}")
        categories, total_count = await self.repository.list(
            limit=params.limit,
            offset=params.offset,
            search=params.search_pattern,
            sort_by=sort_by,
            descending=params.descending,
        )
        return PaginatedResponse[CategoryRead](
            items=categories, total=total_count, page=params.page, page_size=params.page_size
        )

    async def list_all_categories(self) -> List[CategoryRead]:
        return await self.repository.list_all()

    async def get_category(self, category_id: int) -> CategoryRead:
        """Récupère une catégorie par ID via le repository."""
        logger.debug(f"[CategoryService] Get Category ID: {category_id}")
        category = await self.repository.get_by_id(category_id=category_id)
        if not category:
            raise CategoryNotFoundException(category_id)
        return category

    async def create_category(self, category_data: CategoryCreate) -> CategoryRead:
        """Crée une nouvelle catégorie via le repository."""
        logger.info(f"[CategoryService] Create Category: {category_data.name}")
        existing_category = await self.repository.get_by_name(name=category_data.name)
        if existing_category:
            raise DuplicateCategoryNameException(category_data.name)

        try:
            created_category = await self.repository.create(category_data=category_data)
        except DuplicateCategoryNameException:
            raise
        except Exception as e:
            logger.error(f"[CategoryService] Error creating category {category_data.name} via repository: {e}", exc_info=True)
            raise CategoryOperationFailedException(f"Erreur interne lors de la création de la catégorie: {e}")
        logger.info(f"[CategoryService] Category ID {created_category.id} created via repository.")
        return created_category

    async def update_category(self, category_id: int, category_data: CategoryUpdate) -> CategoryRead:
        """Met à jour une catégorie existante via le repository."""
        logger.info(f"[CategoryService] Update Category ID: {category_id}")
        await self.get_category(category_id)
        if category_data.name:
            existing_category_with_name = await self.repository.get_by_name(name=category_data.name)
            if existing_category_with_name and existing_category_with_name.id != category_id:
                raise DuplicateCategoryNameException(category_data.name)

        try:
            updated_category = await self.repository.update(category_id=category_id, category_data=category_data)
        except DuplicateCategoryNameException:
            raise
        except Exception as e:
            logger.error(f"[CategoryService] Error updating category {category_id} via repository: {e}", exc_info=True)
            raise CategoryOperationFailedException(f"Erreur interne lors de la mise à jour: {e}")
        logger.info(f"[CategoryService] Category ID {category_id} updated via repository.")
        return updated_category

    async def delete_category(self, category_id: int) -> None:
        """Supprime une catégorie si aucun produit ne l'utilise."""
        logger.info(f"[CategoryService] Delete Category ID: {category_id}")
        await self.get_category(category_id)
        product_count = await self.repository.count_products(category_id=category_id)
        if product_count > 0:
            raise CategoryInUseException(category_id, product_count)
        await self.repository.delete(category_id=category_id)
        logger.info(f"[CategoryService] Category ID {category_id} deleted via repository.")
