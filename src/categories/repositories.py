# src/categories/repositories.py
import logging
from typing import List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.categories.exceptions import DuplicateCategoryNameException
from src.categories.interfaces.repositories import AbstractCategoryRepository
from src.categories.models import Category, CategoryCreate, CategoryRead, CategoryUpdate
from src.products.models import Product

logger = logging.getLogger(__name__)


class SQLAlchemyCategoryRepository(AbstractCategoryRepository):
    """Implémentation SQLAlchemy du repository des catégories avec FastCRUD."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD[Category, CategoryCreate, CategoryUpdate, CategoryUpdate, CategoryUpdate, CategoryRead](Category)

    async def get_by_id(self, category_id: int) -> Optional[CategoryRead]:
        logger.debug(f"[CategoryRepository] Getting category by ID: {category_id}")
        category = await self.crud.get(db=self.db, schema_to_select=CategoryRead, return_as_model=True, id=category_id)
        if not category:
            logger.warning(f"[CategoryRepository] Category not found by ID: {category_id}")
        return category

    async def get_by_name(self, name: str) -> Optional[Category]:
        logger.debug(f"[CategoryRepository] Getting category by name: {name}")
        result = await self.db.execute(select(Category).where(Category.name == name))
        return result.scalar_one_or_none()

    async def list(
        self,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        sort_by: str = "id",
        descending: bool = True,
    ) -> Tuple[List[CategoryRead], int]:
        logger.debug(f"[CategoryRepository] Listing categories: limit={limit}, offset={offset}, search={search}")
        filters = {"name__ilike": search} if search else {}
        result = await self.crud.get_multi(
            db=self.db,
            limit=limit,
            offset=offset,
            schema_to_select=CategoryRead,
            return_as_model=True,
            sort_columns=[sort_by],
            sort_orders=["desc" if descending else "asc"],
            **filters,
        )
        return result.get('data', []), result.get('total_count', 0)

    async def list_all(self) -> List[CategoryRead]:
        result = await self.db.execute(select(Category).order_by(Category.name))
        return [CategoryRead.model_validate(c) for c in result.scalars().all()]

    async def create(self, category_data: CategoryCreate) -> CategoryRead:
        logger.debug(f"[CategoryRepository] Creating category: {category_data.name}")
        try:
            # FastCRUD create retourne l'instance ORM et commit
            created_category_orm = await self.crud.create(db=self.db, object=category_data)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[CategoryRepository] Integrity error creating category {category_data.name}: {e}")
            raise DuplicateCategoryNameException(category_data.name)
        await self.db.refresh(created_category_orm)
        return CategoryRead.model_validate(created_category_orm)

    async def update(self, category_id: int, category_data: CategoryUpdate) -> CategoryRead:
        logger.debug(f"[CategoryRepository] Updating category ID: {category_id}")
        category = await self.db.get(Category, category_id)
        for key, value in category_data.model_dump(exclude_unset=True).items():
            if key == "name" and value is None:
                continue  # nom obligatoire
            setattr(category, key, value)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[CategoryRepository] Integrity error updating category {category_id}: {e}")
            raise DuplicateCategoryNameException(category_data.name or "<unknown>")
        await self.db.refresh(category)
        return CategoryRead.model_validate(category)

    async def count_products(self, category_id: int) -> int:
        result = await self.db.execute(select(func.count(Product.id)).where(Product.category_id == category_id))
        return result.scalar_one() or 0

    async def delete(self, category_id: int) -> None:
        logger.debug(f"[CategoryRepository] Deleting category ID: {category_id}")
        await self.crud.delete(db=self.db, id=category_id)
