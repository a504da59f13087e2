# src/products/repositories.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import select, func, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession

from src.categories.models import Category
from src.feedback.models import Feedback, FeedbackResponse
from src.orders.models import OrderItem
from src.product_variants.models import ProductVariant
from src.product_variants.repositories import delete_variant_dependencies
from src.products.interfaces.repositories import AbstractProductRepository
from src.products.models import Product, ProductRead, ProductListItem

logger = logging.getLogger(__name__)


class SQLAlchemyProductRepository(AbstractProductRepository):
    """Implémentation SQLAlchemy du repository des produits."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.crud = FastCRUD(Product)

    @staticmethod
    def _sold_subquery():
        return (
            select(
                ProductVariant.product_id.label("product_id"),
                func.coalesce(func.sum(ProductVariant.sold_quantity), 0).label("total_sold"),
            )
            .group_by(ProductVariant.product_id)
            .subquery()
        )

    def _list_select(self, sold, *columns):
        return (
            select(*columns)
            .select_from(Product)
            .outerjoin(Category, Category.id == Product.category_id)
            .outerjoin(sold, sold.c.product_id == Product.id)
        )

    @staticmethod
    def _to_list_item(product: Product, category_name: Optional[str], total_sold: Optional[int]) -> ProductListItem:
        return ProductListItem(
            **ProductRead.model_validate(product).model_dump(),
            category_name=category_name,
            total_sold_quantity=int(total_sold or 0),
        )

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        logger.debug(f"[ProductRepository] Getting product by ID: {product_id}")
        return await self.db.get(Product, product_id)

    async def get_with_category_name(self, product_id: int) -> Optional[Tuple[Product, Optional[str]]]:
        stmt = (
            select(Product, Category.name)
            .outerjoin(Category, Category.id == Product.category_id)
            .where(Product.id == product_id)
        )
        row = (await self.db.execute(stmt)).first()
        if row is None:
            return None
        return row[0], row[1]

    async def list(
        self,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        category_ids: Optional[List[int]] = None,
        brands: Optional[List[str]] = None,
        sort_by: str = "id",
        descending: bool = True,
    ) -> Tuple[List[ProductListItem], int]:
        logger.debug(f"[ProductRepository] Listing products: limit={limit}, offset={offset}, search={search}")
        sold = self._sold_subquery()
        total_sold = func.coalesce(sold.c.total_sold, 0)

        conditions = []
        if search:
            conditions.append(or_(Product.name.ilike(search), Category.name.ilike(search), Product.brand.ilike(search)))
        if category_ids:
            conditions.append(Product.category_id.in_(category_ids))
        if brands:
            conditions.append(Product.brand.in_(brands))

        sort_columns = {
            "id": Product.id,
            "name": Product.name,
            "category_name": Category.name,
            "brand": Product.brand,
            "total_sold_quantity": total_sold,
        }
        sort_column = sort_columns[sort_by]
        order = sort_column.desc() if descending else sort_column.asc()

        stmt = (
            self._list_select(sold, Product, Category.name, total_sold)
            .where(*conditions)
            .order_by(order, Product.id.desc())
            .limit(limit)
            .offset(offset)
        )
        rows = (await self.db.execute(stmt)).all()
        items = [self._to_list_item(*row) for row in rows]

        count_stmt = self._list_select(sold, func.count(Product.id)).where(*conditions)
        total_count = (await self.db.execute(count_stmt)).scalar_one() or 0
        return items, total_count

    async def list_by_category(self, category_id: int) -> List[ProductListItem]:
        sold = self._sold_subquery()
        stmt = (
            self._list_select(sold, Product, Category.name, func.coalesce(sold.c.total_sold, 0))
            .where(Product.category_id == category_id)
            .order_by(Product.name)
        )
        rows = (await self.db.execute(stmt)).all()
        return [self._to_list_item(*row) for row in rows]

    async def list_brands(self) -> List[str]:
        stmt = (
            select(Product.brand)
            .where(Product.brand.is_not(None), Product.brand != "")
            .distinct()
            .order_by(Product.brand)
        )
        return list((await self.db.execute(stmt)).scalars().all())

    async def category_exists(self, category_id: int) -> bool:
        return await self.db.get(Category, category_id) is not None

    async def create(self, product_data: Dict[str, Any]) -> Product:
        product = Product(**product_data)
        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)
        logger.info(f"[ProductRepository] Product ID {product.id} created.")
        return product

    async def update(self, product_id: int, product_data: Dict[str, Any]) -> Product:
        product = await self.get_by_id(product_id)
        for key, value in product_data.items():
            setattr(product, key, value)
        await self.db.commit()
        await self.db.refresh(product)
        return product

    async def count_ordered_items(self, product_id: int) -> int:
        stmt = (
            select(func.count(OrderItem.id))
            .join(ProductVariant, ProductVariant.id == OrderItem.product_variant_id)
            .where(ProductVariant.product_id == product_id)
        )
        return (await self.db.execute(stmt)).scalar_one() or 0

    async def delete(self, product_id: int) -> None:
        logger.debug(f"[ProductRepository] Deleting product ID: {product_id} with its variants")
        variant_ids = list(
            (await self.db.execute(select(ProductVariant.id).where(ProductVariant.product_id == product_id))).scalars().all()
        )
        await delete_variant_dependencies(self.db, variant_ids)
        # Avis rattachés au produit sans variante
        feedback_ids = select(Feedback.id).where(Feedback.product_id == product_id)
        await self.db.execute(delete(FeedbackResponse).where(FeedbackResponse.feedback_id.in_(feedback_ids)))
        await self.db.execute(delete(Feedback).where(Feedback.product_id == product_id))
        await self.db.execute(delete(ProductVariant).where(ProductVariant.product_id == product_id))
        await self.crud.delete(db=self.db, id=product_id)
