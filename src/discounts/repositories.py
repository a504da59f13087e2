# src/discounts/repositories.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.discounts.exceptions import DuplicateDiscountCodeException
from src.discounts.interfaces.repositories import AbstractDiscountRepository
from src.discounts.models import Discount, DiscountRead
from src.product_variants.models import ProductVariant
from src.products.models import Product

logger = logging.getLogger(__name__)


class SQLAlchemyDiscountRepository(AbstractDiscountRepository):
    """Implémentation SQLAlchemy du repository des réductions."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD(Discount)

    def _joined_select(self, *columns):
        return (
            select(*columns)
            .select_from(Discount)
            .outerjoin(ProductVariant, ProductVariant.id == Discount.product_variant_id)
            .outerjoin(Product, Product.id == ProductVariant.product_id)
        )

    @staticmethod
    def _to_read(discount: Discount, variant_sku: Optional[str], product_name: Optional[str]) -> DiscountRead:
        return DiscountRead(
            **discount.model_dump(),
            variant_sku=variant_sku,
            product_name=product_name,
        )

    async def get_by_id(self, discount_id: int) -> Optional[Discount]:
        return await self.db.get(Discount, discount_id)

    async def get_by_code(self, code: str) -> Optional[Discount]:
        result = await self.db.execute(select(Discount).where(Discount.code == code))
        return result.scalar_one_or_none()

    async def get_read(self, discount_id: int) -> Optional[DiscountRead]:
        stmt = self._joined_select(Discount, ProductVariant.sku, Product.name).where(Discount.id == discount_id)
        row = (await self.db.execute(stmt)).first()
        if row is None:
            logger.debug(f"[DiscountRepository] Discount ID {discount_id} not found.")
            return None
        return self._to_read(*row)

    async def list(
        self,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        statuses: Optional[List[str]] = None,
        types: Optional[List[str]] = None,
        sort_by: str = "id",
        descending: bool = True,
    ) -> Tuple[List[DiscountRead], int]:
        logger.debug(f"[DiscountRepository] Listing discounts: limit={limit}, offset={offset}, search={search}")
        conditions = []
        if search:
            conditions.append(or_(
                Discount.name.ilike(search),
                Discount.code.ilike(search),
                Product.name.ilike(search),
                ProductVariant.sku.ilike(search),
            ))
        if statuses:
            conditions.append(Discount.status.in_(statuses))
        if types:
            conditions.append(Discount.type.in_(types))

        sort_columns = {
            "id": Discount.id,
            "name": Discount.name,
            "code": Discount.code,
            "type": Discount.type,
            "value": Discount.value,
            "status": Discount.status,
            "start_date": Discount.start_date,
            "end_date": Discount.end_date,
            "product_name": Product.name,
            "variant_sku": ProductVariant.sku,
        }
        sort_column = sort_columns[sort_by]
        order = sort_column.desc() if descending else sort_column.asc()

        stmt = (
            self._joined_select(Discount, ProductVariant.sku, Product.name)
            .where(*conditions)
            .order_by(order, Discount.id.desc())
            .limit(limit)
            .offset(offset)
        )
        rows = (await self.db.execute(stmt)).all()
        count_stmt = self._joined_select(func.count(Discount.id)).where(*conditions)
        total_count = (await self.db.execute(count_stmt)).scalar_one() or 0
        return [self._to_read(*row) for row in rows], total_count

    async def variant_exists(self, variant_id: int) -> bool:
        return await self.db.get(ProductVariant, variant_id) is not None

    async def create(self, discount_data: Dict[str, Any]) -> Discount:
        discount = Discount(**discount_data)
        self.db.add(discount)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"[DiscountRepository] Integrity error creating discount: {e}", exc_info=True)
            raise DuplicateDiscountCodeException(discount_data.get("code", "unknown"))
        await self.db.refresh(discount)
        logger.info(f"[DiscountRepository] Discount ID {discount.id} created.")
        return discount

    async def update(self, discount_id: int, discount_data: Dict[str, Any]) -> Discount:
        discount = await self.get_by_id(discount_id)
        for key, value in discount_data.items():
            setattr(discount, key, value)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"[DiscountRepository] Integrity error updating discount {discount_id}: {e}", exc_info=True)
            raise DuplicateDiscountCodeException(discount_data.get("code", "unknown"))
        await self.db.refresh(discount)
        return discount

    async def delete(self, discount_id: int) -> None:
        await self.crud.delete(db=self.db, id=discount_id)
        logger.info(f"[DiscountRepository] Discount ID {discount_id} deleted.")
