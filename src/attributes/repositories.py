# src/attributes/repositories.py
import logging
from typing import List, Optional, Tuple

from fastcrud import FastCRUD
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.attributes.exceptions import DuplicateAttributeNameException, DuplicateAttributeValueException
from src.attributes.interfaces.repositories import AbstractAttributeRepository
from src.attributes.models import (
    Attribute, AttributeCreate, AttributeRead, AttributeUpdate,
    AttributeValue, AttributeValueRead
)
from src.product_variants.models import VariantAttributeValue

logger = logging.getLogger(__name__)


class SQLAlchemyAttributeRepository(AbstractAttributeRepository):
    """Implémentation SQLAlchemy du repository des attributs avec FastCRUD."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD(Attribute)
        self.value_crud = FastCRUD(AttributeValue)

    async def get_by_id(self, attribute_id: int) -> Optional[AttributeRead]:
        logger.debug(f"[AttributeRepository] Getting attribute by ID: {attribute_id}")
        return await self.crud.get(db=self.db, schema_to_select=AttributeRead, return_as_model=True, id=attribute_id)

    async def get_by_name(self, name: str) -> Optional[Attribute]:
        result = await self.db.execute(select(Attribute).where(Attribute.name == name))
        return result.scalar_one_or_none()

    async def list(
        self,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        sort_by: str = "id",
        descending: bool = True,
    ) -> Tuple[List[AttributeRead], int]:
        logger.debug(f"[AttributeRepository] Listing attributes: limit={limit}, offset={offset}, search={search}")
        filters = {"name__ilike": search} if search else {}
        result = await self.crud.get_multi(
            db=self.db,
            limit=limit,
            offset=offset,
            schema_to_select=AttributeRead,
            return_as_model=True,
            sort_columns=[sort_by],
            sort_orders=["desc" if descending else "asc"],
            **filters,
        )
        return result.get('data', []), result.get('total_count', 0)

    async def create(self, attribute_data: AttributeCreate) -> AttributeRead:
        logger.debug(f"[AttributeRepository] Creating attribute: {attribute_data.name}")
        try:
            attribute = await self.crud.create(db=self.db, object=attribute_data)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[AttributeRepository] Integrity error creating attribute {attribute_data.name}: {e}")
            raise DuplicateAttributeNameException(attribute_data.name)
        await self.db.refresh(attribute)
        return AttributeRead.model_validate(attribute)

    async def update(self, attribute_id: int, attribute_data: AttributeUpdate) -> AttributeRead:
        attribute = await self.db.get(Attribute, attribute_id)
        # name=None est ignoré: la colonne est obligatoire
        for key, value in attribute_data.model_dump(exclude_none=True).items():
            setattr(attribute, key, value)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[AttributeRepository] Integrity error updating attribute {attribute_id}: {e}")
            raise DuplicateAttributeNameException(attribute_data.name or "<unknown>")
        await self.db.refresh(attribute)
        return AttributeRead.model_validate(attribute)

    async def delete(self, attribute_id: int) -> None:
        logger.debug(f"[AttributeRepository] Deleting attribute ID: {attribute_id}")
        await self.crud.delete(db=self.db, id=attribute_id)

    async def list_values(self, attribute_id: int) -> List[AttributeValueRead]:
        stmt = select(AttributeValue).where(AttributeValue.attribute_id == attribute_id).order_by(AttributeValue.value)
        result = await self.db.execute(stmt)
        return [AttributeValueRead.model_validate(v) for v in result.scalars().all()]

    async def get_value(self, value_id: int) -> Optional[AttributeValue]:
        return await self.db.get(AttributeValue, value_id)

    async def get_value_by_text(self, attribute_id: int, value: str) -> Optional[AttributeValue]:
        stmt = select(AttributeValue).where(
            AttributeValue.attribute_id == attribute_id,
            AttributeValue.value == value,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_value(self, attribute_id: int, value: str) -> AttributeValueRead:
        attribute_value = AttributeValue(attribute_id=attribute_id, value=value)
        self.db.add(attribute_value)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"[AttributeRepository] Integrity error creating value '{value}' for attribute {attribute_id}: {e}")
            raise DuplicateAttributeValueException(attribute_id, value)
        await self.db.refresh(attribute_value)
        return AttributeValueRead.model_validate(attribute_value)

    async def count_variant_links(self, value_id: int) -> int:
        stmt = select(func.count()).select_from(VariantAttributeValue).where(
            VariantAttributeValue.attribute_value_id == value_id
        )
        return (await self.db.execute(stmt)).scalar_one() or 0

    async def delete_value(self, value_id: int) -> None:
        await self.value_crud.delete(db=self.db, id=value_id)
