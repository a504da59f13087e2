import logging

from src.core.pagination import PageParams, PaginatedResponse, resolve_sort_field
from .config import ATTRIBUTE_SORT_FIELDS, ATTRIBUTE_DEFAULT_SORT
from .interfaces.repositories import AbstractAttributeRepository
from .models import (
    AttributeCreate, AttributeUpdate, AttributeRead, AttributeReadWithValues,
    AttributeValueCreate, AttributeValueRead
)
from .exceptions import (
    AttributeNotFoundException,
    DuplicateAttributeNameException,
    AttributeInUseException,
    AttributeValueNotFoundException,
    DuplicateAttributeValueException,
    AttributeValueInUseException,
    AttributeOperationFailedException
)

logger = logging.getLogger(__name__)


class AttributeService:
    """Service applicatif pour les attributs de variantes et leurs valeurs."""

    def __init__(self, repository: AbstractAttributeRepository):
        self.repository = repository

    async def list_attributes(self, params: PageParams) -> PaginatedResponse[AttributeRead]:
        sort_by = resolve_sort_field(params.sort_by, ATTRIBUTE_SORT_FIELDS, ATTRIBUTE_DEFAULT_SORT)
        attributes, total = await self.repository.list(
            limit=params.limit,
            offset=params.offset,
            search=params.search_pattern,
            sort_by=sort_by,
            descending=params.descending,
        )
        return PaginatedResponse[AttributeRead](items=attributes, total=total, page=params.page, page_size=params.page_size)

    async def _get_attribute_or_raise(self, attribute_id: int) -> AttributeRead:
        attribute = await self.repository.get_by_id(attribute_id)
        if not attribute:
            raise AttributeNotFoundException(attribute_id)
        return attribute

    async def get_attribute(self, attribute_id: int) -> AttributeReadWithValues:
        logger.debug(f"[AttributeService] Get Attribute ID: {attribute_id}")
        attribute = await self._get_attribute_or_raise(attribute_id)
        values = await self.repository.list_values(attribute_id)
        return AttributeReadWithValues(**attribute.model_dump(), values=values)

    async def create_attribute(self, attribute_data: AttributeCreate) -> AttributeReadWithValues:
        logger.info(f"[AttributeService] Create Attribute: {attribute_data.name}")
        if await self.repository.get_by_name(attribute_data.name):
            raise DuplicateAttributeNameException(attribute_data.name)
        try:
            attribute = await self.repository.create(attribute_data)
        except DuplicateAttributeNameException:
            raise
        except Exception as e:
            logger.error(f"[AttributeService] Error creating attribute {attribute_data.name}: {e}", exc_info=True)
            raise AttributeOperationFailedException(f"Échec de la création de l'attribut: {e}")
        return AttributeReadWithValues(**attribute.model_dump(), values=[])

    async def update_attribute(self, attribute_id: int, attribute_data: AttributeUpdate) -> AttributeReadWithValues:
        logger.info(f"[AttributeService] Update Attribute ID: {attribute_id}")
        await self._get_attribute_or_raise(attribute_id)
        if attribute_data.name:
            same_name = await self.repository.get_by_name(attribute_data.name)
            if same_name and same_name.id != attribute_id:
                raise DuplicateAttributeNameException(attribute_data.name)
        await self.repository.update(attribute_id, attribute_data)
        return await self.get_attribute(attribute_id)

    async def delete_attribute(self, attribute_id: int) -> None:
        logger.info(f"[AttributeService] Delete Attribute ID: {attribute_id}")
        await self._get_attribute_or_raise(attribute_id)
        values = await self.repository.list_values(attribute_id)
        if values:
            raise AttributeInUseException(attribute_id, len(values))
        await self.repository.delete(attribute_id)

    async def add_value(self, attribute_id: int, value_data: AttributeValueCreate) -> AttributeValueRead:
        value = value_data.value.strip()
        logger.info(f"[AttributeService] Add value '{value}' to Attribute ID: {attribute_id}")
        await self._get_attribute_or_raise(attribute_id)
        if await self.repository.get_value_by_text(attribute_id, value):
            raise DuplicateAttributeValueException(attribute_id, value)
        return await self.repository.create_value(attribute_id, value)

    async def delete_value(self, attribute_id: int, value_id: int) -> None:
        logger.info(f"[AttributeService] Delete value ID {value_id} of Attribute ID: {attribute_id}")
        attribute_value = await self.repository.get_value(value_id)
        if attribute_value is None or attribute_value.attribute_id != attribute_id:
            raise AttributeValueNotFoundException(value_id, attribute_id)
        variant_count = await self.repository.count_variant_links(value_id)
        if variant_count > 0:
            raise AttributeValueInUseException(value_id, variant_count)
        await self.repository.delete_value(value_id)
