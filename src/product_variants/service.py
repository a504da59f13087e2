import logging
from typing import List, Optional

from src.attributes.exceptions import AttributeValueNotFoundException
from src.core.pagination import PageParams, PaginatedResponse
from src.products.exceptions import ProductNotFoundException
from .interfaces.repositories import AbstractProductVariantRepository
from .models import (
    ProductVariantCreate, ProductVariantUpdate, ProductVariantWithAttributes,
    ProductVariantListItem, VariantAttributeRead, VariantSearchResult
)
from .exceptions import (
    VariantNotFoundException,
    DuplicateSKUException,
    InvalidVariantDataException,
    VariantInUseException,
    VariantAttributeLinkNotFoundException,
    DuplicateVariantAttributeLinkException
)

logger = logging.getLogger(__name__)


class ProductVariantService:
    """Service applicatif pour la gestion des variations de produits."""

    def __init__(self, repository: AbstractProductVariantRepository):
        self.repository = repository

    async def list_variants(self, params: PageParams, product_id: Optional[int] = None) -> PaginatedResponse[ProductVariantListItem]:
        """Liste paginée triée par prix (croissant sauf sort_order=desc explicite)."""
        logger.debug(f"[VariantService] List variants: page={params.page}, product_id={product_id}")
        items, total = await self.repository.list(
            limit=params.limit,
            offset=params.offset,
            product_id=product_id,
            search=params.search_pattern,
            descending=params.sort_by == "price" and params.descending,
        )
        return PaginatedResponse[ProductVariantListItem](items=items, total=total, page=params.page, page_size=params.page_size)

    async def search_variants(self, query: Optional[str], limit: int) -> List[VariantSearchResult]:
        if query is None or not query.strip():
            return []
        return await self.repository.search(f"%{query.strip()}%", limit)

    async def get_variant(self, variant_id: int) -> ProductVariantWithAttributes:
        logger.debug(f"[VariantService] Get variant ID: {variant_id}")
        variant = await self.repository.get_with_attributes(variant_id)
        if not variant:
            raise VariantNotFoundException(variant_id=variant_id)
        return variant

    async def create_variant(self, variant_data: ProductVariantCreate) -> ProductVariantWithAttributes:
        logger.info(f"[VariantService] Create variant SKU {variant_data.sku} for product {variant_data.product_id}")
        if not await self.repository.product_exists(variant_data.product_id):
            raise ProductNotFoundException(variant_data.product_id)
        if await self.repository.get_by_sku(variant_data.sku):
            raise DuplicateSKUException(variant_data.sku)

        value_ids = list(dict.fromkeys(variant_data.attributes))
        attribute_values = await self.repository.get_attribute_values(value_ids)
        found_ids = {value.id for value in attribute_values}
        for value_id in value_ids:
            if value_id not in found_ids:
                raise AttributeValueNotFoundException(value_id)
        attribute_ids = [value.attribute_id for value in attribute_values]
        if len(attribute_ids) != len(set(attribute_ids)):
            raise InvalidVariantDataException("une variante ne peut porter qu'une valeur par attribut")

        variant = await self.repository.create(
            variant_data=variant_data.model_dump(exclude={"attributes"}),
            attribute_values=attribute_values,
        )
        return await self.get_variant(variant.id)

    async def update_variant(self, variant_id: int, variant_data: ProductVariantUpdate) -> ProductVariantWithAttributes:
        logger.info(f"[VariantService] Update variant ID: {variant_id}")
        if not await self.repository.get_by_id(variant_id):
            raise VariantNotFoundException(variant_id=variant_id)
        update_data = variant_data.model_dump(exclude_unset=True)
        # Seul original_price peut être remis à NULL
        for key in ("sku", "price", "stock_quantity"):
            if key in update_data and update_data[key] is None:
                del update_data[key]
        if "sku" in update_data:
            same_sku = await self.repository.get_by_sku(update_data["sku"])
            if same_sku and same_sku.id != variant_id:
                raise DuplicateSKUException(update_data["sku"])
        if update_data:
            await self.repository.update(variant_id, update_data)
        return await self.get_variant(variant_id)

    async def delete_variant(self, variant_id: int) -> None:
        logger.info(f"[VariantService] Delete variant ID: {variant_id}")
        if not await self.repository.get_by_id(variant_id):
            raise VariantNotFoundException(variant_id=variant_id)
        if await self.repository.count_order_items(variant_id) > 0:
            raise VariantInUseException(variant_id)
        await self.repository.delete(variant_id)

    async def add_attribute(self, variant_id: int, attribute_value_id: int) -> VariantAttributeRead:
        logger.info(f"[VariantService] Link value {attribute_value_id} to variant {variant_id}")
        if not await self.repository.get_by_id(variant_id):
            raise VariantNotFoundException(variant_id=variant_id)
        values = await self.repository.get_attribute_values([attribute_value_id])
        if not values:
            raise AttributeValueNotFoundException(attribute_value_id)
        attribute_value = values[0]
        if await self.repository.get_link(variant_id, attribute_value_id):
            raise DuplicateVariantAttributeLinkException(variant_id, attribute_value_id)
        if await self.repository.get_link_for_attribute(variant_id, attribute_value.attribute_id):
            raise InvalidVariantDataException("la variante a déjà une valeur pour cet attribut")
        return await self.repository.add_link(variant_id, attribute_value)

    async def remove_attribute(self, variant_id: int, attribute_value_id: int) -> None:
        logger.info(f"[VariantService] Unlink value {attribute_value_id} from variant {variant_id}")
        if not await self.repository.get_link(variant_id, attribute_value_id):
            raise VariantAttributeLinkNotFoundException(variant_id, attribute_value_id)
        await self.repository.delete_link(variant_id, attribute_value_id)
