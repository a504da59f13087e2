import logging
from typing import Dict, List, Optional

from src.categories.exceptions import CategoryNotFoundException
from src.core.pagination import PageParams, PaginatedResponse, resolve_sort_field
from src.product_variants.interfaces.repositories import AbstractProductVariantRepository
from src.product_variants.models import ProductVariantWithAttributes
from .config import PRODUCT_SORT_FIELDS, PRODUCT_DEFAULT_SORT
from .interfaces.repositories import AbstractProductRepository
from .models import (
    ProductCreate, ProductUpdate, ProductRead, ProductListItem, ProductDetail,
    ProductAttribute, ProductAttributeValue
)
from .exceptions import ProductNotFoundException, ProductInUseException, ProductOperationFailedException

logger = logging.getLogger(__name__)


def aggregate_attributes(variants: List[ProductVariantWithAttributes]) -> List[ProductAttribute]:
    """Regroupe les valeurs d'attribut portées par les variantes, par attribut."""
    attributes: Dict[int, ProductAttribute] = {}
    for variant in variants:
        for link in variant.attributes:
            attribute = attributes.setdefault(
                link.attribute_id, ProductAttribute(id=link.attribute_id, name=link.attribute_name, values=[])
            )
            if all(v.id != link.attribute_value_id for v in attribute.values):
                attribute.values.append(ProductAttributeValue(id=link.attribute_value_id, value=link.value))
    for attribute in attributes.values():
        attribute.values.sort(key=lambda v: v.value)
    return sorted(attributes.values(), key=lambda a: a.name)


class ProductService:
    """Service managing product base information, delegating variant reads to the variant repository."""

    def __init__(self, product_repo: AbstractProductRepository, variant_repo: AbstractProductVariantRepository):
        self.product_repo = product_repo
        self.variant_repo = variant_repo

    async def get_product(self, product_id: int) -> ProductDetail:
        """Retrieves a detailed product by ID with its variants and aggregated attributes."""
        logger.debug(f"[ProductService] Get Product ID: {product_id}")
        found = await self.product_repo.get_with_category_name(product_id)
        if not found:
            raise ProductNotFoundException(product_id)
        product, category_name = found
        variants = await self.variant_repo.list_for_product(product_id)
        return ProductDetail(
            **ProductRead.model_validate(product).model_dump(),
            category_name=category_name,
            variants=variants,
            attributes=aggregate_attributes(variants),
        )

    async def list_products(
        self,
        params: PageParams,
        category_ids: Optional[List[int]] = None,
        brands: Optional[List[str]] = None,
    ) -> PaginatedResponse[ProductListItem]:
        sort_by = resolve_sort_field(params.sort_by, PRODUCT_SORT_FIELDS, PRODUCT_DEFAULT_SORT)
        logger.debug(f"[ProductService] List Products: page={params.page}, categories={category_ids}, brands={brands}")
        items, total = await self.product_repo.list(
            limit=params.limit,
            offset=params.offset,
            search=params.search_pattern,
            category_ids=category_ids,
            brands=brands,
            sort_by=sort_by,
            descending=params.descending,
        )
        return PaginatedResponse[ProductListItem](items=items, total=total, page=params.page, page_size=params.page_size)

    async def list_brands(self) -> List[str]:
        return await self.product_repo.list_brands()

    async def list_products_by_category(self, category_id: int) -> List[ProductListItem]:
        if not await self.product_repo.category_exists(category_id):
            raise CategoryNotFoundException(category_id)
        return await self.product_repo.list_by_category(category_id)

    async def create_product(self, product_data: ProductCreate) -> ProductDetail:
        logger.info(f"[ProductService] Create Product: {product_data.name}")
        if not await self.product_repo.category_exists(product_data.category_id):
            raise CategoryNotFoundException(product_data.category_id)
        try:
            product = await self.product_repo.create(product_data.model_dump())
        except Exception as e:
            logger.error(f"[ProductService] Unexpected error creating product {product_data.name}: {e}", exc_info=True)
            raise ProductOperationFailedException(f"Erreur interne lors de la création du produit: {e}")
        return await self.get_product(product.id)

    async def update_product(self, product_id: int, product_data: ProductUpdate) -> ProductDetail:
        logger.info(f"[ProductService] Update Product ID: {product_id}")
        if not await self.product_repo.get_by_id(product_id):
            raise ProductNotFoundException(product_id)
        update_data = product_data.model_dump(exclude_unset=True)
        # Les champs obligatoires ne sont pas remis à NULL
        for key in ("name", "category_id"):
            if key in update_data and update_data[key] is None:
                del update_data[key]
        if "category_id" in update_data:
            if not await self.product_repo.category_exists(update_data["category_id"]):
                raise CategoryNotFoundException(update_data["category_id"])
        if update_data:
            await self.product_repo.update(product_id, update_data)
        return await self.get_product(product_id)

    async def delete_product(self, product_id: int) -> None:
        """Supprime le produit en cascade, sauf si une de ses variantes a été commandée."""
        logger.info(f"[ProductService] Delete Product ID: {product_id}")
        if not await self.product_repo.get_by_id(product_id):
            raise ProductNotFoundException(product_id)
        ordered = await self.product_repo.count_ordered_items(product_id)
        if ordered > 0:
            raise ProductInUseException(product_id, ordered)
        await self.product_repo.delete(product_id)
        logger.info(f"[ProductService] Product ID {product_id} deleted with its variants.")
