"""
Implémentation des repositories pour les variants de produits.

Ce fichier contient les implémentations concrètes des repositories
utilisés dans le module product_variants.
"""
import logging
from collections import defaultdict
from typing import Optional, List, Dict, Any, Tuple

from sqlalchemy import select, func, delete, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.attributes.models import Attribute, AttributeValue
from src.discounts.models import Discount
from src.feedback.models import Feedback, FeedbackResponse
from src.orders.models import OrderItem
from src.product_variants.exceptions import DuplicateSKUException
from src.product_variants.interfaces.repositories import AbstractProductVariantRepository
from src.product_variants.models import (
    ProductVariant, ProductVariantRead, ProductVariantWithAttributes, ProductVariantListItem,
    VariantAttributeRead, VariantAttributeValue, VariantSearchResult
)
from src.products.models import Product

logger = logging.getLogger(__name__)


async def delete_variant_dependencies(session: AsyncSession, variant_ids: List[int]) -> None:
    """
    Supprime tout ce qui référence les variantes données, dans l'ordre des clés étrangères:
    liens d'attributs, réponses aux avis puis avis, réductions.
    Ne commit pas.
    """
    if not variant_ids:
        return
    await session.execute(
        delete(VariantAttributeValue).where(VariantAttributeValue.product_variant_id.in_(variant_ids))
    )
    feedback_ids = select(Feedback.id).where(Feedback.product_variant_id.in_(variant_ids))
    await session.execute(delete(FeedbackResponse).where(FeedbackResponse.feedback_id.in_(feedback_ids)))
    await session.execute(delete(Feedback).where(Feedback.product_variant_id.in_(variant_ids)))
    await session.execute(delete(Discount).where(Discount.product_variant_id.in_(variant_ids)))


class SQLAlchemyProductVariantRepository(AbstractProductVariantRepository):
    """Implémentation SQLAlchemy du repository de variants de produits."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _attributes_by_variant(self, variant_ids: List[int]) -> Dict[int, List[VariantAttributeRead]]:
        """Charge les attributs de plusieurs variantes en une requête."""
        attributes: Dict[int, List[VariantAttributeRead]] = defaultdict(list)
        if not variant_ids:
            return attributes
        stmt = (
            select(
                VariantAttributeValue.product_variant_id,
                AttributeValue.id,
                Attribute.id,
                Attribute.name,
                AttributeValue.value,
            )
            .join(AttributeValue, AttributeValue.id == VariantAttributeValue.attribute_value_id)
            .join(Attribute, Attribute.id == AttributeValue.attribute_id)
            .where(VariantAttributeValue.product_variant_id.in_(variant_ids))
            .order_by(Attribute.name, AttributeValue.value)
        )
        result = await self.session.execute(stmt)
        for variant_id, value_id, attribute_id, attribute_name, value in result.all():
            attributes[variant_id].append(VariantAttributeRead(
                attribute_value_id=value_id,
                attribute_id=attribute_id,
                attribute_name=attribute_name,
                value=value,
            ))
        return attributes

    async def get_by_id(self, variant_id: int) -> Optional[ProductVariant]:
        """Récupère une variante de produit par son ID."""
        variant = await self.session.get(ProductVariant, variant_id)
        if not variant:
            logger.debug(f"Variante ID {variant_id} non trouvée dans get_by_id().")
        return variant

    async def get_by_sku(self, sku: str) -> Optional[ProductVariant]:
        """Récupère une variante de produit par son SKU."""
        result = await self.session.execute(select(ProductVariant).where(ProductVariant.sku == sku))
        return result.scalar_one_or_none()

    async def get_with_attributes(self, variant_id: int) -> Optional[ProductVariantWithAttributes]:
        variant = await self.get_by_id(variant_id)
        if not variant:
            return None
        attributes = await self._attributes_by_variant([variant_id])
        return ProductVariantWithAttributes(
            **ProductVariantRead.model_validate(variant).model_dump(),
            attributes=attributes.get(variant_id, []),
        )

    async def list(
        self,
        limit: int,
        offset: int,
        product_id: Optional[int] = None,
        search: Optional[str] = None,
        descending: bool = False,
    ) -> Tuple[List[ProductVariantListItem], int]:
        conditions = []
        if product_id is not None:
            conditions.append(ProductVariant.product_id == product_id)
        if search:
            conditions.append(or_(ProductVariant.sku.ilike(search), Product.name.ilike(search)))

        order = ProductVariant.price.desc() if descending else ProductVariant.price.asc()
        stmt = (
            select(ProductVariant, Product)
            .join(Product, Product.id == ProductVariant.product_id)
            .where(*conditions)
            .order_by(order, ProductVariant.id)
            .limit(limit)
            .offset(offset)
        )
        rows = (await self.session.execute(stmt)).all()
        attributes = await self._attributes_by_variant([variant.id for variant, _ in rows])

        items = [
            ProductVariantListItem(
                **ProductVariantRead.model_validate(variant).model_dump(),
                attributes=attributes.get(variant.id, []),
                product_name=product.name,
                product_description=product.description,
                product_image_url=product.image_url,
                product_brand=product.brand,
                product_specification=product.specification,
            )
            for variant, product in rows
        ]

        count_stmt = (
            select(func.count(ProductVariant.id))
            .join(Product, Product.id == ProductVariant.product_id)
            .where(*conditions)
        )
        total_count = (await self.session.execute(count_stmt)).scalar_one() or 0
        return items, total_count

    async def list_for_product(self, product_id: int) -> List[ProductVariantWithAttributes]:
        """Liste toutes les variantes d'un produit, triées par prix."""
        stmt = (
            select(ProductVariant)
            .where(ProductVariant.product_id == product_id)
            .order_by(ProductVariant.price, ProductVariant.id)
        )
        variants = (await self.session.execute(stmt)).scalars().all()
        attributes = await self._attributes_by_variant([v.id for v in variants])
        return [
            ProductVariantWithAttributes(
                **ProductVariantRead.model_validate(v).model_dump(),
                attributes=attributes.get(v.id, []),
            )
            for v in variants
        ]

    async def search(self, pattern: str, limit: int) -> List[VariantSearchResult]:
        stmt = (
            select(ProductVariant.id, ProductVariant.sku, Product.name)
            .join(Product, Product.id == ProductVariant.product_id)
            .where(or_(ProductVariant.sku.ilike(pattern), Product.name.ilike(pattern)))
            .order_by(Product.name, ProductVariant.sku)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [VariantSearchResult(id=vid, sku=sku, product_name=name) for vid, sku, name in result.all()]

    async def product_exists(self, product_id: int) -> bool:
        return await self.session.get(Product, product_id) is not None

    async def get_attribute_values(self, value_ids: List[int]) -> List[AttributeValue]:
        if not value_ids:
            return []
        result = await self.session.execute(select(AttributeValue).where(AttributeValue.id.in_(value_ids)))
        return list(result.scalars().all())

    async def create(self, variant_data: Dict[str, Any], attribute_values: List[AttributeValue]) -> ProductVariant:
        """Crée une nouvelle variante de produit."""
        new_variant = ProductVariant(**variant_data)
        self.session.add(new_variant)
        try:
            await self.session.flush() # Obtenir l'ID et vérifier contraintes
            for attribute_value in attribute_values:
                self.session.add(VariantAttributeValue(
                    product_variant_id=new_variant.id,
                    attribute_value_id=attribute_value.id,
                    attribute_id=attribute_value.attribute_id,
                ))
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.error(f"Erreur intégrité création variante: {e}", exc_info=True)
            raise DuplicateSKUException(sku=variant_data.get("sku", "unknown"))
        await self.session.refresh(new_variant)
        logger.info(f"Variante ID {new_variant.id} créée pour produit {new_variant.product_id}.")
        return new_variant

    async def update(self, variant_id: int, variant_data: Dict[str, Any]) -> ProductVariant:
        """Met à jour une variante de produit existante."""
        variant = await self.get_by_id(variant_id)
        for key, value in variant_data.items():
            setattr(variant, key, value)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.error(f"Erreur intégrité MAJ variante {variant_id}: {e}", exc_info=True)
            raise DuplicateSKUException(sku=variant_data.get("sku", "unknown"))
        await self.session.refresh(variant)
        logger.info(f"Variante ID {variant_id} mise à jour.")
        return variant

    async def count_order_items(self, variant_id: int) -> int:
        stmt = select(func.count(OrderItem.id)).where(OrderItem.product_variant_id == variant_id)
        return (await self.session.execute(stmt)).scalar_one() or 0

    async def delete(self, variant_id: int) -> None:
        """Supprime une variante de produit et ce qui la référence."""
        await delete_variant_dependencies(self.session, [variant_id])
        await self.session.execute(delete(ProductVariant).where(ProductVariant.id == variant_id))
        await self.session.commit()
        logger.info(f"Variante ID {variant_id} supprimée.")

    async def get_link(self, variant_id: int, attribute_value_id: int) -> Optional[VariantAttributeValue]:
        return await self.session.get(VariantAttributeValue, (variant_id, attribute_value_id))

    async def get_link_for_attribute(self, variant_id: int, attribute_id: int) -> Optional[VariantAttributeValue]:
        stmt = select(VariantAttributeValue).where(
            VariantAttributeValue.product_variant_id == variant_id,
            VariantAttributeValue.attribute_id == attribute_id,
        )
        return (await self.session.execute(stmt)).scalars().first()

    async def add_link(self, variant_id: int, attribute_value: AttributeValue) -> VariantAttributeRead:
        self.session.add(VariantAttributeValue(
            product_variant_id=variant_id,
            attribute_value_id=attribute_value.id,
            attribute_id=attribute_value.attribute_id,
        ))
        await self.session.commit()
        attributes = await self._attributes_by_variant([variant_id])
        return next(a for a in attributes[variant_id] if a.attribute_value_id == attribute_value.id)

    async def delete_link(self, variant_id: int, attribute_value_id: int) -> None:
        await self.session.execute(
            delete(VariantAttributeValue).where(
                VariantAttributeValue.product_variant_id == variant_id,
                VariantAttributeValue.attribute_value_id == attribute_value_id,
            )
        )
        await self.session.commit()
