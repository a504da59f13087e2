"""
Interfaces des repositories pour les variants de produits.
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any, Tuple

from src.attributes.models import AttributeValue
from src.product_variants.models import (
    ProductVariant, ProductVariantWithAttributes, ProductVariantListItem,
    VariantAttributeRead, VariantAttributeValue, VariantSearchResult
)


class AbstractProductVariantRepository(ABC):
    """Interface abstraite pour le repository de variants de produits."""

    @abstractmethod
    async def get_by_id(self, variant_id: int) -> Optional[ProductVariant]:
        """Récupère une variante de produit par son ID."""
        pass

    @abstractmethod
    async def get_by_sku(self, sku: str) -> Optional[ProductVariant]:
        """Récupère une variante de produit par son SKU."""
        pass

    @abstractmethod
    async def get_with_attributes(self, variant_id: int) -> Optional[ProductVariantWithAttributes]:
        pass

    @abstractmethod
    async def list(
        self,
        limit: int,
        offset: int,
        product_id: Optional[int] = None,
        search: Optional[str] = None,
        descending: bool = False,
    ) -> Tuple[List[ProductVariantListItem], int]:
        """Liste paginée des variantes triées par prix, avec les informations produit."""
        pass

    @abstractmethod
    async def list_for_product(self, product_id: int) -> List[ProductVariantWithAttributes]:
        pass

    @abstractmethod
    async def search(self, pattern: str, limit: int) -> List[VariantSearchResult]:
        """Recherche rapide sur le SKU ou le nom du produit."""
        pass

    @abstractmethod
    async def product_exists(self, product_id: int) -> bool:
        pass

    @abstractmethod
    async def get_attribute_values(self, value_ids: List[int]) -> List[AttributeValue]:
        pass

    @abstractmethod
    async def create(self, variant_data: Dict[str, Any], attribute_values: List[AttributeValue]) -> ProductVariant:
        """Crée une variante et ses liens vers les valeurs d'attribut."""
        pass

    @abstractmethod
    async def update(self, variant_id: int, variant_data: Dict[str, Any]) -> ProductVariant:
        pass

    @abstractmethod
    async def count_order_items(self, variant_id: int) -> int:
        pass

    @abstractmethod
    async def delete(self, variant_id: int) -> None:
        """Supprime la variante et ses dépendances (liens, avis, réductions)."""
        pass

    @abstractmethod
    async def get_link(self, variant_id: int, attribute_value_id: int) -> Optional[VariantAttributeValue]:
        pass

    @abstractmethod
    async def get_link_for_attribute(self, variant_id: int, attribute_id: int) -> Optional[VariantAttributeValue]:
        pass

    @abstractmethod
    async def add_link(self, variant_id: int, attribute_value: AttributeValue) -> VariantAttributeRead:
        pass

    @abstractmethod
    async def delete_link(self, variant_id: int, attribute_value_id: int) -> None:
        pass
