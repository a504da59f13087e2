# src/products/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.products.models import Product, ProductListItem


class AbstractProductRepository(ABC):
    """Interface abstraite pour le repository des produits."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    async def get_with_category_name(self, product_id: int) -> Optional[Tuple[Product, Optional[str]]]:
        """Produit et nom de sa catégorie."""
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def list_by_category(self, category_id: int) -> List[ProductListItem]:
        pass

    @abstractmethod
    async def list_brands(self) -> List[str]:
        """Marques distinctes non vides, triées."""
        pass

    @abstractmethod
    async def category_exists(self, category_id: int) -> bool:
        pass

    @abstractmethod
    async def create(self, product_data: Dict[str, Any]) -> Product:
        pass

    @abstractmethod
    async def update(self, product_id: int, product_data: Dict[str, Any]) -> Product:
        pass

    @abstractmethod
    async def count_ordered_items(self, product_id: int) -> int:
        """Nombre de lignes de commande portant sur une variante du produit."""
        pass

    @abstractmethod
    async def delete(self, product_id: int) -> None:
        """Supprime le produit et tout ce qui en dépend."""
        pass
