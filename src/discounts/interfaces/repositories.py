# src/discounts/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.discounts.models import Discount, DiscountRead


class AbstractDiscountRepository(ABC):
    """Interface abstraite pour le repository des réductions."""

    @abstractmethod
    async def get_by_id(self, discount_id: int) -> Optional[Discount]:
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[Discount]:
        pass

    @abstractmethod
    async def get_read(self, discount_id: int) -> Optional[DiscountRead]:
        """Réduction avec le SKU de la variante et le nom du produit."""
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def variant_exists(self, variant_id: int) -> bool:
        pass

    @abstractmethod
    async def create(self, discount_data: Dict[str, Any]) -> Discount:
        pass

    @abstractmethod
    async def update(self, discount_id: int, discount_data: Dict[str, Any]) -> Discount:
        pass

    @abstractmethod
    async def delete(self, discount_id: int) -> None:
        pass
