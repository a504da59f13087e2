# src/orders/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.orders.models import Order, OrderDetail, OrderListItem
from src.product_variants.models import ProductVariant
from src.users.models import Customer


class AbstractOrderRepository(ABC):
    """Interface abstraite pour le repository des commandes."""

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[Order]:
        pass

    @abstractmethod
    async def get_detail(self, order_id: int) -> Optional[OrderDetail]:
        """Commande avec client, lignes (produit, variante) et historique."""
        pass

    @abstractmethod
    async def list(
        self,
        limit: int,
        offset: int,
        customer_id: Optional[int] = None,
        search_id: Optional[int] = None,
        search: Optional[str] = None,
        statuses: Optional[List[str]] = None,
        payment_statuses: Optional[List[str]] = None,
        sort_by: str = "order_date",
        descending: bool = True,
    ) -> Tuple[List[OrderListItem], int]:
        pass

    @abstractmethod
    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    async def get_variants(self, variant_ids: List[int]) -> List[ProductVariant]:
        pass

    @abstractmethod
    async def create(self, order_data: Dict[str, Any], items: List[Dict[str, Any]], history: Dict[str, Any]) -> Order:
        """Crée la commande, ses lignes et la première entrée d'historique en une transaction."""
        pass

    @abstractmethod
    async def update(self, order_id: int, order_data: Dict[str, Any], history: Optional[Dict[str, Any]] = None) -> Order:
        """Met à jour la commande et ajoute l'entrée d'historique éventuelle."""
        pass
