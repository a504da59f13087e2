# src/attributes/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.attributes.models import (
    Attribute, AttributeCreate, AttributeRead, AttributeUpdate,
    AttributeValue, AttributeValueRead
)


class AbstractAttributeRepository(ABC):
    """Interface abstraite pour le repository des attributs et de leurs valeurs."""

    @abstractmethod
    async def get_by_id(self, attribute_id: int) -> Optional[AttributeRead]:
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Attribute]:
        pass

    @abstractmethod
    async def list(
        self,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        sort_by: str = "id",
        descending: bool = True,
    ) -> Tuple[List[AttributeRead], int]:
        pass

    @abstractmethod
    async def create(self, attribute_data: AttributeCreate) -> AttributeRead:
        pass

    @abstractmethod
    async def update(self, attribute_id: int, attribute_data: AttributeUpdate) -> AttributeRead:
        pass

    @abstractmethod
    async def delete(self, attribute_id: int) -> None:
        pass

    @abstractmethod
    async def list_values(self, attribute_id: int) -> List[AttributeValueRead]:
        """Valeurs d'un attribut, triées par valeur."""
        pass

    @abstractmethod
    async def get_value(self, value_id: int) -> Optional[AttributeValue]:
        pass

    @abstractmethod
    async def get_value_by_text(self, attribute_id: int, value: str) -> Optional[AttributeValue]:
        pass

    @abstractmethod
    async def create_value(self, attribute_id: int, value: str) -> AttributeValueRead:
        pass

    @abstractmethod
    async def count_variant_links(self, value_id: int) -> int:
        """Nombre de variantes portant la valeur."""
        pass

    @abstractmethod
    async def delete_value(self, value_id: int) -> None:
        pass
