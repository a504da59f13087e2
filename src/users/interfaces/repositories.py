from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from src.users.models import Account, AccountRead


class AbstractUserRepository(ABC):
    """Interface abstraite pour le repository des comptes."""

    @abstractmethod
    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """Récupère un compte par son ID. Retourne le modèle de table."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Récupère un compte par son email. Retourne le modèle de table."""
        pass

    @abstractmethod
    async def get_read(self, account_id: int) -> Optional[AccountRead]:
        """Récupère un compte avec son profil (client ou manager) et son rôle."""
        pass

    @abstractmethod
    async def list(
        self,
        limit: int,
        offset: int,
        search: Optional[str] = None,
        status: Optional[str] = None,
        role_id: Optional[int] = None,
        account_type: Optional[str] = None,
        sort_by: str = "id",
        descending: bool = True,
    ) -> Tuple[List[AccountRead], int]:
        pass

    @abstractmethod
    async def create(
        self,
        account_data: Dict[str, Any],
        customer_data: Optional[Dict[str, Any]] = None,
        manager_data: Optional[Dict[str, Any]] = None,
    ) -> AccountRead:
        """Crée le compte et son profil dans une même transaction."""
        pass

    @abstractmethod
    async def update(
        self,
        account_id: int,
        account_data: Dict[str, Any],
        customer_data: Optional[Dict[str, Any]] = None,
        manager_data: Optional[Dict[str, Any]] = None,
    ) -> AccountRead:
        pass

    @abstractmethod
    async def delete(self, account_id: int) -> None:
        """Supprime le profil puis le compte."""
        pass

    @abstractmethod
    async def count_customer_orders(self, customer_id: int) -> int:
        pass

    @abstractmethod
    async def count_manager_responses(self, manager_id: int) -> int:
        pass
