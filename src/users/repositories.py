"""
Implémentation SQLAlchemy du repository des comptes.

Un compte est lu avec ses jointures optionnelles vers le profil client,
le profil manager et le rôle du manager.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.users.exceptions import UserAlreadyExistsError
from src.users.interfaces.repositories import AbstractUserRepository
from src.users.models import Account, AccountRead, Customer, Manager
from src.roles.models import Role
from src.orders.models import Order
from src.feedback.models import FeedbackResponse

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(AbstractUserRepository):
    """Implémentation SQLAlchemy du repository des comptes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _joined_select(*columns):
        return (
            select(*columns)
            .select_from(Account)
            .outerjoin(Customer, Customer.account_id == Account.id)
            .outerjoin(Manager, Manager.account_id == Account.id)
            .outerjoin(Role, Role.id == Manager.role_id)
        )

    @staticmethod
    def _to_read(account: Account, customer: Optional[Customer], manager: Optional[Manager], role_name: Optional[str]) -> AccountRead:
        account_type = "manager" if manager else ("customer" if customer else None)
        return AccountRead(
            id=account.id,
            username=account.username,
            email=account.email,
            full_name=account.full_name,
            status=account.status,
            created_at=account.created_at,
            updated_at=account.updated_at,
            account_type=account_type,
            customer_id=customer.id if customer else None,
            manager_id=manager.id if manager else None,
            role_id=manager.role_id if manager else None,
            role_name=role_name,
            phone_number=customer.phone_number if customer else None,
            address=customer.address if customer else None,
        )

    async def get_by_id(self, account_id: int) -> Optional[Account]:
        return await self.session.get(Account, account_id)

    async def get_by_email(self, email: str) -> Optional[Account]:
        result = await self.session.execute(select(Account).where(Account.email == email))
        return result.scalar_one_or_none()

    async def get_read(self, account_id: int) -> Optional[AccountRead]:
        stmt = self._joined_select(Account, Customer, Manager, Role.name).where(Account.id == account_id)
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            logger.debug(f"Compte ID {account_id} non trouvé dans get_read().")
            return None
        return self._to_read(*row)

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
        conditions = []
        if search:
            conditions.append(or_(
                Account.full_name.ilike(search),
                Account.email.ilike(search),
                Account.username.ilike(search),
            ))
        if status:
            conditions.append(Account.status == status)
        if role_id is not None:
            conditions.append(Manager.role_id == role_id)
        if account_type == "manager":
            conditions.append(Manager.id.is_not(None))
        elif account_type == "customer":
            conditions.append(Customer.id.is_not(None))

        sort_columns = {
            "id": Account.id,
            "full_name": Account.full_name,
            "email": Account.email,
            "status": Account.status,
            "created_at": Account.created_at,
            "role": Role.name,
        }
        sort_column = sort_columns[sort_by]
        order = sort_column.desc() if descending else sort_column.asc()

        stmt = (
            self._joined_select(Account, Customer, Manager, Role.name)
            .where(*conditions)
            .order_by(order, Account.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        accounts = [self._to_read(*row) for row in result.all()]

        count_stmt = self._joined_select(func.count(Account.id)).where(*conditions)
        total_count = (await self.session.execute(count_stmt)).scalar_one() or 0
        return accounts, total_count

    async def create(
        self,
        account_data: Dict[str, Any],
        customer_data: Optional[Dict[str, Any]] = None,
        manager_data: Optional[Dict[str, Any]] = None,
    ) -> AccountRead:
        account = Account(**account_data)
        self.session.add(account)
        try:
            await self.session.flush()
            if customer_data is not None:
                self.session.add(Customer(account_id=account.id, **customer_data))
            if manager_data is not None:
                self.session.add(Manager(account_id=account.id, **manager_data))
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.error(f"Erreur intégrité création compte: {e}", exc_info=True)
            raise UserAlreadyExistsError(account_data.get("email", "unknown"))
        logger.info(f"Compte ID {account.id} créé.")
        return await self.get_read(account.id)

    async def update(
        self,
        account_id: int,
        account_data: Dict[str, Any],
        customer_data: Optional[Dict[str, Any]] = None,
        manager_data: Optional[Dict[str, Any]] = None,
    ) -> AccountRead:
        account = await self.get_by_id(account_id)
        for key, value in account_data.items():
            setattr(account, key, value)

        if customer_data:
            result = await self.session.execute(select(Customer).where(Customer.account_id == account_id))
            customer = result.scalar_one_or_none()
            if customer:
                for key, value in customer_data.items():
                    setattr(customer, key, value)
        if manager_data:
            result = await self.session.execute(select(Manager).where(Manager.account_id == account_id))
            manager = result.scalar_one_or_none()
            if manager:
                for key, value in manager_data.items():
                    setattr(manager, key, value)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.error(f"Erreur intégrité MAJ compte {account_id}: {e}", exc_info=True)
            raise UserAlreadyExistsError(account_data.get("email", "unknown"))
        logger.info(f"Compte ID {account_id} mis à jour.")
        return await self.get_read(account_id)

    async def delete(self, account_id: int) -> None:
        await self.session.execute(delete(Customer).where(Customer.account_id == account_id))
        await self.session.execute(delete(Manager).where(Manager.account_id == account_id))
        await self.session.execute(delete(Account).where(Account.id == account_id))
        await self.session.commit()
        logger.info(f"Compte ID {account_id} supprimé.")

    async def count_customer_orders(self, customer_id: int) -> int:
        result = await self.session.execute(select(func.count(Order.id)).where(Order.customer_id == customer_id))
        return result.scalar_one() or 0

    async def count_manager_responses(self, manager_id: int) -> int:
        result = await self.session.execute(
            select(func.count(FeedbackResponse.id)).where(FeedbackResponse.manager_id == manager_id)
        )
        return result.scalar_one() or 0
