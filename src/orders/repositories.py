"""
Implémentation SQLAlchemy du repository des commandes.

Les listes et le détail joignent le client (profil + compte) ; le détail
ajoute les lignes avec produit et variante, et l'historique avec le nom
du manager.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from src.orders.interfaces.repositories import AbstractOrderRepository
from src.orders.models import (
    Order, OrderItem, OrderHistory, OrderListItem, OrderDetail, OrderItemRead, OrderHistoryRead
)
from src.product_variants.models import ProductVariant
from src.products.models import Product
from src.users.models import Account, Customer, Manager

logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(AbstractOrderRepository):
    """Implémentation SQLAlchemy du repository des commandes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _customer_select(*columns):
        return (
            select(*columns)
            .select_from(Order)
            .outerjoin(Customer, Customer.id == Order.customer_id)
            .outerjoin(Account, Account.id == Customer.account_id)
        )

    @staticmethod
    def _to_list_item(order: Order, customer_name: Optional[str], customer_email: Optional[str]) -> OrderListItem:
        return OrderListItem(**order.model_dump(), customer_name=customer_name, customer_email=customer_email)

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        return await self.session.get(Order, order_id)

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
        logger.debug(f"[OrderRepository] Listing orders: limit={limit}, offset={offset}, customer_id={customer_id}")
        conditions = []
        if customer_id is not None:
            conditions.append(Order.customer_id == customer_id)
        if search_id is not None:
            conditions.append(Order.id == search_id)
        elif search:
            conditions.append(or_(Account.full_name.ilike(search), Account.email.ilike(search)))
        if statuses:
            conditions.append(Order.status.in_(statuses))
        if payment_statuses:
            conditions.append(Order.payment_status.in_(payment_statuses))

        sort_columns = {
            "id": Order.id,
            "order_date": Order.order_date,
            "payment_amount": Order.payment_amount,
            "status": Order.status,
            "payment_status": Order.payment_status,
            "customer_name": Account.full_name,
        }
        sort_column = sort_columns[sort_by]
        order = sort_column.desc() if descending else sort_column.asc()

        stmt = (
            self._customer_select(Order, Account.full_name, Account.email)
            .where(*conditions)
            .order_by(order, Order.id.desc())
            .limit(limit)
            .offset(offset)
        )
        rows = (await self.session.execute(stmt)).all()
        count_stmt = self._customer_select(func.count(Order.id)).where(*conditions)
        total_count = (await self.session.execute(count_stmt)).scalar_one() or 0
        return [self._to_list_item(*row) for row in rows], total_count

    async def get_detail(self, order_id: int) -> Optional[OrderDetail]:
        stmt = self._customer_select(Order, Account.full_name, Account.email, Customer.phone_number, Customer.address).where(
            Order.id == order_id
        )
        row = (await self.session.execute(stmt)).first()
        if row is None:
            logger.debug(f"[OrderRepository] Order ID {order_id} not found.")
            return None
        order, customer_name, customer_email, customer_phone, customer_address = row

        items_stmt = (
            select(OrderItem, Product.name, Product.image_url, ProductVariant.sku, ProductVariant.price)
            .outerjoin(ProductVariant, ProductVariant.id == OrderItem.product_variant_id)
            .outerjoin(Product, Product.id == ProductVariant.product_id)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
        )
        items = [
            OrderItemRead(
                **item.model_dump(exclude={"order_id"}),
                product_name=product_name,
                product_image=product_image,
                variant_sku=sku,
                variant_price=price,
            )
            for item, product_name, product_image, sku, price in (await self.session.execute(items_stmt)).all()
        ]

        manager_account = aliased(Account)
        history_stmt = (
            select(OrderHistory, manager_account.full_name)
            .outerjoin(Manager, Manager.id == OrderHistory.manager_id)
            .outerjoin(manager_account, manager_account.id == Manager.account_id)
            .where(OrderHistory.order_id == order_id)
            .order_by(OrderHistory.processing_time.desc(), OrderHistory.id.desc())
        )
        history = [
            OrderHistoryRead(**entry.model_dump(exclude={"order_id"}), manager_name=manager_name)
            for entry, manager_name in (await self.session.execute(history_stmt)).all()
        ]

        return OrderDetail(
            **order.model_dump(),
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            customer_address=customer_address,
            items=items,
            history=history,
        )

    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        return await self.session.get(Customer, customer_id)

    async def get_variants(self, variant_ids: List[int]) -> List[ProductVariant]:
        if not variant_ids:
            return []
        result = await self.session.execute(select(ProductVariant).where(ProductVariant.id.in_(variant_ids)))
        return list(result.scalars().all())

    async def create(self, order_data: Dict[str, Any], items: List[Dict[str, Any]], history: Dict[str, Any]) -> Order:
        order = Order(**order_data)
        self.session.add(order)
        await self.session.flush()  # ID de la commande
        for item in items:
            self.session.add(OrderItem(order_id=order.id, **item))
        self.session.add(OrderHistory(order_id=order.id, **history))
        await self.session.commit()
        await self.session.refresh(order)
        logger.info(f"[OrderRepository] Order ID {order.id} created with {len(items)} item(s).")
        return order

    async def update(self, order_id: int, order_data: Dict[str, Any], history: Optional[Dict[str, Any]] = None) -> Order:
        order = await self.get_by_id(order_id)
        for key, value in order_data.items():
            setattr(order, key, value)
        if history is not None:
            self.session.add(OrderHistory(order_id=order_id, **history))
        await self.session.commit()
        await self.session.refresh(order)
        return order
