import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from src.auth.models import AuthenticatedAccount
from src.core.dates import utc_now
from src.core.pagination import PageParams, PaginatedResponse, resolve_sort_field
from src.product_variants.exceptions import VariantNotFoundException
from src.orders.config import (
    ALLOWED_ORDER_STATUS,
    FINAL_ORDER_STATUS,
    ORDER_STATUS_PENDING,
    ORDER_STATUS_PROCESSING,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_REJECTED,
    PAYMENT_STATUS_PENDING,
    PAYMENT_STATUS_PAID,
    DEFAULT_PAYMENT_METHOD,
    ORDER_SORT_FIELDS,
    ORDER_DEFAULT_SORT,
)
from src.orders.interfaces.repositories import AbstractOrderRepository
from src.orders.models import Order, OrderCreate, OrderListItem, OrderDetail
from src.orders.exceptions import (
    OrderNotFoundException,
    CustomerNotFoundException,
    OrderAccessForbiddenException,
    OrderUpdateForbiddenException,
    InvalidOrderStatusException,
    OrderCreationFailedException,
)

logger = logging.getLogger(__name__)


def history_entry(previous_status: Optional[str], new_status: str, actor: AuthenticatedAccount, note: Optional[str] = None) -> Dict[str, Any]:
    return {
        "manager_id": actor.manager_id,
        "previous_status": previous_status,
        "new_status": new_status,
        "note": note,
    }


class OrderService:
    """Service applicatif pour la gestion des commandes et de leur cycle de vie."""

    def __init__(self, order_repository: AbstractOrderRepository):
        self.order_repository = order_repository

    async def _get_order(self, order_id: int) -> Order:
        order = await self.order_repository.get_by_id(order_id)
        if not order:
            raise OrderNotFoundException(order_id)
        return order

    def _check_access(self, order: Order, current_user: AuthenticatedAccount) -> None:
        """Un client n'accède qu'à ses propres commandes ; le personnel à toutes."""
        if current_user.is_staff:
            return
        if current_user.customer_id is None or order.customer_id != current_user.customer_id:
            logger.warning(f"[OrderService] Account {current_user.id} denied access to order {order.id}.")
            raise OrderAccessForbiddenException()

    async def get_order(self, order_id: int, current_user: AuthenticatedAccount) -> OrderDetail:
        logger.debug(f"[OrderService] Get order ID: {order_id} for account {current_user.id}")
        order = await self._get_order(order_id)
        self._check_access(order, current_user)
        return await self.order_repository.get_detail(order_id)

    async def list_orders(
        self,
        params: PageParams,
        current_user: AuthenticatedAccount,
        statuses: Optional[List[str]] = None,
        payment_statuses: Optional[List[str]] = None,
    ) -> PaginatedResponse[OrderListItem]:
        sort_by = resolve_sort_field(params.sort_by, ORDER_SORT_FIELDS, ORDER_DEFAULT_SORT)

        customer_id = None
        if not current_user.is_staff:
            # Un compte sans profil client ne voit aucune commande
            customer_id = current_user.customer_id if current_user.customer_id is not None else 0

        search_id = None
        search = params.search.strip() if params.search else None
        if search and search.isdigit():
            search_id = int(search)

        logger.debug(f"[OrderService] List orders: page={params.page}, customer_id={customer_id}, search={search}")
        items, total = await self.order_repository.list(
            limit=params.limit,
            offset=params.offset,
            customer_id=customer_id,
            search_id=search_id,
            search=params.search_pattern if search_id is None else None,
            statuses=statuses,
            payment_statuses=payment_statuses,
            sort_by=sort_by,
            descending=params.descending,
        )
        return PaginatedResponse[OrderListItem](items=items, total=total, page=params.page, page_size=params.page_size)

    async def create_order(self, order_in: OrderCreate, current_user: AuthenticatedAccount) -> OrderDetail:
        logger.info(f"[OrderService] Create order by account {current_user.id}")
        if current_user.is_staff:
            if order_in.customer_id is None:
                raise OrderCreationFailedException("Le client de la commande doit être précisé.")
            customer_id = order_in.customer_id
        else:
            if current_user.customer_id is None:
                raise OrderAccessForbiddenException("Seuls les clients peuvent passer commande pour eux-mêmes.")
            customer_id = current_user.customer_id
        customer = await self.order_repository.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundException(customer_id)

        # Sans adresse fournie, la commande part à l'adresse du client
        shipping_address = (order_in.shipping_address or "").strip() or customer.address
        if not shipping_address:
            raise OrderCreationFailedException("Aucune adresse de livraison fournie ni enregistrée pour ce client.")

        if not order_in.items:
            raise OrderCreationFailedException("La commande doit contenir au moins un article.")

        variant_ids = list(dict.fromkeys(item.product_variant_id for item in order_in.items))
        variants = {variant.id: variant for variant in await self.order_repository.get_variants(variant_ids)}
        for variant_id in variant_ids:
            if variant_id not in variants:
                raise VariantNotFoundException(variant_id=variant_id)

        items = []
        total_amount = Decimal("0")
        for item in order_in.items:
            unit_price = variants[item.product_variant_id].price
            total_amount += unit_price * item.quantity
            items.append({
                "product_variant_id": item.product_variant_id,
                "quantity": item.quantity,
                "unit_price": unit_price,
                "note": item.note,
            })

        order_data = {
            "customer_id": customer_id,
            "shipping_address": shipping_address,
            "payment_method": order_in.payment_method or DEFAULT_PAYMENT_METHOD,
            "status": ORDER_STATUS_PENDING,
            "payment_status": PAYMENT_STATUS_PENDING,
            "payment_amount": total_amount,
        }
        order = await self.order_repository.create(
            order_data, items, history_entry(None, ORDER_STATUS_PENDING, current_user)
        )
        logger.info(f"[OrderService] Order {order.id} created for customer {customer_id}, amount {total_amount}.")
        return await self.order_repository.get_detail(order.id)

    async def pay_order(self, order_id: int, current_user: AuthenticatedAccount) -> OrderDetail:
        logger.info(f"[OrderService] Pay order {order_id} by account {current_user.id}")
        order = await self._get_order(order_id)
        if order.payment_status == PAYMENT_STATUS_PAID:
            raise OrderUpdateForbiddenException("La commande est déjà payée.")
        if order.status in FINAL_ORDER_STATUS:
            raise OrderUpdateForbiddenException(f"Impossible de payer une commande au statut '{order.status}'.")

        update_data: Dict[str, Any] = {"payment_status": PAYMENT_STATUS_PAID, "payment_date": utc_now()}
        history = None
        if order.status == ORDER_STATUS_PENDING:
            update_data["status"] = ORDER_STATUS_PROCESSING
            history = history_entry(order.status, ORDER_STATUS_PROCESSING, current_user)
        await self.order_repository.update(order_id, update_data, history)
        return await self.order_repository.get_detail(order_id)

    async def deliver_order(self, order_id: int, current_user: AuthenticatedAccount) -> OrderDetail:
        logger.info(f"[OrderService] Deliver order {order_id} by account {current_user.id}")
        order = await self._get_order(order_id)
        if order.status == ORDER_STATUS_COMPLETED:
            raise OrderUpdateForbiddenException("La commande est déjà livrée.")
        if order.status in (ORDER_STATUS_CANCELLED, ORDER_STATUS_REJECTED):
            raise OrderUpdateForbiddenException(f"Impossible de livrer une commande au statut '{order.status}'.")
        if order.payment_status != PAYMENT_STATUS_PAID:
            raise OrderUpdateForbiddenException("La commande doit être payée avant d'être livrée.")
        await self.order_repository.update(
            order_id,
            {"status": ORDER_STATUS_COMPLETED},
            history_entry(order.status, ORDER_STATUS_COMPLETED, current_user),
        )
        return await self.order_repository.get_detail(order_id)

    async def cancel_order(self, order_id: int, reason: Optional[str], current_user: AuthenticatedAccount) -> OrderDetail:
        logger.info(f"[OrderService] Cancel order {order_id} by account {current_user.id}")
        order = await self._get_order(order_id)
        self._check_access(order, current_user)
        if order.status in (ORDER_STATUS_CANCELLED, ORDER_STATUS_COMPLETED):
            raise OrderUpdateForbiddenException(f"Impossible d'annuler une commande au statut '{order.status}'.")
        await self.order_repository.update(
            order_id,
            {"status": ORDER_STATUS_CANCELLED},
            history_entry(order.status, ORDER_STATUS_CANCELLED, current_user, note=reason),
        )
        return await self.order_repository.get_detail(order_id)

    async def update_order_status(self, order_id: int, new_status: str, current_user: AuthenticatedAccount) -> OrderDetail:
        logger.info(f"[OrderService] Update status of order {order_id} to '{new_status}' by account {current_user.id}")
        if new_status not in ALLOWED_ORDER_STATUS:
            raise InvalidOrderStatusException(new_status, ALLOWED_ORDER_STATUS)
        order = await self._get_order(order_id)
        if order.status == new_status:
            raise OrderUpdateForbiddenException(f"La commande est déjà au statut '{new_status}'.")
        if not current_user.is_admin:
            if order.status in (ORDER_STATUS_COMPLETED, ORDER_STATUS_CANCELLED):
                raise OrderAccessForbiddenException(
                    f"Seul un administrateur peut modifier une commande au statut '{order.status}'."
                )
            if new_status == ORDER_STATUS_COMPLETED and order.payment_status != PAYMENT_STATUS_PAID:
                raise OrderUpdateForbiddenException("Une commande non payée ne peut pas être marquée livrée.")
        await self.order_repository.update(
            order_id,
            {"status": new_status},
            history_entry(order.status, new_status, current_user),
        )
        return await self.order_repository.get_detail(order_id)
