import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status, Query, Path, Body, Response

from src.auth.dependencies import CurrentUserDep, StaffUserDep
from src.core.exceptions import InvalidSortFieldException
from src.core.pagination import PageParamsDep, PaginatedResponse, parse_csv, set_content_range
from src.product_variants.exceptions import VariantNotFoundException
from src.orders.dependencies import OrderServiceDep
from src.orders.models import OrderCreate, OrderListItem, OrderDetail, OrderCancelRequest, OrderStatusUpdate
from src.orders.exceptions import (
    OrderNotFoundException,
    CustomerNotFoundException,
    OrderAccessForbiddenException,
    OrderUpdateForbiddenException,
    InvalidOrderStatusException,
    OrderCreationFailedException,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_order_service_errors(e: Exception):
    if isinstance(e, (OrderNotFoundException, CustomerNotFoundException, VariantNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, OrderAccessForbiddenException):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    elif isinstance(e, (OrderUpdateForbiddenException, InvalidOrderStatusException, OrderCreationFailedException, InvalidSortFieldException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Order API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne du serveur.")


@router.get("/", response_model=PaginatedResponse[OrderListItem], summary="Lister les commandes")
async def list_orders(
    response: Response,
    order_service: OrderServiceDep,
    current_user: CurrentUserDep,
    params: PageParamsDep,
    status_filter: Optional[str] = Query(None, alias="status", description="Statuts séparés par des virgules"),
    payment_status: Optional[str] = Query(None, description="Statuts de paiement séparés par des virgules"),
):
    """Le personnel voit toutes les commandes, un client uniquement les siennes."""
    logger.info(f"API list_orders by {current_user.email}: page={params.page}, search={params.search}")
    try:
        result = await order_service.list_orders(
            params, current_user, statuses=parse_csv(status_filter), payment_statuses=parse_csv(payment_status)
        )
    except Exception as e:
        handle_order_service_errors(e)
    set_content_range(response, "orders", params.offset, len(result.items), result.total)
    return result

@router.get("/{order_id}", response_model=OrderDetail, summary="Détail d'une commande")
async def get_order(order_service: OrderServiceDep, current_user: CurrentUserDep, order_id: int = Path(..., ge=1)):
    try:
        return await order_service.get_order(order_id, current_user)
    except Exception as e:
        handle_order_service_errors(e)

@router.post("/", response_model=OrderDetail, status_code=status.HTTP_201_CREATED, summary="Créer une commande")
async def create_order(order_in: OrderCreate, order_service: OrderServiceDep, current_user: CurrentUserDep):
    logger.info(f"API create_order by {current_user.email}: {len(order_in.items)} item(s)")
    try:
        return await order_service.create_order(order_in, current_user)
    except Exception as e:
        handle_order_service_errors(e)

@router.put("/{order_id}/pay", response_model=OrderDetail, summary="Marquer une commande payée")
async def pay_order(order_service: OrderServiceDep, current_user: StaffUserDep, order_id: int = Path(..., ge=1)):
    try:
        return await order_service.pay_order(order_id, current_user)
    except Exception as e:
        handle_order_service_errors(e)

@router.put("/{order_id}/deliver", response_model=OrderDetail, summary="Marquer une commande livrée")
async def deliver_order(order_service: OrderServiceDep, current_user: StaffUserDep, order_id: int = Path(..., ge=1)):
    try:
        return await order_service.deliver_order(order_id, current_user)
    except Exception as e:
        handle_order_service_errors(e)

@router.put("/{order_id}/cancel", response_model=OrderDetail, summary="Annuler une commande")
async def cancel_order(
    order_service: OrderServiceDep,
    current_user: CurrentUserDep,
    order_id: int = Path(..., ge=1),
    cancel_in: Optional[OrderCancelRequest] = Body(None),
):
    reason = cancel_in.reason if cancel_in else None
    try:
        return await order_service.cancel_order(order_id, reason, current_user)
    except Exception as e:
        handle_order_service_errors(e)

@router.put("/{order_id}/update-status", response_model=OrderDetail, summary="Changer le statut d'une commande")
async def update_order_status(
    status_in: OrderStatusUpdate,
    order_service: OrderServiceDep,
    current_user: StaffUserDep,
    order_id: int = Path(..., ge=1),
):
    logger.info(f"API update_order_status by {current_user.email}: ID={order_id}, status={status_in.new_status}")
    try:
        return await order_service.update_order_status(order_id, status_in.new_status, current_user)
    except Exception as e:
        handle_order_service_errors(e)

order_router = router
