import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status, Query, Path, Response

from src.auth.dependencies import StaffUserDep
from src.core.exceptions import InvalidSortFieldException
from src.core.pagination import PageParamsDep, PaginatedResponse, parse_csv, set_content_range
from src.product_variants.exceptions import VariantNotFoundException
from .dependencies import DiscountServiceDep
from .models import DiscountCreate, DiscountUpdate, DiscountRead
from .exceptions import (
    DiscountNotFoundException,
    DuplicateDiscountCodeException,
    InvalidDiscountDataException
)

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_discount_service_errors(e: Exception):
    if isinstance(e, (DiscountNotFoundException, VariantNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, DuplicateDiscountCodeException):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, (InvalidDiscountDataException, InvalidSortFieldException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Discount API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing discount request.")


@router.get("/", response_model=PaginatedResponse[DiscountRead])
async def read_discounts(
    response: Response,
    service: DiscountServiceDep,
    current_user: StaffUserDep,
    params: PageParamsDep,
    status_filter: Optional[str] = Query(None, alias="status", description="Statuts séparés par des virgules"),
    type_filter: Optional[str] = Query(None, alias="type", description="Types séparés par des virgules"),
):
    logger.info(f"API read_discounts by {current_user.email}: page={params.page}, search={params.search}")
    try:
        result = await service.list_discounts(params, statuses=parse_csv(status_filter), types=parse_csv(type_filter))
    except Exception as e:
        handle_discount_service_errors(e)
    set_content_range(response, "discounts", params.offset, len(result.items), result.total)
    return result

@router.get("/{discount_id}", response_model=DiscountRead)
async def read_discount(service: DiscountServiceDep, current_user: StaffUserDep, discount_id: int = Path(..., ge=1)):
    try:
        return await service.get_discount(discount_id)
    except Exception as e:
        handle_discount_service_errors(e)

@router.post("/", response_model=DiscountRead, status_code=status.HTTP_201_CREATED)
async def create_discount(discount: DiscountCreate, service: DiscountServiceDep, current_user: StaffUserDep):
    logger.info(f"API create_discount by {current_user.email}: code={discount.code}")
    try:
        return await service.create_discount(discount)
    except Exception as e:
        handle_discount_service_errors(e)

@router.put("/{discount_id}", response_model=DiscountRead)
async def update_discount(
    discount: DiscountUpdate,
    service: DiscountServiceDep,
    current_user: StaffUserDep,
    discount_id: int = Path(..., ge=1),
):
    logger.info(f"API update_discount by {current_user.email}: ID={discount_id}")
    try:
        return await service.update_discount(discount_id, discount)
    except Exception as e:
        handle_discount_service_errors(e)

@router.delete("/{discount_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_discount(service: DiscountServiceDep, current_user: StaffUserDep, discount_id: int = Path(..., ge=1)):
    logger.info(f"API delete_discount by {current_user.email}: ID={discount_id}")
    try:
        await service.delete_discount(discount_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_discount_service_errors(e)

discount_router = router
