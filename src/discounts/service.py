import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from src.core.dates import to_naive_utc, utc_now
from src.core.pagination import PageParams, PaginatedResponse, resolve_sort_field
from src.product_variants.exceptions import VariantNotFoundException
from .config import (
    DISCOUNT_TYPE_PERCENTAGE, DISCOUNT_STATUS_ACTIVE, MAX_PERCENTAGE,
    DISCOUNT_SORT_FIELDS, DISCOUNT_DEFAULT_SORT
)
from .interfaces.repositories import AbstractDiscountRepository
from .models import DiscountCreate, DiscountUpdate, DiscountRead
from .exceptions import (
    DiscountNotFoundException,
    DuplicateDiscountCodeException,
    InvalidDiscountDataException,
    DiscountOperationFailedException
)

logger = logging.getLogger(__name__)


def is_active_now(discount: DiscountRead, now: Optional[datetime] = None) -> bool:
    """Active, et maintenant compris dans [start_date, end_date] (bornes absentes = ouvertes)."""
    now = now or utc_now()
    if discount.status != DISCOUNT_STATUS_ACTIVE:
        return False
    if discount.start_date is not None and to_naive_utc(discount.start_date) > now:
        return False
    if discount.end_date is not None and to_naive_utc(discount.end_date) < now:
        return False
    return True


def validate_discount_values(
    discount_type: str,
    value: Decimal,
    start_date: Optional[datetime],
    end_date: Optional[datetime],
) -> None:
    if discount_type == DISCOUNT_TYPE_PERCENTAGE:
        if value < 0 or value > MAX_PERCENTAGE:
            raise InvalidDiscountDataException(f"Un pourcentage doit être compris entre 0 et {MAX_PERCENTAGE}.")
    elif value < 0:
        raise InvalidDiscountDataException("Un montant fixe doit être positif ou nul.")
    if start_date is not None and end_date is not None and start_date >= end_date:
        raise InvalidDiscountDataException("La date de début doit précéder la date de fin.")


class DiscountService:
    """Service applicatif pour la gestion des réductions."""

    def __init__(self, repository: AbstractDiscountRepository):
        self.repository = repository

    def _with_activity(self, discount: DiscountRead) -> DiscountRead:
        discount.is_active_now = is_active_now(discount)
        return discount

    async def get_discount(self, discount_id: int) -> DiscountRead:
        logger.debug(f"[DiscountService] Get discount ID: {discount_id}")
        discount = await self.repository.get_read(discount_id)
        if not discount:
            raise DiscountNotFoundException(discount_id)
        return self._with_activity(discount)

    async def list_discounts(
        self,
        params: PageParams,
        statuses: Optional[List[str]] = None,
        types: Optional[List[str]] = None,
    ) -> PaginatedResponse[DiscountRead]:
        sort_by = resolve_sort_field(params.sort_by, DISCOUNT_SORT_FIELDS, DISCOUNT_DEFAULT_SORT)
        logger.debug(f"[DiscountService] List discounts: page={params.page}, statuses={statuses}, types={types}")
        items, total = await self.repository.list(
            limit=params.limit,
            offset=params.offset,
            search=params.search_pattern,
            statuses=statuses,
            types=types,
            sort_by=sort_by,
            descending=params.descending,
        )
        return PaginatedResponse[DiscountRead](
            items=[self._with_activity(item) for item in items],
            total=total,
            page=params.page,
            page_size=params.page_size,
        )

    async def create_discount(self, discount_data: DiscountCreate) -> DiscountRead:
        logger.info(f"[DiscountService] Create discount: {discount_data.code}")
        data = discount_data.model_dump()
        data["start_date"] = to_naive_utc(data["start_date"])
        data["end_date"] = to_naive_utc(data["end_date"])
        validate_discount_values(data["type"], data["value"], data["start_date"], data["end_date"])

        if not await self.repository.variant_exists(data["product_variant_id"]):
            raise VariantNotFoundException(variant_id=data["product_variant_id"])
        if await self.repository.get_by_code(data["code"]):
            raise DuplicateDiscountCodeException(data["code"])

        try:
            discount = await self.repository.create(data)
        except DuplicateDiscountCodeException:
            raise
        except Exception as e:
            logger.error(f"[DiscountService] Unexpected error creating discount {data['code']}: {e}", exc_info=True)
            raise DiscountOperationFailedException(f"Erreur interne lors de la création de la réduction: {e}")
        return await self.get_discount(discount.id)

    async def update_discount(self, discount_id: int, discount_data: DiscountUpdate) -> DiscountRead:
        logger.info(f"[DiscountService] Update discount ID: {discount_id}")
        existing = await self.repository.get_by_id(discount_id)
        if not existing:
            raise DiscountNotFoundException(discount_id)

        update_data = discount_data.model_dump(exclude_unset=True)
        if not update_data:
            raise InvalidDiscountDataException("Aucun champ à mettre à jour.")
        for key in ("start_date", "end_date"):
            if key in update_data:
                update_data[key] = to_naive_utc(update_data[key])

        # Les champs absents de la requête sont validés avec leur valeur stockée
        validate_discount_values(
            update_data.get("type") or existing.type,
            update_data["value"] if update_data.get("value") is not None else existing.value,
            update_data["start_date"] if "start_date" in update_data else existing.start_date,
            update_data["end_date"] if "end_date" in update_data else existing.end_date,
        )

        variant_id = update_data.get("product_variant_id")
        if variant_id is not None and not await self.repository.variant_exists(variant_id):
            raise VariantNotFoundException(variant_id=variant_id)
        code = update_data.get("code")
        if code is not None:
            same_code = await self.repository.get_by_code(code)
            if same_code and same_code.id != discount_id:
                raise DuplicateDiscountCodeException(code)

        # Les champs obligatoires ne sont pas remis à NULL
        for key in ("product_variant_id", "code", "name", "type", "value", "status"):
            if key in update_data and update_data[key] is None:
                del update_data[key]

        await self.repository.update(discount_id, update_data)
        return await self.get_discount(discount_id)

    async def delete_discount(self, discount_id: int) -> None:
        logger.info(f"[DiscountService] Delete discount ID: {discount_id}")
        if not await self.repository.get_by_id(discount_id):
            raise DiscountNotFoundException(discount_id)
        await self.repository.delete(discount_id)
