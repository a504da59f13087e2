import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from src.attributes.exceptions import AttributeValueNotFoundException
from src.auth.dependencies import AdminUserDep, CurrentUserDep
from src.core.pagination import PageParamsDep, PaginatedResponse, set_content_range
from src.products.exceptions import ProductNotFoundException
from .config import SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT
from .dependencies import ProductVariantServiceDep
from .models import (
    ProductVariantCreate, ProductVariantUpdate, ProductVariantWithAttributes,
    ProductVariantListItem, VariantAttributeRead, VariantAttributeLinkCreate, VariantSearchResult
)
from .exceptions import (
    VariantNotFoundException,
    DuplicateSKUException,
    InvalidVariantDataException,
    VariantInUseException,
    VariantAttributeLinkNotFoundException,
    DuplicateVariantAttributeLinkException
)

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_variant_service_errors(e: Exception):
    if isinstance(e, (VariantNotFoundException, ProductNotFoundException, AttributeValueNotFoundException, VariantAttributeLinkNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, (DuplicateSKUException, DuplicateVariantAttributeLinkException)):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, (InvalidVariantDataException, VariantInUseException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Variant API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing variant request.")

# --- Variantes --- #

@router.get("/", response_model=PaginatedResponse[ProductVariantListItem])
async def read_variants(
    service: ProductVariantServiceDep,
    response: Response,
    params: PageParamsDep,
    product_id: Optional[int] = Query(None, ge=1),
):
    """Liste paginée des variantes, triées par prix, avec les informations produit."""
    logger.info(f"API read_variants: page={params.page}, product_id={product_id}")
    try:
        result = await service.list_variants(params=params, product_id=product_id)
    except Exception as e:
        handle_variant_service_errors(e)
    set_content_range(response, "variants", params.offset, len(result.items), result.total)
    return result

@router.get("/search", response_model=List[VariantSearchResult])
async def search_variants(
    service: ProductVariantServiceDep,
    current_user: CurrentUserDep,
    q: Optional[str] = Query(None),
    limit: int = Query(SEARCH_DEFAULT_LIMIT, ge=1, le=SEARCH_MAX_LIMIT),
):
    """Recherche rapide par SKU ou nom de produit (sélecteurs de commande, réductions)."""
    return await service.search_variants(q, limit)

@router.get("/{variant_id}", response_model=ProductVariantWithAttributes)
async def read_variant(service: ProductVariantServiceDep, variant_id: int = Path(..., ge=1)):
    try:
        return await service.get_variant(variant_id)
    except Exception as e:
        handle_variant_service_errors(e)

@router.post("/", response_model=ProductVariantWithAttributes, status_code=status.HTTP_201_CREATED)
async def create_variant(variant: ProductVariantCreate, service: ProductVariantServiceDep, current_admin_user: AdminUserDep):
    logger.info(f"API create_variant by admin {current_admin_user.email}: sku={variant.sku}")
    try:
        return await service.create_variant(variant)
    except Exception as e:
        handle_variant_service_errors(e)

@router.put("/{variant_id}", response_model=ProductVariantWithAttributes)
async def update_variant(
    variant: ProductVariantUpdate,
    service: ProductVariantServiceDep,
    current_admin_user: AdminUserDep,
    variant_id: int = Path(..., ge=1),
):
    logger.info(f"API update_variant by admin {current_admin_user.email}: ID={variant_id}")
    try:
        return await service.update_variant(variant_id, variant)
    except Exception as e:
        handle_variant_service_errors(e)

@router.delete("/{variant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_variant(
    service: ProductVariantServiceDep,
    current_admin_user: AdminUserDep,
    variant_id: int = Path(..., ge=1),
):
    logger.info(f"API delete_variant by admin {current_admin_user.email}: ID={variant_id}")
    try:
        await service.delete_variant(variant_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_variant_service_errors(e)

# --- Attributs d'une variante --- #

@router.post("/{variant_id}/attributes", response_model=VariantAttributeRead, status_code=status.HTTP_201_CREATED)
async def add_variant_attribute(
    link: VariantAttributeLinkCreate,
    service: ProductVariantServiceDep,
    current_admin_user: AdminUserDep,
    variant_id: int = Path(..., ge=1),
):
    logger.info(f"API add_variant_attribute by admin {current_admin_user.email}: variant={variant_id}, value={link.attribute_value_id}")
    try:
        return await service.add_attribute(variant_id, link.attribute_value_id)
    except Exception as e:
        handle_variant_service_errors(e)

@router.delete("/{variant_id}/attributes/{attribute_value_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_variant_attribute(
    service: ProductVariantServiceDep,
    current_admin_user: AdminUserDep,
    variant_id: int = Path(..., ge=1),
    attribute_value_id: int = Path(..., ge=1),
):
    logger.info(f"API remove_variant_attribute by admin {current_admin_user.email}: variant={variant_id}, value={attribute_value_id}")
    try:
        await service.remove_attribute(variant_id, attribute_value_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_variant_service_errors(e)

variant_router = router
