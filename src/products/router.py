import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, status, Query, Path, Body, Response

from .dependencies import ProductServiceDep
from .models import ProductCreate, ProductUpdate, ProductListItem, ProductDetail
from .exceptions import ProductNotFoundException, ProductInUseException

from src.auth.dependencies import AdminUserDep
from src.categories.exceptions import CategoryNotFoundException
from src.core.exceptions import InvalidSortFieldException
from src.core.pagination import PageParamsDep, PaginatedResponse, parse_csv, parse_csv_ints, set_content_range

logger = logging.getLogger(__name__)

# --- Router Definition ---
router = APIRouter()

# --- Helper Function for Error Handling ---
def handle_product_service_errors(e: Exception):
    if isinstance(e, (ProductNotFoundException, CategoryNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, (ProductInUseException, InvalidSortFieldException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Product API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An internal server error occurred.")


# --- Product Endpoints ---

@router.get("/", response_model=PaginatedResponse[ProductListItem], summary="Lister les produits")
async def list_products(
    response: Response,
    service: ProductServiceDep,
    params: PageParamsDep,
    category_id: Optional[str] = Query(None, description="IDs de catégorie séparés par des virgules"),
    brand: Optional[str] = Query(None, description="Marques séparées par des virgules"),
):
    logger.info(f"API list_products: page={params.page}, category={category_id}, brand={brand}, search={params.search}")
    try:
        result = await service.list_products(
            params=params,
            category_ids=parse_csv_ints(category_id),
            brands=parse_csv(brand),
        )
    except Exception as e:
        handle_product_service_errors(e)
    set_content_range(response, "products", params.offset, len(result.items), result.total)
    return result

@router.get("/brands", response_model=List[str], summary="Lister les marques")
async def list_brands(service: ProductServiceDep):
    return await service.list_brands()

@router.get("/category/{category_id}", response_model=List[ProductListItem], summary="Produits d'une catégorie")
async def list_products_by_category(service: ProductServiceDep, category_id: int = Path(..., ge=1)):
    try:
        return await service.list_products_by_category(category_id)
    except Exception as e:
        handle_product_service_errors(e)

@router.get("/{product_id}", response_model=ProductDetail, summary="Récupérer un produit par ID")
async def get_product(service: ProductServiceDep, product_id: int = Path(..., ge=1)):
    logger.info(f"API get_product: ID={product_id}")
    try:
        return await service.get_product(product_id)
    except Exception as e:
        handle_product_service_errors(e)

@router.post("/",
             response_model=ProductDetail,
             status_code=status.HTTP_201_CREATED,
             summary="Créer un nouveau produit (Admin requis)")
async def create_product(service: ProductServiceDep, current_admin_user: AdminUserDep, product_in: ProductCreate):
    logger.info(f"API create_product by admin {current_admin_user.email}: name={product_in.name}")
    try:
        return await service.create_product(product_in)
    except Exception as e:
        handle_product_service_errors(e)

@router.put("/{product_id}", response_model=ProductDetail, summary="Mettre à jour un produit (Admin requis)")
async def update_product(
    service: ProductServiceDep,
    current_admin_user: AdminUserDep,
    product_id: int = Path(..., ge=1),
    product_in: ProductUpdate = Body(...)
):
    logger.info(f"API update_product by admin {current_admin_user.email}: ID={product_id}")
    try:
        return await service.update_product(product_id, product_in)
    except Exception as e:
        handle_product_service_errors(e)

@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Supprimer un produit (Admin requis)")
async def delete_product(
    service: ProductServiceDep,
    current_admin_user: AdminUserDep,
    product_id: int = Path(..., ge=1)
):
    logger.info(f"API delete_product by admin {current_admin_user.email}: ID={product_id}")
    try:
        await service.delete_product(product_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_product_service_errors(e)

product_router = router
