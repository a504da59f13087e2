import logging
from typing import List

from fastapi import APIRouter, Path, Body, Response, HTTPException, status

from .dependencies import CategoryServiceDep
from .models import CategoryRead, CategoryCreate, CategoryUpdate
from .exceptions import (
    CategoryNotFoundException,
    DuplicateCategoryNameException,
    CategoryInUseException,
)

from src.auth.dependencies import AdminUserDep
from src.core.exceptions import InvalidSortFieldException
from src.core.pagination import PageParamsDep, PaginatedResponse, set_content_range

logger = logging.getLogger(__name__)

# --- Router Definition ---
router = APIRouter()

# --- Error Handling Helper ---
def handle_category_service_errors(e: Exception):
    if isinstance(e, CategoryNotFoundException):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, DuplicateCategoryNameException):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, (CategoryInUseException, InvalidSortFieldException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Category API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing category request.")

# --- Category Endpoints --- #

@router.get("/", response_model=PaginatedResponse[CategoryRead])
async def read_categories(service: CategoryServiceDep, response: Response, params: PageParamsDep):
    """Récupère une liste paginée de catégories."""
    logger.info(f"API read_categories: page={params.page}, page_size={params.page_size}")
    try:
        paginated_result = await service.list_categories(params=params)
    except Exception as e:
        handle_category_service_errors(e)
    set_content_range(response, "categories", params.offset, len(paginated_result.items), paginated_result.total)
    return paginated_result

@router.get("/all", response_model=List[CategoryRead])
async def read_all_categories(service: CategoryServiceDep):
    """Toutes les catégories, triées par nom (listes déroulantes)."""
    return await service.list_all_categories()

@router.post("/", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_new_category(
    category: CategoryCreate,
    service: CategoryServiceDep,
    current_admin_user: AdminUserDep
):
    """Crée une nouvelle catégorie (Admin requis)."""
    logger.info(f"API create_category by admin {current_admin_user.email}: name={category.name}")
    try:
        return await service.create_category(category_data=category)
    except Exception as e:
        handle_category_service_errors(e)

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(
    service: CategoryServiceDep,
    category_id: int = Path(..., ge=1)
):
    """Récupère une catégorie par son ID."""
    logger.info(f"API read_category: ID={category_id}")
    try:
        return await service.get_category(category_id=category_id)
    except Exception as e:
        handle_category_service_errors(e)

@router.put("/{category_id}", response_model=CategoryRead)
async def update_existing_category(
    service: CategoryServiceDep,
    current_admin_user: AdminUserDep,
    category_id: int = Path(..., ge=1),
    category: CategoryUpdate = Body(...)
):
    """Met à jour une catégorie existante (Admin requis)."""
    logger.info(f"API update_category by admin {current_admin_user.email}: ID={category_id}")
    try:
        return await service.update_category(category_id=category_id, category_data=category)
    except Exception as e:
        handle_category_service_errors(e)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_existing_category(
    service: CategoryServiceDep,
    current_admin_user: AdminUserDep,
    category_id: int = Path(..., ge=1)
):
    """Supprime une catégorie existante (Admin requis)."""
    logger.info(f"API delete_category by admin {current_admin_user.email}: ID={category_id}")
    try:
        await service.delete_category(category_id=category_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_category_service_errors(e)

category_router = router
