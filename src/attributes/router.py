import logging

from fastapi import APIRouter, HTTPException, Path, Response, status

from .dependencies import AttributeServiceDep
from .models import (
    AttributeCreate, AttributeUpdate, AttributeRead, AttributeReadWithValues,
    AttributeValueCreate, AttributeValueRead
)
from .exceptions import (
    AttributeNotFoundException,
    DuplicateAttributeNameException,
    AttributeInUseException,
    AttributeValueNotFoundException,
    DuplicateAttributeValueException,
    AttributeValueInUseException
)
from src.auth.dependencies import AdminUserDep
from src.core.exceptions import InvalidSortFieldException
from src.core.pagination import PageParamsDep, PaginatedResponse, set_content_range

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_attribute_service_errors(e: Exception):
    if isinstance(e, (AttributeNotFoundException, AttributeValueNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, (DuplicateAttributeNameException, DuplicateAttributeValueException)):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, (AttributeInUseException, AttributeValueInUseException, InvalidSortFieldException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Attribute API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing attribute request.")

# --- Attributs --- #

@router.get("/", response_model=PaginatedResponse[AttributeRead])
async def read_attributes(service: AttributeServiceDep, response: Response, params: PageParamsDep):
    logger.info(f"API read_attributes: page={params.page}, search={params.search}")
    try:
        result = await service.list_attributes(params=params)
    except Exception as e:
        handle_attribute_service_errors(e)
    set_content_range(response, "attributes", params.offset, len(result.items), result.total)
    return result

@router.get("/{attribute_id}", response_model=AttributeReadWithValues)
async def read_attribute(service: AttributeServiceDep, attribute_id: int = Path(..., ge=1)):
    """Récupère un attribut avec ses valeurs."""
    try:
        return await service.get_attribute(attribute_id)
    except Exception as e:
        handle_attribute_service_errors(e)

@router.post("/", response_model=AttributeReadWithValues, status_code=status.HTTP_201_CREATED)
async def create_attribute(attribute: AttributeCreate, service: AttributeServiceDep, current_admin_user: AdminUserDep):
    logger.info(f"API create_attribute by admin {current_admin_user.email}: name={attribute.name}")
    try:
        return await service.create_attribute(attribute)
    except Exception as e:
        handle_attribute_service_errors(e)

@router.put("/{attribute_id}", response_model=AttributeReadWithValues)
async def update_attribute(
    attribute: AttributeUpdate,
    service: AttributeServiceDep,
    current_admin_user: AdminUserDep,
    attribute_id: int = Path(..., ge=1),
):
    logger.info(f"API update_attribute by admin {current_admin_user.email}: ID={attribute_id}")
    try:
        return await service.update_attribute(attribute_id, attribute)
    except Exception as e:
        handle_attribute_service_errors(e)

@router.delete("/{attribute_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attribute(
    service: AttributeServiceDep,
    current_admin_user: AdminUserDep,
    attribute_id: int = Path(..., ge=1),
):
    logger.info(f"API delete_attribute by admin {current_admin_user.email}: ID={attribute_id}")
    try:
        await service.delete_attribute(attribute_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_attribute_service_errors(e)

# --- Valeurs d'attribut --- #

@router.post("/{attribute_id}/values", response_model=AttributeValueRead, status_code=status.HTTP_201_CREATED)
async def add_attribute_value(
    value: AttributeValueCreate,
    service: AttributeServiceDep,
    current_admin_user: AdminUserDep,
    attribute_id: int = Path(..., ge=1),
):
    logger.info(f"API add_attribute_value by admin {current_admin_user.email}: attribute={attribute_id}")
    try:
        return await service.add_value(attribute_id, value)
    except Exception as e:
        handle_attribute_service_errors(e)

@router.delete("/{attribute_id}/values/{value_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attribute_value(
    service: AttributeServiceDep,
    current_admin_user: AdminUserDep,
    attribute_id: int = Path(..., ge=1),
    value_id: int = Path(..., ge=1),
):
    logger.info(f"API delete_attribute_value by admin {current_admin_user.email}: attribute={attribute_id}, value={value_id}")
    try:
        await service.delete_value(attribute_id, value_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_attribute_service_errors(e)

attribute_router = router
