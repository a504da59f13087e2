import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status, Query, Path, Response

from src.auth.dependencies import StaffUserDep
from src.core.exceptions import InvalidSortFieldException
from src.core.pagination import PageParamsDep, PaginatedResponse, set_content_range
from .config import MIN_RATING, MAX_RATING
from .dependencies import FeedbackServiceDep
from .models import (
    FeedbackListItem, FeedbackDetail, FeedbackResponseCreate, FeedbackResponseUpdate, FeedbackResponseRead
)
from .exceptions import (
    FeedbackNotFoundException,
    FeedbackResponseNotFoundException,
    ManagerProfileNotFoundException,
    FeedbackAlreadyAnsweredException,
    InvalidFeedbackResponseException,
    FeedbackResponseForbiddenException,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_feedback_service_errors(e: Exception):
    if isinstance(e, (FeedbackNotFoundException, FeedbackResponseNotFoundException, ManagerProfileNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, FeedbackAlreadyAnsweredException):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, FeedbackResponseForbiddenException):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    elif isinstance(e, (InvalidFeedbackResponseException, InvalidSortFieldException)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Feedback API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error processing feedback request.")


@router.get("/", response_model=PaginatedResponse[FeedbackListItem])
async def read_feedback_list(
    response: Response,
    service: FeedbackServiceDep,
    current_user: StaffUserDep,
    params: PageParamsDep,
    product_id: Optional[int] = Query(None, ge=1),
    customer_id: Optional[int] = Query(None, ge=1),
    rating: Optional[int] = Query(None, ge=MIN_RATING, le=MAX_RATING),
    has_response: Optional[bool] = Query(None),
):
    logger.info(f"API read_feedback_list by {current_user.email}: page={params.page}, search={params.search}")
    try:
        result = await service.list_feedback(
            params, product_id=product_id, customer_id=customer_id, rating=rating, has_response=has_response
        )
    except Exception as e:
        handle_feedback_service_errors(e)
    set_content_range(response, "feedback", params.offset, len(result.items), result.total)
    return result

# Déclarées avant /{feedback_id} pour ne pas être captées par ce chemin
@router.put("/responses/{response_id}", response_model=FeedbackResponseRead)
async def update_feedback_response(
    response_in: FeedbackResponseUpdate,
    service: FeedbackServiceDep,
    current_user: StaffUserDep,
    response_id: int = Path(..., ge=1),
):
    try:
        return await service.update_response(response_id, response_in.content, current_user)
    except Exception as e:
        handle_feedback_service_errors(e)

@router.delete("/responses/{response_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feedback_response(service: FeedbackServiceDep, current_user: StaffUserDep, response_id: int = Path(..., ge=1)):
    try:
        await service.delete_response(response_id, current_user)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_feedback_service_errors(e)

@router.get("/{feedback_id}", response_model=FeedbackDetail)
async def read_feedback(service: FeedbackServiceDep, current_user: StaffUserDep, feedback_id: int = Path(..., ge=1)):
    try:
        return await service.get_feedback(feedback_id)
    except Exception as e:
        handle_feedback_service_errors(e)

@router.post("/{feedback_id}/responses", response_model=FeedbackResponseRead, status_code=status.HTTP_201_CREATED)
async def create_feedback_response(
    response_in: FeedbackResponseCreate,
    service: FeedbackServiceDep,
    current_user: StaffUserDep,
    feedback_id: int = Path(..., ge=1),
):
    logger.info(f"API create_feedback_response by {current_user.email}: feedback={feedback_id}")
    try:
        return await service.add_response(feedback_id, response_in.content, current_user)
    except Exception as e:
        handle_feedback_service_errors(e)

@router.delete("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feedback(service: FeedbackServiceDep, current_user: StaffUserDep, feedback_id: int = Path(..., ge=1)):
    logger.info(f"API delete_feedback by {current_user.email}: ID={feedback_id}")
    try:
        await service.delete_feedback(feedback_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        handle_feedback_service_errors(e)

feedback_router = router
