import logging
from typing import Optional

from src.auth.models import AuthenticatedAccount
from src.core.pagination import PageParams, PaginatedResponse, resolve_sort_field
from .config import FEEDBACK_SORT_FIELDS, FEEDBACK_DEFAULT_SORT
from .interfaces.repositories import AbstractFeedbackRepository
from .models import FeedbackListItem, FeedbackDetail, FeedbackResponse, FeedbackResponseRead
from .exceptions import (
    FeedbackNotFoundException,
    FeedbackResponseNotFoundException,
    ManagerProfileNotFoundException,
    FeedbackAlreadyAnsweredException,
    InvalidFeedbackResponseException,
    FeedbackResponseForbiddenException,
)

logger = logging.getLogger(__name__)


class FeedbackService:
    """Modération des avis clients et réponses du personnel."""

    def __init__(self, repository: AbstractFeedbackRepository):
        self.repository = repository

    @staticmethod
    def _clean_content(content: str) -> str:
        content = (content or "").strip()
        if not content:
            raise InvalidFeedbackResponseException()
        return content

    async def _get_authored_response(self, response_id: int, current_user: AuthenticatedAccount) -> FeedbackResponse:
        response = await self.repository.get_response(response_id)
        if not response:
            raise FeedbackResponseNotFoundException(response_id)
        if current_user.manager_id is None or response.manager_id != current_user.manager_id:
            logger.warning(f"[FeedbackService] Account {current_user.id} is not the author of response {response_id}.")
            raise FeedbackResponseForbiddenException(response_id)
        return response

    async def list_feedback(
        self,
        params: PageParams,
        product_id: Optional[int] = None,
        customer_id: Optional[int] = None,
        rating: Optional[int] = None,
        has_response: Optional[bool] = None,
    ) -> PaginatedResponse[FeedbackListItem]:
        sort_by = resolve_sort_field(params.sort_by, FEEDBACK_SORT_FIELDS, FEEDBACK_DEFAULT_SORT)
        logger.debug(f"[FeedbackService] List feedback: page={params.page}, product={product_id}, rating={rating}")
        items, total = await self.repository.list(
            limit=params.limit,
            offset=params.offset,
            product_id=product_id,
            customer_id=customer_id,
            rating=rating,
            has_response=has_response,
            search=params.search_pattern,
            sort_by=sort_by,
            descending=params.descending,
        )
        return PaginatedResponse[FeedbackListItem](items=items, total=total, page=params.page, page_size=params.page_size)

    async def get_feedback(self, feedback_id: int) -> FeedbackDetail:
        feedback = await self.repository.get_detail(feedback_id)
        if not feedback:
            raise FeedbackNotFoundException(feedback_id)
        return feedback

    async def add_response(self, feedback_id: int, content: str, current_user: AuthenticatedAccount) -> FeedbackResponseRead:
        logger.info(f"[FeedbackService] Answer feedback {feedback_id} by account {current_user.id}")
        content = self._clean_content(content)
        if current_user.manager_id is None:
            raise ManagerProfileNotFoundException(current_user.id)
        if not await self.repository.get_by_id(feedback_id):
            raise FeedbackNotFoundException(feedback_id)
        if await self.repository.get_response_for_feedback(feedback_id):
            raise FeedbackAlreadyAnsweredException(feedback_id)
        response = await self.repository.create_response(feedback_id, current_user.manager_id, content)
        return await self.repository.get_response_read(response.id)

    async def update_response(self, response_id: int, content: str, current_user: AuthenticatedAccount) -> FeedbackResponseRead:
        logger.info(f"[FeedbackService] Update response {response_id} by account {current_user.id}")
        content = self._clean_content(content)
        await self._get_authored_response(response_id, current_user)
        await self.repository.update_response(response_id, content)
        return await self.repository.get_response_read(response_id)

    async def delete_response(self, response_id: int, current_user: AuthenticatedAccount) -> None:
        logger.info(f"[FeedbackService] Delete response {response_id} by account {current_user.id}")
        await self._get_authored_response(response_id, current_user)
        await self.repository.delete_response(response_id)

    async def delete_feedback(self, feedback_id: int) -> None:
        logger.info(f"[FeedbackService] Delete feedback {feedback_id}")
        if not await self.repository.get_by_id(feedback_id):
            raise FeedbackNotFoundException(feedback_id)
        await self.repository.delete(feedback_id)
