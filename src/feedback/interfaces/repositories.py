# src/feedback/interfaces/repositories.py
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.feedback.models import (
    Feedback, FeedbackResponse, FeedbackListItem, FeedbackDetail, FeedbackResponseRead
)


class AbstractFeedbackRepository(ABC):
    """Interface abstraite pour le repository des avis clients et de leurs réponses."""

    @abstractmethod
    async def get_by_id(self, feedback_id: int) -> Optional[Feedback]:
        pass

    @abstractmethod
    async def get_detail(self, feedback_id: int) -> Optional[FeedbackDetail]:
        pass

    @abstractmethod
    async def list(
        self,
        limit: int,
        offset: int,
        product_id: Optional[int] = None,
        customer_id: Optional[int] = None,
        rating: Optional[int] = None,
        has_response: Optional[bool] = None,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        descending: bool = True,
    ) -> Tuple[List[FeedbackListItem], int]:
        pass

    @abstractmethod
    async def get_response(self, response_id: int) -> Optional[FeedbackResponse]:
        pass

    @abstractmethod
    async def get_response_for_feedback(self, feedback_id: int) -> Optional[FeedbackResponse]:
        pass

    @abstractmethod
    async def get_response_read(self, response_id: int) -> Optional[FeedbackResponseRead]:
        """Réponse avec le nom du manager auteur."""
        pass

    @abstractmethod
    async def create_response(self, feedback_id: int, manager_id: int, content: str) -> FeedbackResponse:
        pass

    @abstractmethod
    async def update_response(self, response_id: int, content: str) -> FeedbackResponse:
        pass

    @abstractmethod
    async def delete_response(self, response_id: int) -> None:
        pass

    @abstractmethod
    async def delete(self, feedback_id: int) -> None:
        """Supprime l'avis et ses réponses."""
        pass
