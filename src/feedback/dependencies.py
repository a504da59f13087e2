import logging
from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.feedback.service import FeedbackService
from src.feedback.interfaces.repositories import AbstractFeedbackRepository
from src.feedback.repositories import SQLAlchemyFeedbackRepository

logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]

def get_feedback_repository(session: SessionDep) -> AbstractFeedbackRepository:
    logger.debug("Providing SQLAlchemyFeedbackRepository")
    return SQLAlchemyFeedbackRepository(db_session=session)

FeedbackRepositoryDep = Annotated[AbstractFeedbackRepository, Depends(get_feedback_repository)]

def get_feedback_service(repository: FeedbackRepositoryDep) -> FeedbackService:
    """Fournit une instance du service des avis."""
    logger.debug("Providing FeedbackService with injected repository")
    return FeedbackService(repository=repository)

FeedbackServiceDep = Annotated[FeedbackService, Depends(get_feedback_service)]
