# src/feedback/repositories.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func, delete, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from src.feedback.exceptions import FeedbackAlreadyAnsweredException
from src.feedback.interfaces.repositories import AbstractFeedbackRepository
from src.feedback.models import (
    Feedback, FeedbackResponse, FeedbackListItem, FeedbackDetail, FeedbackResponseRead
)
from src.product_variants.models import ProductVariant
from src.products.models import Product
from src.users.models import Account, Customer, Manager

logger = logging.getLogger(__name__)

CustomerAccount = aliased(Account, name="customer_account")
ManagerAccount = aliased(Account, name="manager_account")


class SQLAlchemyFeedbackRepository(AbstractFeedbackRepository):
    """Implémentation SQLAlchemy du repository des avis."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    @staticmethod
    def _joined_select(*columns):
        return (
            select(*columns)
            .select_from(Feedback)
            .outerjoin(Product, Product.id == Feedback.product_id)
            .outerjoin(Customer, Customer.id == Feedback.customer_id)
            .outerjoin(CustomerAccount, CustomerAccount.id == Customer.account_id)
            .outerjoin(FeedbackResponse, FeedbackResponse.feedback_id == Feedback.id)
            .outerjoin(Manager, Manager.id == FeedbackResponse.manager_id)
            .outerjoin(ManagerAccount, ManagerAccount.id == Manager.account_id)
        )

    @staticmethod
    def _response_read(response: Optional[FeedbackResponse], manager_name: Optional[str]) -> Optional[FeedbackResponseRead]:
        if response is None:
            return None
        return FeedbackResponseRead(**response.model_dump(), manager_name=manager_name)

    async def get_by_id(self, feedback_id: int) -> Optional[Feedback]:
        return await self.db.get(Feedback, feedback_id)

    async def get_detail(self, feedback_id: int) -> Optional[FeedbackDetail]:
        stmt = (
            self._joined_select(
                Feedback, Product.name, CustomerAccount.full_name, CustomerAccount.email,
                Customer.phone_number, ProductVariant.sku, FeedbackResponse, ManagerAccount.full_name,
            )
            .outerjoin(ProductVariant, ProductVariant.id == Feedback.product_variant_id)
            .where(Feedback.id == feedback_id)
        )
        row = (await self.db.execute(stmt)).first()
        if row is None:
            logger.debug(f"[FeedbackRepository] Feedback ID {feedback_id} not found.")
            return None
        feedback, product_name, customer_name, customer_email, customer_phone, sku, response, manager_name = row
        return FeedbackDetail(
            **feedback.model_dump(),
            product_name=product_name,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            variant_sku=sku,
            response=self._response_read(response, manager_name),
        )

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
        logger.debug(f"[FeedbackRepository] Listing feedback: limit={limit}, offset={offset}, search={search}")
        conditions = []
        if product_id is not None:
            conditions.append(Feedback.product_id == product_id)
        if customer_id is not None:
            conditions.append(Feedback.customer_id == customer_id)
        if rating is not None:
            conditions.append(Feedback.rating == rating)
        if has_response is True:
            conditions.append(FeedbackResponse.id.is_not(None))
        elif has_response is False:
            conditions.append(FeedbackResponse.id.is_(None))
        if search:
            conditions.append(or_(
                Product.name.ilike(search),
                CustomerAccount.full_name.ilike(search),
                Feedback.comment.ilike(search),
            ))

        sort_columns = {
            "created_at": Feedback.created_at,
            "rating": Feedback.rating,
            "product_name": Product.name,
            "customer_name": CustomerAccount.full_name,
        }
        sort_column = sort_columns[sort_by]
        order = sort_column.desc() if descending else sort_column.asc()

        stmt = (
            self._joined_select(Feedback, Product.name, CustomerAccount.full_name, FeedbackResponse, ManagerAccount.full_name)
            .where(*conditions)
            .order_by(order, Feedback.id.desc())
            .limit(limit)
            .offset(offset)
        )
        rows = (await self.db.execute(stmt)).all()
        items = [
            FeedbackListItem(
                **feedback.model_dump(),
                product_name=product_name,
                customer_name=customer_name,
                response=self._response_read(response, manager_name),
            )
            for feedback, product_name, customer_name, response, manager_name in rows
        ]
        count_stmt = self._joined_select(func.count(Feedback.id)).where(*conditions)
        total_count = (await self.db.execute(count_stmt)).scalar_one() or 0
        return items, total_count

    async def get_response(self, response_id: int) -> Optional[FeedbackResponse]:
        return await self.db.get(FeedbackResponse, response_id)

    async def get_response_for_feedback(self, feedback_id: int) -> Optional[FeedbackResponse]:
        result = await self.db.execute(select(FeedbackResponse).where(FeedbackResponse.feedback_id == feedback_id))
        return result.scalar_one_or_none()

    async def get_response_read(self, response_id: int) -> Optional[FeedbackResponseRead]:
        stmt = (
            select(FeedbackResponse, ManagerAccount.full_name)
            .outerjoin(Manager, Manager.id == FeedbackResponse.manager_id)
            .outerjoin(ManagerAccount, ManagerAccount.id == Manager.account_id)
            .where(FeedbackResponse.id == response_id)
        )
        row = (await self.db.execute(stmt)).first()
        if row is None:
            return None
        return self._response_read(*row)

    async def create_response(self, feedback_id: int, manager_id: int, content: str) -> FeedbackResponse:
        response = FeedbackResponse(feedback_id=feedback_id, manager_id=manager_id, content=content)
        self.db.add(response)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"[FeedbackRepository] Integrity error answering feedback {feedback_id}: {e}", exc_info=True)
            raise FeedbackAlreadyAnsweredException(feedback_id)
        await self.db.refresh(response)
        logger.info(f"[FeedbackRepository] Response ID {response.id} created for feedback {feedback_id}.")
        return response

    async def update_response(self, response_id: int, content: str) -> FeedbackResponse:
        response = await self.get_response(response_id)
        response.content = content
        await self.db.commit()
        await self.db.refresh(response)
        return response

    async def delete_response(self, response_id: int) -> None:
        await self.db.execute(delete(FeedbackResponse).where(FeedbackResponse.id == response_id))
        await self.db.commit()
        logger.info(f"[FeedbackRepository] Response ID {response_id} deleted.")

    async def delete(self, feedback_id: int) -> None:
        await self.db.execute(delete(FeedbackResponse).where(FeedbackResponse.feedback_id == feedback_id))
        await self.db.execute(delete(Feedback).where(Feedback.id == feedback_id))
        await self.db.commit()
        logger.info(f"[FeedbackRepository] Feedback ID {feedback_id} deleted with its responses.")
