from typing import Optional
from datetime import datetime

from sqlmodel import SQLModel, Field

from src.core.dates import utc_now

# --- Tables ---

class Feedback(SQLModel, table=True):
    """Avis laissé par un client sur un produit (et éventuellement une variante)."""
    __tablename__ = "feedbacks"

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    product_variant_id: Optional[int] = Field(default=None, foreign_key="product_variants.id", index=True)
    customer_id: int = Field(foreign_key="customers.id", index=True)
    rating: int = Field(ge=1, le=5, index=True)
    comment: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, nullable=False, index=True)

class FeedbackResponse(SQLModel, table=True):
    """Réponse d'un manager à un avis. Un avis a au plus une réponse."""
    __tablename__ = "feedback_responses"

    id: Optional[int] = Field(default=None, primary_key=True)
    feedback_id: int = Field(foreign_key="feedbacks.id", unique=True, index=True)
    manager_id: int = Field(foreign_key="managers.id", index=True)
    content: str
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: Optional[datetime] = Field(default=None, sa_column_kwargs={"onupdate": utc_now})

# --- Schémas API ---

class FeedbackResponseCreate(SQLModel):
    content: str = Field(max_length=2000)

class FeedbackResponseUpdate(SQLModel):
    content: str = Field(max_length=2000)

class FeedbackResponseRead(SQLModel):
    id: int
    feedback_id: int
    manager_id: int
    manager_name: Optional[str] = None
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None

class FeedbackListItem(SQLModel):
    id: int
    product_id: int
    product_variant_id: Optional[int] = None
    customer_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    product_name: Optional[str] = None
    customer_name: Optional[str] = None
    response: Optional[FeedbackResponseRead] = None

class FeedbackDetail(FeedbackListItem):
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    variant_sku: Optional[str] = None
