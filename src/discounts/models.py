from typing import Literal, Optional
from datetime import datetime
from decimal import Decimal

from sqlmodel import SQLModel, Field

from src.discounts.config import DISCOUNT_STATUS_ACTIVE

DiscountType = Literal["Percentage", "FixedAmount"]
DiscountStatus = Literal["Active", "Inactive"]

# --- Modèle Discount SQLModel ---

class DiscountBase(SQLModel):
    code: str = Field(index=True, unique=True, max_length=50)
    name: str = Field(max_length=255)
    type: str = Field(max_length=20)
    value: Decimal = Field(decimal_places=2, max_digits=12)
    status: str = Field(default=DISCOUNT_STATUS_ACTIVE, max_length=20, index=True)
    start_date: Optional[datetime] = Field(default=None)
    end_date: Optional[datetime] = Field(default=None)

class Discount(DiscountBase, table=True):
    """Réduction rattachée à une variante de produit."""
    __tablename__ = "discounts"

    id: Optional[int] = Field(default=None, primary_key=True)
    product_variant_id: int = Field(foreign_key="product_variants.id", index=True)

# --- Schémas API ---

class DiscountCreate(SQLModel):
    product_variant_id: int
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    type: DiscountType
    value: Decimal
    status: DiscountStatus = DISCOUNT_STATUS_ACTIVE
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

class DiscountUpdate(SQLModel):
    product_variant_id: Optional[int] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[DiscountType] = None
    value: Optional[Decimal] = None
    status: Optional[DiscountStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

class DiscountRead(DiscountBase):
    id: int
    product_variant_id: int
    variant_sku: Optional[str] = None
    product_name: Optional[str] = None
    is_active_now: bool = False
