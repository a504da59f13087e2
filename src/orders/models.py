from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from sqlmodel import SQLModel, Field

from src.core.dates import utc_now
from src.orders.config import ORDER_STATUS_PENDING, PAYMENT_STATUS_PENDING, DEFAULT_PAYMENT_METHOD

# --- Table Order ---

class OrderBase(SQLModel):
    """Base pour les champs de la table Order."""
    shipping_address: str = Field(max_length=500)
    status: str = Field(default=ORDER_STATUS_PENDING, max_length=20, index=True)
    payment_method: str = Field(default=DEFAULT_PAYMENT_METHOD, max_length=50)
    payment_status: str = Field(default=PAYMENT_STATUS_PENDING, max_length=20, index=True)
    payment_amount: Decimal = Field(default=Decimal("0"), decimal_places=2, max_digits=12)

class Order(OrderBase, table=True):
    """Modèle de table pour les commandes."""
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_id: int = Field(foreign_key="customers.id", index=True)
    order_date: datetime = Field(default_factory=utc_now, nullable=False, index=True)
    payment_date: Optional[datetime] = Field(default=None)

# --- Table OrderItem ---

class OrderItem(SQLModel, table=True):
    """Modèle de table pour les lignes de commande."""
    __tablename__ = "order_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    product_variant_id: int = Field(foreign_key="product_variants.id", index=True)
    quantity: int = Field(gt=0)
    # Prix figé au moment de la commande
    unit_price: Decimal = Field(ge=0, decimal_places=2, max_digits=12)
    note: Optional[str] = Field(default=None, max_length=500)

# --- Table OrderHistory ---

class OrderHistory(SQLModel, table=True):
    """Historique des changements de statut d'une commande."""
    __tablename__ = "order_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    manager_id: Optional[int] = Field(default=None, foreign_key="managers.id", index=True)
    processing_time: datetime = Field(default_factory=utc_now, nullable=False)
    previous_status: Optional[str] = Field(default=None, max_length=20)
    new_status: str = Field(max_length=20)
    note: Optional[str] = Field(default=None, max_length=500)

# --- Schémas API ---

class OrderItemCreate(SQLModel):
    """Le prix unitaire est repris de la variante par le service."""
    product_variant_id: int
    quantity: int = Field(..., gt=0)
    note: Optional[str] = None

class OrderCreate(SQLModel):
    customer_id: Optional[int] = None  # Obligatoire lorsque le personnel passe la commande
    shipping_address: Optional[str] = Field(default=None, max_length=500)  # Adresse du client par défaut
    payment_method: Optional[str] = None
    items: List[OrderItemCreate] = []

class OrderCancelRequest(SQLModel):
    reason: Optional[str] = Field(default=None, max_length=500)

class OrderStatusUpdate(SQLModel):
    new_status: str

class OrderListItem(OrderBase):
    id: int
    customer_id: int
    order_date: datetime
    payment_date: Optional[datetime] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None

class OrderItemRead(SQLModel):
    id: int
    product_variant_id: int
    quantity: int
    unit_price: Decimal
    note: Optional[str] = None
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    variant_sku: Optional[str] = None
    variant_price: Optional[Decimal] = None

class OrderHistoryRead(SQLModel):
    id: int
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None
    processing_time: datetime
    previous_status: Optional[str] = None
    new_status: str
    note: Optional[str] = None

class OrderDetail(OrderListItem):
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    items: List[OrderItemRead] = []
    history: List[OrderHistoryRead] = []
