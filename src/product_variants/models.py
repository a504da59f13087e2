from typing import Optional, List
from decimal import Decimal
from datetime import datetime

from sqlmodel import SQLModel, Field

from src.core.dates import utc_now

# --- Modèle de Lien ProductVariant <-> AttributeValue ---
class VariantAttributeValue(SQLModel, table=True):
    """Une variante porte au plus une valeur par attribut."""
    __tablename__ = "variant_attribute_values"

    product_variant_id: int = Field(foreign_key="product_variants.id", primary_key=True)
    attribute_value_id: int = Field(foreign_key="attribute_values.id", primary_key=True)
    attribute_id: int = Field(foreign_key="attributes.id", index=True)

# --- Fin Modèle de Lien ---


# --- Modèle ProductVariant SQLModel ---

class ProductVariantBase(SQLModel):
    sku: str = Field(index=True, unique=True, max_length=100)
    price: Decimal = Field(ge=0, decimal_places=2, max_digits=12)
    original_price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2, max_digits=12)
    stock_quantity: int = Field(default=0, ge=0)

class ProductVariant(ProductVariantBase, table=True):
    __tablename__ = "product_variants"

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    sold_quantity: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: Optional[datetime] = Field(default=None, sa_column_kwargs={"onupdate": utc_now})

# Schémas API pour ProductVariant
class ProductVariantCreate(ProductVariantBase):
    product_id: int
    sku: str = Field(min_length=1, max_length=100)
    attributes: List[int] = []  # IDs des valeurs d'attribut

class ProductVariantUpdate(SQLModel):
    sku: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(default=None, ge=0)
    original_price: Optional[Decimal] = Field(default=None, ge=0)
    stock_quantity: Optional[int] = Field(default=None, ge=0)

class VariantAttributeRead(SQLModel):
    attribute_value_id: int
    attribute_id: int
    attribute_name: str
    value: str

class ProductVariantRead(ProductVariantBase):
    id: int
    product_id: int
    sold_quantity: int
    created_at: datetime
    updated_at: Optional[datetime] = None

class ProductVariantWithAttributes(ProductVariantRead):
    attributes: List[VariantAttributeRead] = []

class ProductVariantListItem(ProductVariantWithAttributes):
    """Variante accompagnée des informations de son produit."""
    product_name: Optional[str] = None
    product_description: Optional[str] = None
    product_image_url: Optional[str] = None
    product_brand: Optional[str] = None
    product_specification: Optional[str] = None

class VariantSearchResult(SQLModel):
    id: int
    sku: str
    product_name: str

class VariantAttributeLinkCreate(SQLModel):
    attribute_value_id: int

# --- Fin Modèle ProductVariant SQLModel ---
