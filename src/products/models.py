from typing import Optional, List
from datetime import datetime

from sqlmodel import SQLModel, Field

from src.core.dates import utc_now
from src.product_variants.models import ProductVariantWithAttributes

# --- Modèle Product SQLModel ---

class ProductBase(SQLModel):
    name: str = Field(index=True, max_length=255)
    description: Optional[str] = Field(default=None)
    specification: Optional[str] = Field(default=None)
    image_url: Optional[str] = Field(default=None, max_length=500)
    brand: Optional[str] = Field(default=None, index=True, max_length=100)

class Product(ProductBase, table=True):
    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    category_id: int = Field(foreign_key="categories.id", index=True)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: Optional[datetime] = Field(default=None, sa_column_kwargs={"onupdate": utc_now})

# Schémas API pour Product
class ProductCreate(ProductBase):
    name: str = Field(min_length=1, max_length=255)
    category_id: int

class ProductUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category_id: Optional[int] = None
    description: Optional[str] = None
    specification: Optional[str] = None
    image_url: Optional[str] = None
    brand: Optional[str] = None

class ProductRead(ProductBase):
    id: int
    category_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

class ProductListItem(ProductRead):
    """Ligne de la liste produits, avec le nom de catégorie et les ventes cumulées des variantes."""
    category_name: Optional[str] = None
    total_sold_quantity: int = 0

class ProductAttributeValue(SQLModel):
    id: int
    value: str

class ProductAttribute(SQLModel):
    """Attribut agrégé sur l'ensemble des variantes d'un produit."""
    id: int
    name: str
    values: List[ProductAttributeValue] = []

class ProductDetail(ProductRead):
    category_name: Optional[str] = None
    variants: List[ProductVariantWithAttributes] = []
    attributes: List[ProductAttribute] = []

# --- Fin Modèle Product SQLModel ---
