from typing import Optional

from sqlmodel import SQLModel, Field


class CategoryBase(SQLModel):
    name: str = Field(index=True, unique=True, max_length=100)
    description: Optional[str] = Field(default=None)

class Category(CategoryBase, table=True):
    """Catégorie de produits (liste plate, sans hiérarchie)."""
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)

# --- Schémas API ---

class CategoryCreate(CategoryBase):
    name: str = Field(min_length=1, max_length=100)

class CategoryRead(CategoryBase):
    id: int

class CategoryUpdate(SQLModel):
    # Mise à jour partielle: seuls les champs envoyés sont modifiés
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
