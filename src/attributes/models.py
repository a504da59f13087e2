from typing import List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

# --- Modèles de base ---

class AttributeBase(SQLModel):
    """Attribut de variante (ex: Couleur, Taille)."""
    name: str = Field(index=True, unique=True, max_length=100)

class AttributeValueBase(SQLModel):
    value: str = Field(max_length=100)

# --- Tables ---

class Attribute(AttributeBase, table=True):
    __tablename__ = "attributes"

    id: Optional[int] = Field(default=None, primary_key=True)

class AttributeValue(AttributeValueBase, table=True):
    """Valeur possible d'un attribut (ex: Rouge pour Couleur)."""
    __tablename__ = "attribute_values"
    __table_args__ = (UniqueConstraint("attribute_id", "value", name="uq_attribute_values_attribute_value"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    attribute_id: int = Field(foreign_key="attributes.id", index=True)

# --- Schémas API ---

class AttributeCreate(AttributeBase):
    name: str = Field(min_length=1, max_length=100)

class AttributeUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)

class AttributeRead(AttributeBase):
    id: int

class AttributeValueCreate(SQLModel):
    value: str = Field(min_length=1, max_length=100)

class AttributeValueRead(AttributeValueBase):
    id: int
    attribute_id: int

class AttributeReadWithValues(AttributeRead):
    values: List[AttributeValueRead] = []
