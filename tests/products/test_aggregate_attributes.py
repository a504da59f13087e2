"""Tests unitaires de l'agrégation des attributs d'un produit."""
from datetime import datetime
from decimal import Decimal

from src.product_variants.models import ProductVariantWithAttributes, VariantAttributeRead
from src.products.service import aggregate_attributes


def make_variant(variant_id: int, *links) -> ProductVariantWithAttributes:
    return ProductVariantWithAttributes(
        id=variant_id,
        product_id=1,
        sku=f"SKU-{variant_id}",
        price=Decimal("10"),
        sold_quantity=0,
        created_at=datetime(2024, 1, 1),
        attributes=[
            VariantAttributeRead(attribute_value_id=value_id, attribute_id=attribute_id, attribute_name=name, value=value)
            for value_id, attribute_id, name, value in links
        ],
    )


def test_aggregate_attributes_groups_and_sorts():
    variants = [
        make_variant(1, (1, 10, "Taille", "M"), (3, 20, "Couleur", "Rouge")),
        make_variant(2, (2, 10, "Taille", "L"), (4, 20, "Couleur", "Bleu")),
        make_variant(3, (1, 10, "Taille", "M"), (4, 20, "Couleur", "Bleu")),
    ]
    attributes = aggregate_attributes(variants)

    assert [a.name for a in attributes] == ["Couleur", "Taille"]
    assert [v.value for v in attributes[0].values] == ["Bleu", "Rouge"]
    assert [v.value for v in attributes[1].values] == ["L", "M"]

def test_aggregate_attributes_without_variants():
    assert aggregate_attributes([]) == []
