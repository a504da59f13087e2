"""Configuration locale du module products."""

PRODUCT_SORT_FIELDS = ["id", "name", "category_name", "brand", "total_sold_quantity"]
PRODUCT_DEFAULT_SORT = "id"
