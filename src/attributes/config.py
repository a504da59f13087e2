"""Configuration locale du module attributes."""

ATTRIBUTE_SORT_FIELDS = ["id", "name"]
ATTRIBUTE_DEFAULT_SORT = "id"
