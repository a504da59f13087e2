"""Configuration locale du module categories."""

# Tri autorisé pour la liste paginée
CATEGORY_SORT_FIELDS = ["id", "name"]
CATEGORY_DEFAULT_SORT = "id"
