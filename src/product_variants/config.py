"""Configuration locale du module product_variants."""

# Nombre de résultats par défaut / maximum pour la recherche rapide (sélecteurs)
SEARCH_DEFAULT_LIMIT = 10
SEARCH_MAX_LIMIT = 50
