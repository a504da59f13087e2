"""Exceptions personnalisées pour le module categories."""

from .constants import ERROR_CATEGORY_NOT_FOUND, ERROR_CATEGORY_IN_USE

class CategoryNotFoundException(Exception):
    """Exception levée lorsqu'une catégorie n'est pas trouvée."""
    def __init__(self, category_id: int = None, message: str = ERROR_CATEGORY_NOT_FOUND):
        self.category_id = category_id
        self.message = f"{message}{f' (ID: {category_id})' if category_id else ''}."
        super().__init__(self.message)

class DuplicateCategoryNameException(Exception):
    """Exception levée lorsqu'une catégorie avec le même nom existe déjà."""
    def __init__(self, name: str):
        self.name = name
        self.message = f"Une catégorie avec le nom '{name}' existe déjà."
        super().__init__(self.message)

class CategoryInUseException(Exception):
    """Exception levée à la suppression d'une catégorie encore utilisée par des produits."""
    def __init__(self, category_id: int, product_count: int):
        self.category_id = category_id
        self.product_count = product_count
        self.message = ERROR_CATEGORY_IN_USE.format(count=product_count)
        super().__init__(self.message)

class CategoryOperationFailedException(Exception):
    """Exception levée lors d'un échec inattendu d'une opération sur les catégories."""
    def __init__(self, message: str = "Échec de l'opération sur la catégorie"):
        self.message = message
        super().__init__(self.message)
