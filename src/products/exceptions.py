"""Exceptions spécifiques au module products."""
from typing import Optional


class ProductNotFoundException(Exception):
    """Exception levée lorsqu'un produit n'est pas trouvé."""
    def __init__(self, product_id: Optional[int] = None, message: str = "Produit non trouvé"):
        self.product_id = product_id
        self.message = f"{message}{f' (ID: {product_id})' if product_id else ''}."
        super().__init__(self.message)

class ProductInUseException(Exception):
    """Levée à la suppression d'un produit dont une variante figure dans une commande."""
    def __init__(self, product_id: int, ordered_count: int):
        self.product_id = product_id
        self.ordered_count = ordered_count
        self.message = (
            f"Impossible de supprimer le produit {product_id}: "
            f"ses variantes figurent dans {ordered_count} ligne(s) de commande."
        )
        super().__init__(self.message)

class ProductOperationFailedException(Exception):
    """Exception pour les erreurs inattendues lors des opérations sur les produits."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
