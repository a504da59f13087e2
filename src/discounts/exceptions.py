"""Exceptions personnalisées pour le module discounts."""

class DiscountNotFoundException(Exception):
    """Exception levée lorsqu'une réduction n'est pas trouvée."""
    def __init__(self, discount_id: int):
        self.discount_id = discount_id
        self.message = f"Réduction avec l'ID {discount_id} non trouvée."
        super().__init__(self.message)

class DuplicateDiscountCodeException(Exception):
    """Exception levée lorsqu'une réduction avec le même code existe déjà."""
    def __init__(self, code: str):
        self.code = code
        self.message = f"Une réduction avec le code '{code}' existe déjà."
        super().__init__(self.message)

class InvalidDiscountDataException(Exception):
    """Données de réduction incohérentes (valeur, type, dates)."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class DiscountOperationFailedException(Exception):
    def __init__(self, message: str = "Échec de l'opération sur la réduction"):
        self.message = message
        super().__init__(self.message)
