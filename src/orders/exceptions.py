"""Exceptions spécifiques au domaine Order."""
from typing import List

class OrderDomainException(Exception):
    """Classe de base pour les exceptions du domaine Order."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class OrderNotFoundException(OrderDomainException):
    """Levée lorsqu'une commande spécifique n'est pas trouvée."""
    def __init__(self, order_id: int):
        super().__init__(f"Commande avec ID {order_id} non trouvée.")
        self.order_id = order_id

class CustomerNotFoundException(OrderDomainException):
    def __init__(self, customer_id: int):
        super().__init__(f"Client avec ID {customer_id} non trouvé.")
        self.customer_id = customer_id

class OrderAccessForbiddenException(OrderDomainException):
    """Levée lorsqu'un compte tente d'agir sur une commande qui ne le concerne pas."""
    def __init__(self, message: str = "Accès refusé à cette commande."):
        super().__init__(message)

class OrderUpdateForbiddenException(OrderDomainException):
    """Levée lorsqu'une transition est interdite dans l'état courant de la commande."""
    pass

class InvalidOrderStatusException(OrderDomainException):
    """Levée lorsque le statut fourni pour une commande est invalide."""
    def __init__(self, status: str, allowed: List[str]):
        allowed_str = ", ".join(allowed)
        super().__init__(f"Le statut '{status}' est invalide. Statuts autorisés: {allowed_str}.")
        self.status = status
        self.allowed = allowed

class OrderCreationFailedException(OrderDomainException):
    """Levée lorsque les données de création de la commande sont invalides."""
    pass
