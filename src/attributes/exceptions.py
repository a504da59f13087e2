"""Exceptions personnalisées pour le module attributes."""
from typing import Optional


class AttributeNotFoundException(Exception):
    """Exception levée lorsqu'un attribut n'est pas trouvé."""
    def __init__(self, attribute_id: Optional[int] = None, message: str = "Attribut non trouvé"):
        self.attribute_id = attribute_id
        self.message = f"{message}{f' (ID: {attribute_id})' if attribute_id else ''}."
        super().__init__(self.message)

class DuplicateAttributeNameException(Exception):
    def __init__(self, name: str):
        self.name = name
        self.message = f"Un attribut avec le nom '{name}' existe déjà."
        super().__init__(self.message)

class AttributeInUseException(Exception):
    """Levée à la suppression d'un attribut qui possède encore des valeurs."""
    def __init__(self, attribute_id: int, value_count: int):
        self.attribute_id = attribute_id
        self.value_count = value_count
        self.message = f"Impossible de supprimer l'attribut: il possède encore {value_count} valeur(s)."
        super().__init__(self.message)

class AttributeValueNotFoundException(Exception):
    def __init__(self, value_id: int, attribute_id: Optional[int] = None):
        self.value_id = value_id
        self.attribute_id = attribute_id
        suffix = f" pour l'attribut {attribute_id}" if attribute_id else ""
        self.message = f"Valeur d'attribut non trouvée (ID: {value_id}){suffix}."
        super().__init__(self.message)

class DuplicateAttributeValueException(Exception):
    def __init__(self, attribute_id: int, value: str):
        self.attribute_id = attribute_id
        self.value = value
        self.message = f"La valeur '{value}' existe déjà pour cet attribut."
        super().__init__(self.message)

class AttributeValueInUseException(Exception):
    """Levée à la suppression d'une valeur encore portée par des variantes."""
    def __init__(self, value_id: int, variant_count: int):
        self.value_id = value_id
        self.variant_count = variant_count
        self.message = f"Impossible de supprimer la valeur: {variant_count} variante(s) l'utilisent."
        super().__init__(self.message)

class AttributeOperationFailedException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
