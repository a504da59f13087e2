"""
Exceptions spécifiques au module product_variants.

Ce fichier contient les exceptions personnalisées utilisées
dans le module product_variants.
"""

class ProductVariantException(Exception):
    """Classe de base pour les exceptions du module product_variants."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class VariantNotFoundException(ProductVariantException):
    """Exception levée lorsqu'une variante de produit n'est pas trouvée."""

    def __init__(self, variant_id: int = None, sku: str = None):
        self.variant_id = variant_id
        self.sku = sku
        message = "Variante de produit non trouvée"
        if variant_id:
            message += f" avec l'ID {variant_id}"
        if sku:
            message += f" avec le SKU {sku}"
        super().__init__(message)


class DuplicateSKUException(ProductVariantException):
    """Exception levée lorsqu'un SKU est déjà utilisé."""

    def __init__(self, sku: str):
        self.sku = sku
        super().__init__(f"Le SKU {sku} est déjà utilisé par une autre variante")


class InvalidVariantDataException(ProductVariantException):
    """Exception levée lorsque les données d'une variante sont invalides."""

    def __init__(self, message: str):
        super().__init__(f"Données de variante invalides: {message}")


class VariantInUseException(ProductVariantException):
    """Exception levée à la suppression d'une variante déjà commandée."""

    def __init__(self, variant_id: int):
        self.variant_id = variant_id
        super().__init__(f"Impossible de supprimer la variante {variant_id}: elle figure dans des commandes")


class VariantAttributeLinkNotFoundException(ProductVariantException):
    def __init__(self, variant_id: int, attribute_value_id: int):
        self.variant_id = variant_id
        self.attribute_value_id = attribute_value_id
        super().__init__(f"La variante {variant_id} ne porte pas la valeur d'attribut {attribute_value_id}")


class DuplicateVariantAttributeLinkException(ProductVariantException):
    def __init__(self, variant_id: int, attribute_value_id: int):
        self.variant_id = variant_id
        self.attribute_value_id = attribute_value_id
        super().__init__(f"La variante {variant_id} porte déjà la valeur d'attribut {attribute_value_id}")
