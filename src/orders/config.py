"""
Configuration spécifique au module Orders.
Contient les constantes de statuts et de tri pour le module de gestion des commandes.
"""

from typing import List

# Statuts autorisés pour une commande
ORDER_STATUS_PENDING = "Pending"
ORDER_STATUS_PROCESSING = "Processing"
ORDER_STATUS_COMPLETED = "Completed"
ORDER_STATUS_CANCELLED = "Cancelled"
ORDER_STATUS_REJECTED = "Rejected"

ALLOWED_ORDER_STATUS: List[str] = [
    ORDER_STATUS_PENDING,     # Commande en attente de traitement
    ORDER_STATUS_PROCESSING,  # Paiement reçu, en préparation
    ORDER_STATUS_COMPLETED,   # Commande livrée
    ORDER_STATUS_CANCELLED,   # Annulée par le client ou le personnel
    ORDER_STATUS_REJECTED,    # Refusée par le personnel
]

# Statuts à partir desquels la commande n'évolue plus
FINAL_ORDER_STATUS: List[str] = [ORDER_STATUS_COMPLETED, ORDER_STATUS_CANCELLED, ORDER_STATUS_REJECTED]

# Statuts de paiement
PAYMENT_STATUS_PENDING = "Pending"
PAYMENT_STATUS_PAID = "Paid"
PAYMENT_STATUS_REFUNDED = "Refunded"
PAYMENT_STATUS_PARTIALLY_PAID = "Partially Paid"

ALLOWED_PAYMENT_STATUS: List[str] = [
    PAYMENT_STATUS_PENDING,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_REFUNDED,
    PAYMENT_STATUS_PARTIALLY_PAID,
]

DEFAULT_PAYMENT_METHOD = "Credit Card"

# Tri autorisé pour la liste paginée
ORDER_SORT_FIELDS: List[str] = ["id", "order_date", "payment_amount", "status", "payment_status", "customer_name"]
ORDER_DEFAULT_SORT = "order_date"
