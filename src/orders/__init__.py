"""
Module Orders - Gestion des commandes
"""

# Exposer les modèles et schémas pour faciliter les imports
from src.orders.models import (
    Order, OrderItem, OrderHistory,
    OrderCreate, OrderItemCreate, OrderListItem, OrderDetail,
    OrderCancelRequest, OrderStatusUpdate,
)

__all__ = [
    "Order", "OrderItem", "OrderHistory",
    "OrderCreate", "OrderItemCreate", "OrderListItem", "OrderDetail",
    "OrderCancelRequest", "OrderStatusUpdate",
]
