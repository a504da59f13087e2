"""
Configuration pour le module de gestion des comptes.
"""
from typing import List

ACCOUNT_STATUS_ACTIVE = "Active"
ACCOUNT_STATUS_INACTIVE = "Inactive"
ACCOUNT_STATUS_LOCKED = "Locked"

ALLOWED_ACCOUNT_STATUS: List[str] = [
    ACCOUNT_STATUS_ACTIVE,
    ACCOUNT_STATUS_INACTIVE,
    ACCOUNT_STATUS_LOCKED,
]

ACCOUNT_SORT_FIELDS: List[str] = ["id", "full_name", "email", "status", "created_at", "role"]
ACCOUNT_DEFAULT_SORT = "id"
