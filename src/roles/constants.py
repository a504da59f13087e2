"""Constantes du module roles."""

# Rôles applicatifs reconnus par le contrôle d'accès
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_USER = "user"  # Rôle implicite des comptes sans profil manager

STAFF_ROLES = (ROLE_ADMIN, ROLE_MANAGER)

ROLE_STATUS_ACTIVE = "Active"
ROLE_STATUS_INACTIVE = "Inactive"
