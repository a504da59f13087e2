"""Exceptions personnalisées pour le module roles."""
from typing import List, Optional


class RoleNotFoundException(Exception):
    """Exception levée lorsqu'un rôle n'est pas trouvé."""
    def __init__(self, role_id: Optional[int] = None, message: str = "Rôle non trouvé"):
        self.role_id = role_id
        self.message = f"{message}{f' (ID: {role_id})' if role_id else ''}."
        super().__init__(self.message)

class DuplicateRoleNameException(Exception):
    def __init__(self, name: str):
        self.name = name
        self.message = f"Un rôle avec le nom '{name}' existe déjà."
        super().__init__(self.message)

class RoleInUseException(Exception):
    """Exception levée lorsqu'on tente de supprimer un rôle encore attribué."""
    def __init__(self, role_id: int, manager_count: int):
        self.role_id = role_id
        self.manager_count = manager_count
        self.message = f"Impossible de supprimer le rôle: {manager_count} manager(s) ont actuellement ce rôle."
        super().__init__(self.message)

class EmptyRoleUpdateException(Exception):
    def __init__(self, message: str = "Aucun champ fourni pour la mise à jour"):
        self.message = message
        super().__init__(self.message)

class PermissionNotFoundException(Exception):
    def __init__(self, permission_ids: List[int]):
        self.permission_ids = permission_ids
        ids = ", ".join(str(pid) for pid in permission_ids)
        self.message = f"Permission(s) non trouvée(s): {ids}."
        super().__init__(self.message)

class DuplicatePermissionNameException(Exception):
    def __init__(self, name: str):
        self.name = name
        self.message = f"Une permission avec le nom '{name}' existe déjà."
        super().__init__(self.message)

class RoleOperationFailedException(Exception):
    """Exception pour les erreurs inattendues lors des opérations sur les rôles."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
