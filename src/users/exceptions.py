"""
Exceptions personnalisées pour le module de gestion des comptes.
"""
from typing import List


class UserError(Exception):
    """Classe de base pour les exceptions liées aux comptes."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class UserNotFoundError(UserError):
    """Levée lorsque le compte n'est pas trouvé."""
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Compte {user_id} non trouvé")

class UserAlreadyExistsError(UserError):
    """Levée lorsqu'un compte avec cet email existe déjà."""
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Un compte avec l'email {email} existe déjà")

class InvalidAccountStatusError(UserError):
    def __init__(self, status: str, allowed: List[str]):
        self.status = status
        super().__init__(f"Statut de compte invalide: '{status}'. Statuts autorisés: {', '.join(allowed)}")

class MissingRoleError(UserError):
    """Levée lorsqu'un manager est créé sans rôle."""
    def __init__(self):
        super().__init__("Un rôle (role_id) est obligatoire pour un compte manager")

class AccountDeletionForbiddenError(UserError):
    """Levée lorsque la suppression d'un compte est refusée (soi-même, commandes, réponses...)."""
    pass
