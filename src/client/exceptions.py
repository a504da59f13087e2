"""Exceptions du client HTTP de l'API d'administration."""
from typing import Any


class ApiError(Exception):
    """Réponse HTTP en erreur renvoyée par l'API."""
    def __init__(self, status_code: int, detail: Any = None):
        self.status_code = status_code
        self.detail = detail
        self.message = f"Erreur API {status_code}: {detail}"
        super().__init__(self.message)


class AuthenticationExpiredError(ApiError):
    """Le rafraîchissement du token a échoué : une nouvelle connexion est nécessaire."""
    def __init__(self, detail: Any = "Session expirée, veuillez vous reconnecter."):
        super().__init__(401, detail)
