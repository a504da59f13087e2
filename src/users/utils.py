"""Fonctions utilitaires pour le module users."""


def username_from_email(email: str) -> str:
    """Dérive le nom d'utilisateur de la partie locale de l'email."""
    return email.split("@", 1)[0]
