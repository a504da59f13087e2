"""
Constantes pour le module d'authentification.

Ce module contient les constantes utilisées dans le module d'authentification.
"""

# --- Messages d'erreur ---
ERROR_CREDENTIALS_INVALID = "Email ou mot de passe incorrect"
ERROR_CURRENT_PASSWORD_INVALID = "Mot de passe actuel incorrect"
ERROR_TOKEN_INVALID = "Token d'authentification invalide"
ERROR_TOKEN_MISSING = "Token d'authentification manquant"
ERROR_REFRESH_TOKEN_MISSING = "Refresh token manquant"
ERROR_REFRESH_TOKEN_INVALID = "Refresh token invalide ou expiré"
ERROR_USER_INACTIVE = "Compte utilisateur inactif"
ERROR_PERMISSION_DENIED = "Vous n'avez pas la permission d'effectuer cette action"

MESSAGE_LOGOUT = "Déconnexion réussie"

# --- En-têtes HTTP ---
HEADER_WWW_AUTHENTICATE = "WWW-Authenticate"
HEADER_WWW_AUTHENTICATE_VALUE = "Bearer"
