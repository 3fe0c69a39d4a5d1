"""
Erreurs métier de l'API.

Chaque erreur est construite une seule fois, au point d'échec, avec son code HTTP.
Les services lèvent ces exceptions ; seul le gestionnaire enregistré dans
`app.main` les traduit en réponse JSON `{"success": false, "message": ...}`.
"""


class AppError(Exception):
    """Base de toutes les erreurs métier."""

    status_code = 500
    default_message = "Erreur serveur interne"

    def __init__(self, message: str | None = None):
        self._message = message or self.default_message
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message


class ValidationError(AppError):
    """Donnée manquante ou invalide, doublon sur un champ unique."""

    status_code = 400
    default_message = "Données invalides"


class AuthenticationError(AppError):
    """Token absent, invalide ou expiré ; identifiants incorrects ; compte désactivé."""

    status_code = 401
    default_message = "Authentification requise"


class AccessDenied(AppError):
    """Utilisateur authentifié mais non autorisé."""

    status_code = 403
    default_message = "Accès refusé"


class NotFound(AppError):
    status_code = 404
    default_message = "Ressource non trouvée"


class InternalError(AppError):
    """État inattendu détecté par le code ; renvoyé en 500 avec son message, sans trace."""

    status_code = 500
