"""
Erreurs métier remontées par les services et traduites en réponses HTTP
par le gestionnaire enregistré dans main.py.
"""


class ContentError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ContentError):
    """Entité obligatoire absente (édition publiée, slug ou id inconnu)."""

    status_code = 404


class FormValidationError(ContentError):
    """Champ obligatoire manquant ou invalide, détecté avant tout accès à la base."""

    status_code = 422


class ConflictError(ContentError):
    """Contrainte d'unicité ou d'intégrité violée."""

    status_code = 409


class RequestFailure(ContentError):
    """Échec d'un appel à la base ou au stockage d'images."""

    status_code = 502


class AuthenticationError(ContentError):
    status_code = 401
