"""Exceptions métier traduites en réponses HTTP"""
from typing import Any


class APIError(Exception):
    """Erreur de base: un statut HTTP, un message, des détails optionnels"""

    status_code: int = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {"message": self.message, **self.details}


class ServerError(APIError):
    status_code = 500


class ValidationFailed(APIError):
    """Entrée mal formée ou champ obligatoire manquant"""
    status_code = 400


class AuthenticationError(APIError):
    """Jeton absent, invalide ou expiré, ou identifiants incorrects"""
    status_code = 401


class ForbiddenError(APIError):
    status_code = 403


class NotFoundError(APIError):
    """Ressource absente ou non visible par l'appelant"""
    status_code = 404


class ConflictError(APIError):
    status_code = 409
