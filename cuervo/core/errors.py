# cuervo/core/errors.py
"""
Errores de dominio de la capa de perfiles.

Los servicios/controlador lanzan estas excepciones; los routers hacen
rollback y las convierten en HTTPException usando ``status_code``.
"""
from __future__ import annotations


class PersistenceError(Exception):
    """Falló la llamada al record store (DB caída, constraint, etc.)."""


class ProfileError(Exception):
    status_code: int = 400

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.message = message


class NotAuthenticatedError(ProfileError):
    status_code = 401


class DraftProfileError(ProfileError):
    status_code = 400


class ProfileNotFoundError(ProfileError):
    status_code = 404


class ChosenProfileDeleteError(ProfileError):
    status_code = 409


class ProfileBusyError(ProfileError):
    status_code = 409


class ProfilePersistenceError(ProfileError):
    status_code = 500


class LastProfileError(ProfileError):
    status_code = 409
