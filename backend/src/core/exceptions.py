"""
Domain exceptions for the clinic backend.

Every error the application raises on purpose derives from ClinicError, which
carries the HTTP status, a machine-readable type and the user-facing message.
The handlers registered in main.py turn them into JSON responses of the form
``{"error": <message>, "type": <error_type>, ...extra}``.
"""

from typing import Any, Dict, Optional


class ClinicError(Exception):
    """Base class for expected application errors."""

    status_code = 500
    error_type = "internal_error"
    default_message = "Error interno del servidor"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "type": self.error_type, **self.extra}


class InvalidInputError(ClinicError, ValueError):
    """Malformed or missing input (validation failures)."""

    status_code = 400
    error_type = "validation_error"
    default_message = "Datos inválidos"


class InvalidDateError(InvalidInputError):
    """Date string that is not a real calendar date."""

    default_message = "Fecha inválida"


class InvalidTimeError(InvalidInputError):
    """Time string outside 00:00-23:59."""

    default_message = "Hora inválida"


class WeakPasswordError(InvalidInputError):
    """Password shorter than the minimum length."""

    default_message = "La contraseña debe tener al menos 6 caracteres"


class InvalidCredentialsError(ClinicError):
    """Login failure. Never says which field was wrong."""

    status_code = 401
    error_type = "invalid_credentials"
    default_message = "Credenciales inválidas"


class UnauthenticatedError(ClinicError):
    """Missing, unknown or expired session token."""

    status_code = 401
    error_type = "unauthenticated"
    default_message = "No autenticado"


class ForbiddenError(ClinicError):
    """Authenticated caller without the required role."""

    status_code = 403
    error_type = "forbidden"
    default_message = "Sin permisos suficientes"


class NotFoundError(ClinicError):
    """Referenced record does not exist."""

    status_code = 404
    error_type = "not_found"
    default_message = "Recurso no encontrado"


class NoAttendingAvailableError(ClinicError):
    """No active doctor exists to attach an appointment to."""

    status_code = 400
    error_type = "no_attending_available"
    default_message = "No hay doctores disponibles"


class StorageFailureError(ClinicError):
    """Database failure. The message shown to clients stays generic."""

    status_code = 500
    error_type = "storage_failure"
