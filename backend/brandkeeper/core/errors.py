from typing import Any

from fastapi import status

UNAUTHORIZED_MESSAGE = "No autorizado. Debes iniciar sesión."
FORBIDDEN_MESSAGE = "No tienes permisos para realizar esta acción."
INVALID_DATA_MESSAGE = "Datos inválidos"
UNEXPECTED_MESSAGE = "Error inesperado al procesar la solicitud"


class AppError(Exception):
    """Base for errors rendered as ``{success: false, error, details?}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = UNEXPECTED_MESSAGE

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {"success": False, "error": self.message}
        if self.details is not None:
            content["details"] = self.details
        return content


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = UNAUTHORIZED_MESSAGE


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = FORBIDDEN_MESSAGE


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recurso no encontrado"


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = INVALID_DATA_MESSAGE


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "El recurso ya existe"


class UpstreamFailure(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Error al comunicarse con un servicio externo"
