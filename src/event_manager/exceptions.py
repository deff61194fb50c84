"""
Exceções do cliente da API de eventos.
"""
from typing import Optional


class ApiError(Exception):
    """Falha ao conversar com a API REST (transporte ou status HTTP de erro)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class NotFoundError(ApiError):
    """Recurso inexistente na API (HTTP 404)."""


class InvalidIdError(ValueError):
    """ID de local ou organizador que não pode ser convertido para inteiro."""
