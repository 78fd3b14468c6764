"""Taxonomía de errores del despacho.

Por qué una jerarquía propia:
- El caller captura `ApiError` sin conocer excepciones de httpx.
- Cada error es terminal para la llamada a `send` que lo produjo; no hay
  reintentos en esta capa.
"""

from __future__ import annotations


class ApiError(Exception):
    """Base de todos los errores de quickapi."""


class RequestError(ApiError):
    """Fallo del transporte HTTP (DNS, conexión, TLS, timeout, URL inválida).

    Los códigos de estado no se inspeccionan: un 404 no es un `RequestError`.
    """

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Request error: {cause}")
        self.cause = cause


class UnsupportedMethod(ApiError):
    """El método no tiene entrada en la tabla de despacho del binding."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported HTTP method: {name}")
        self.name = name


class InvalidResponse(ApiError):
    """La respuesta no tiene la forma esperada (p.ej. no es JSON)."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid response: {message}")
        self.message = message
