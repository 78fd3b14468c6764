"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) y los errores.
- El dominio no conoce httpx ni la CLI: solo describe requests.
"""

from quickapi.core.domain.errors import (
    ApiError,
    InvalidResponse,
    RequestError,
    UnsupportedMethod,
)
from quickapi.core.domain.models import (
    Body,
    CredentialPlacement,
    Header,
    Injection,
    InjectionStatus,
    Method,
    QueryCollection,
    QueryParam,
    RequestDescriptor,
    RequestDescriptorBuilder,
)

__all__ = [
    "ApiError",
    "Body",
    "CredentialPlacement",
    "Header",
    "Injection",
    "InjectionStatus",
    "InvalidResponse",
    "Method",
    "QueryCollection",
    "QueryParam",
    "RequestDescriptor",
    "RequestDescriptorBuilder",
    "RequestError",
    "UnsupportedMethod",
]
