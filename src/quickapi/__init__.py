"""quickapi: descriptores de request + despacho contra un endpoint base.

Uso típico::

    binding = BindingBuilder.new("https://api.example.com", CredentialPlacement.HEADER).build()
    items = (
        RequestDescriptorBuilder.new("/items", Method.GET)
        .with_header(Header("X-Key", "abc"))
        .build()
    )
    response = await binding.send(items)
"""

from quickapi.core.domain import (
    ApiError,
    Body,
    CredentialPlacement,
    Header,
    Injection,
    InjectionStatus,
    InvalidResponse,
    Method,
    QueryCollection,
    QueryParam,
    RequestDescriptor,
    RequestDescriptorBuilder,
    RequestError,
    UnsupportedMethod,
)
from quickapi.core.services import (
    DEFAULT_METHODS,
    LEGACY_METHODS,
    Binding,
    BindingBuilder,
    read_json,
)

__all__ = [
    "ApiError",
    "Binding",
    "BindingBuilder",
    "Body",
    "CredentialPlacement",
    "DEFAULT_METHODS",
    "Header",
    "Injection",
    "InjectionStatus",
    "InvalidResponse",
    "LEGACY_METHODS",
    "Method",
    "QueryCollection",
    "QueryParam",
    "RequestDescriptor",
    "RequestDescriptorBuilder",
    "RequestError",
    "UnsupportedMethod",
    "read_json",
]
