"""Servicios del Core: despacho de descriptores."""

from quickapi.core.services.binding import (
    DEFAULT_METHODS,
    LEGACY_METHODS,
    Binding,
    BindingBuilder,
    read_json,
)

__all__ = [
    "Binding",
    "BindingBuilder",
    "DEFAULT_METHODS",
    "LEGACY_METHODS",
    "read_json",
]
