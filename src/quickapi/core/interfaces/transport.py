"""Contrato del cliente HTTP subyacente.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- `httpx.AsyncClient` lo cumple tal cual; en tests se usa el mismo cliente
  con `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

import httpx


@runtime_checkable
class HttpClient(Protocol):
    """Contrato mínimo que `Binding` necesita del transporte.

    Reglas de diseño:
    - `build_request` arma el request (verbo, URL, headers, JSON) sin I/O.
    - `send` es asíncrono y debe ser seguro para uso concurrente.
    """

    def build_request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: Any | None = None,
    ) -> httpx.Request:
        ...

    async def send(self, request: httpx.Request) -> httpx.Response:
        ...

    async def aclose(self) -> None:
        ...
