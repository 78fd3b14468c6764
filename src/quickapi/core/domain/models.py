"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta en el borde (p.ej. un `Body` siempre es un objeto
  JSON) sin acoplar el Core a librerías de I/O.
- Permite copiar/serializar descriptores de request de forma segura.

Nota:
- Estos modelos describen *qué* request se quiere enviar, no *cómo* se envía.
  El despacho vive en `core.services.binding`.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Method(str, Enum):
    """Verbos HTTP que un descriptor puede declarar."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class CredentialPlacement(str, Enum):
    """Dónde se escribe la API key al inyectar credenciales."""

    HEADER = "header"
    QUERY_PARAM = "query_param"
    BODY = "body"
    NONE = "none"


class InjectionStatus(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"


class Injection(BaseModel):
    """Resultado de `RequestDescriptor.insert_credential`.

    Por qué un tipo explícito:
    - Distingue "aplicado" de "omitido" sin reutilizar `None` para ambos.
    - `value` solo se rellena cuando la ubicación devuelve el valor
      (header y body); el query string aplica sin eco.
    """

    model_config = ConfigDict(frozen=True)

    status: InjectionStatus
    placement: CredentialPlacement
    value: str | None = None

    @property
    def applied(self) -> bool:
        return self.status is InjectionStatus.APPLIED

    def __bool__(self) -> bool:
        return self.applied


@dataclass(frozen=True)
class Header:
    key: str
    value: str


@dataclass(frozen=True)
class QueryParam:
    key: str
    value: str


class QueryCollection(BaseModel):
    """Parámetros de query (claves únicas, último valor gana).

    `render` no escapa nada: el caller entrega tokens ya seguros para URL.
    """

    entries: dict[str, str] = Field(
        default_factory=dict,
        description="Pares clave/valor del query string.",
    )

    @classmethod
    def from_params(cls, params: Iterable[QueryParam]) -> "QueryCollection":
        entries: dict[str, str] = {}
        for param in params:
            entries[param.key] = param.value
        return cls(entries=entries)

    def insert(self, key: str, value: str) -> None:
        self.entries[key] = value

    def remove(self, key: str) -> None:
        self.entries.pop(key, None)

    def get(self, key: str) -> str | None:
        return self.entries.get(key)

    def items(self) -> list[tuple[str, str]]:
        return list(self.entries.items())

    def render(self) -> str:
        """Devuelve `""` si está vacío, si no `?k=v&k2=v2`."""

        if not self.entries:
            return ""
        return "?" + "&".join(f"{k}={v}" for k, v in self.entries.items())

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


class Body(BaseModel):
    """Payload JSON de un request.

    Invariante:
    - `payload` siempre es un objeto JSON (dict). Pydantic rechaza listas o
      escalares en la construcción, así que `push_value` no revalida.
    """

    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Objeto JSON enviado como cuerpo del request.",
    )

    @classmethod
    def from_mapping(cls, fields: Mapping[str, str] | None = None) -> "Body":
        return cls(payload=dict(fields or {}))

    @classmethod
    def from_json(cls, text: str) -> "Body":
        """Construye un `Body` desde un documento JSON.

        Lanza `ValueError` (o `pydantic.ValidationError`) si el documento no es
        JSON válido o no es un objeto.
        """

        return cls(payload=json.loads(text))

    def push_value(self, key: str, value: str) -> None:
        self.payload[key] = value

    def get(self) -> dict[str, Any]:
        """Copia del payload; mutarla no altera el `Body`."""

        return copy.deepcopy(self.payload)


class RequestDescriptor(BaseModel):
    """Descripción completa de un request aún no enviado.

    Reglas de diseño:
    - La *forma* (path, método, presencia de body) es fija tras `build()`.
    - El *contenido* de headers/query/body sigue siendo mutable mediante las
      operaciones de inserción.
    - No hay sincronización interna: quien llama a `send` es dueño del
      descriptor mientras dura la llamada.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(
        ...,
        description="Path relativo; se concatena al endpoint tal cual.",
    )
    method: Method = Field(
        default=Method.GET,
        description="Verbo HTTP del request.",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers salientes (claves únicas).",
    )
    body: Body | None = Field(
        default=None,
        description="Cuerpo JSON opcional.",
    )
    query: QueryCollection = Field(
        default_factory=QueryCollection,
        description="Parámetros de query.",
    )

    def insert_credential(self, key: str, value: str, placement: CredentialPlacement) -> Injection:
        if placement is CredentialPlacement.HEADER:
            self.headers[key] = value
            return Injection(status=InjectionStatus.APPLIED, placement=placement, value=value)
        if placement is CredentialPlacement.QUERY_PARAM:
            self.query.insert(key, value)
            return Injection(status=InjectionStatus.APPLIED, placement=placement)
        if placement is CredentialPlacement.BODY and self.body is not None:
            self.body.push_value(key, value)
            return Injection(status=InjectionStatus.APPLIED, placement=placement, value=value)
        # Body ausente o NONE.
        return Injection(status=InjectionStatus.SKIPPED, placement=placement)

    def insert_query_param(self, key: str, value: str) -> None:
        self.query.insert(key, value)

    def insert_header(self, key: str, value: str) -> None:
        self.headers[key] = value

    def get_body(self) -> Body | None:
        return self.body

    def get_headers(self) -> Mapping[str, str]:
        return MappingProxyType(self.headers)

    def get_query_slice(self) -> QueryCollection:
        return self.query

    def get_path(self) -> str:
        return self.path


@dataclass(frozen=True)
class RequestDescriptorBuilder:
    """Builder fluido de `RequestDescriptor`.

    Por qué frozen:
    - Cada `with_*` devuelve un builder nuevo, así dos builders derivados del
      mismo prefijo nunca comparten listas de headers/params.
    """

    path: str
    method: Method
    body: Body | None = None
    headers: tuple[Header, ...] = field(default_factory=tuple)
    query_params: tuple[QueryParam, ...] = field(default_factory=tuple)

    @classmethod
    def new(cls, path: str, method: Method | str) -> "RequestDescriptorBuilder":
        """`method` acepta un miembro de `Method` o su nombre sin importar mayúsculas."""

        if not isinstance(method, Method):
            method = Method(method.upper())
        return cls(path=path, method=method)

    def with_body(self, body: Body) -> "RequestDescriptorBuilder":
        return replace(self, body=body)

    def with_header(self, header: Header) -> "RequestDescriptorBuilder":
        return replace(self, headers=self.headers + (header,))

    def with_query_param(self, query_param: QueryParam) -> "RequestDescriptorBuilder":
        return replace(self, query_params=self.query_params + (query_param,))

    def build(self) -> RequestDescriptor:
        headers: dict[str, str] = {}
        for header in self.headers:
            headers[header.key] = header.value

        return RequestDescriptor(
            path=self.path,
            method=self.method,
            headers=headers,
            body=self.body.model_copy(deep=True) if self.body is not None else None,
            query=QueryCollection.from_params(self.query_params),
        )
