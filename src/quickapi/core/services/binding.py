"""Binding: endpoint base + cliente HTTP compartido.

Este módulo convierte un `RequestDescriptor` en una llamada HTTP real. El
`Binding` es inmutable tras `build()` y no guarda estado por llamada, así que
varias corrutinas pueden usar `send` a la vez sobre el mismo binding; el pool
de conexiones lo gestiona httpx.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx

from quickapi.adapters.http_client import build_async_client
from quickapi.core.config import AppSettings
from quickapi.core.domain.errors import InvalidResponse, RequestError, UnsupportedMethod
from quickapi.core.domain.models import (
    CredentialPlacement,
    Injection,
    InjectionStatus,
    Method,
    RequestDescriptor,
)
from quickapi.core.interfaces.transport import HttpClient

logger = logging.getLogger(__name__)

DEFAULT_METHODS: frozenset[Method] = frozenset(Method)
# Tabla histórica: sin PATCH.
LEGACY_METHODS: frozenset[Method] = frozenset(
    {Method.GET, Method.POST, Method.PUT, Method.DELETE}
)


def read_json(response: httpx.Response) -> Any:
    """Decodifica el cuerpo JSON de `response` o lanza `InvalidResponse`."""

    try:
        return response.json()
    except ValueError as exc:
        raise InvalidResponse(f"HTTP {response.status_code}: body is not JSON ({exc})") from exc


class Binding:
    """Handle reutilizable para despachar descriptores contra un endpoint."""

    def __init__(
        self,
        *,
        endpoint: str,
        client: HttpClient,
        paths: Iterable[RequestDescriptor] = (),
        api_place: CredentialPlacement = CredentialPlacement.NONE,
        credential: tuple[str, str] | None = None,
        methods: Iterable[Method] = DEFAULT_METHODS,
        owns_client: bool = False,
    ) -> None:
        self._endpoint = endpoint
        self._client = client
        self._paths = tuple(paths)
        self._api_place = api_place
        self._credential = credential
        self._methods = frozenset(methods)
        self._owns_client = owns_client

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def api_place(self) -> CredentialPlacement:
        return self._api_place

    @property
    def paths(self) -> tuple[RequestDescriptor, ...]:
        """Descriptores registrados en el builder (registro orientativo)."""

        return self._paths

    @property
    def methods(self) -> frozenset[Method]:
        return self._methods

    def resolve_url(self, descriptor: RequestDescriptor) -> str:
        """`endpoint + path + query`, concatenación literal sin normalizar `/`."""

        return f"{self._endpoint}{descriptor.path}{descriptor.query.render()}"

    def authorize(self, descriptor: RequestDescriptor) -> Injection:
        """Inyecta la credencial configurada en `descriptor`.

        Sin credencial configurada devuelve `SKIPPED` y no toca el descriptor.
        """

        if self._credential is None:
            return Injection(status=InjectionStatus.SKIPPED, placement=self._api_place)
        key, value = self._credential
        return descriptor.insert_credential(key, value, self._api_place)

    async def send(self, descriptor: RequestDescriptor) -> httpx.Response:
        """Despacha `descriptor` y devuelve la respuesta cruda.

        Lanza:
        - `UnsupportedMethod` si el método no está en la tabla del binding.
        - `RequestError` ante cualquier fallo del transporte.

        No valida códigos de estado ni parsea el cuerpo.
        """

        url = self.resolve_url(descriptor)
        if descriptor.method not in self._methods:
            raise UnsupportedMethod(descriptor.method.value.lower())

        payload = descriptor.body.get() if descriptor.body is not None else None
        logger.debug(
            "Dispatching %s %s (headers=%s, body=%s)",
            descriptor.method.value,
            url,
            sorted(descriptor.headers),
            payload is not None,
        )

        # build_request lanza UnicodeEncodeError con headers no ASCII.
        try:
            request = self._client.build_request(
                descriptor.method.value,
                url,
                headers=dict(descriptor.headers),
                json=payload,
            )
            response = await self._client.send(request)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            logger.warning("%s %s failed: %s", descriptor.method.value, url, exc)
            raise RequestError(exc) from exc

        logger.debug("%s %s -> %s", descriptor.method.value, url, response.status_code)
        return response

    async def fetch_json(self, descriptor: RequestDescriptor) -> Any:
        """`send` + `read_json`."""

        response = await self.send(descriptor)
        return read_json(response)

    async def aclose(self) -> None:
        """Cierra el cliente solo si el binding lo creó."""

        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "Binding":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


class BindingBuilder:
    """Acumula endpoint, política de credenciales y descriptores.

    A diferencia de `RequestDescriptorBuilder`, este builder es dueño de su
    estado y cada `with_*` lo muta y devuelve `self`.
    """

    def __init__(self, endpoint: str, api_place: CredentialPlacement) -> None:
        self.endpoint = endpoint
        self.api_place = api_place
        self.paths: list[RequestDescriptor] = []
        self._credential: tuple[str, str] | None = None
        self._client: HttpClient | None = None
        self._methods: frozenset[Method] = DEFAULT_METHODS
        self._settings: AppSettings | None = None

    @classmethod
    def new(cls, endpoint: str, api_place: CredentialPlacement) -> "BindingBuilder":
        return cls(endpoint, api_place)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "BindingBuilder":
        """Builder pre-cargado con `base_url`, ubicación y credencial."""

        if not settings.base_url:
            raise ValueError("QUICKAPI_BASE_URL is not configured")

        builder = cls(settings.base_url, settings.api_place).with_settings(settings)
        if settings.api_key:
            builder.with_credential(settings.api_key_name, settings.api_key)
        return builder

    def add_path(self, path: RequestDescriptor) -> "BindingBuilder":
        self.paths.append(path)
        return self

    def with_credential(self, key: str, value: str) -> "BindingBuilder":
        self._credential = (key, value)
        return self

    def with_client(self, client: HttpClient) -> "BindingBuilder":
        """Usa un cliente externo; el binding no lo cerrará."""

        self._client = client
        return self

    def with_methods(self, methods: Iterable[Method]) -> "BindingBuilder":
        self._methods = frozenset(methods)
        return self

    def with_settings(self, settings: AppSettings) -> "BindingBuilder":
        self._settings = settings
        return self

    def build(self) -> Binding:
        owns_client = self._client is None
        client = self._client if self._client is not None else build_async_client(self._settings)
        return Binding(
            endpoint=self.endpoint,
            client=client,
            paths=self.paths,
            api_place=self.api_place,
            credential=self._credential,
            methods=self._methods,
            owns_client=owns_client,
        )
