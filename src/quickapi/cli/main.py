"""Entrypoint de la CLI.

Por qué una CLI en una librería:
- Permite probar un endpoint (headers, query, body, credencial) sin escribir
  código, usando exactamente el mismo camino de despacho que la librería.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from quickapi.cli import doctor
from quickapi.cli.ui_components import print_response
from quickapi.core.config import AppSettings
from quickapi.core.domain.errors import ApiError
from quickapi.core.domain.models import (
    Body,
    CredentialPlacement,
    Header,
    Method,
    QueryParam,
    RequestDescriptor,
    RequestDescriptorBuilder,
)
from quickapi.core.services.binding import LEGACY_METHODS, BindingBuilder

app = typer.Typer(no_args_is_help=True, help="Build and dispatch HTTP requests against a base endpoint.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _parse_pairs(values: list[str] | None, option: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw in values or []:
        if "=" not in raw:
            raise typer.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint=option)
        key, value = raw.split("=", 1)
        if not key:
            raise typer.BadParameter(f"empty key in {raw!r}", param_hint=option)
        pairs.append((key, value))
    return pairs


async def _dispatch(builder: BindingBuilder, descriptor: RequestDescriptor) -> httpx.Response:
    async with builder.build() as binding:
        binding.authorize(descriptor)
        return await binding.send(descriptor)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    _configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def send(
    endpoint: str = typer.Argument(..., help="Base endpoint, e.g. https://api.example.com"),
    path: str = typer.Argument("", help="Relative path appended verbatim, e.g. /items"),
    method: Method = typer.Option(Method.GET, "--method", "-X", case_sensitive=False),
    header: Optional[List[str]] = typer.Option(None, "--header", "-H", help="KEY=VALUE (repeatable)."),
    query: Optional[List[str]] = typer.Option(None, "--query", "-q", help="KEY=VALUE (repeatable)."),
    body: Optional[List[str]] = typer.Option(None, "--body", "-d", help="KEY=VALUE JSON field (repeatable)."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Credential value (default: QUICKAPI_API_KEY)."),
    api_key_name: Optional[str] = typer.Option(None, "--api-key-name", help="Credential name."),
    place: Optional[CredentialPlacement] = typer.Option(None, "--place", case_sensitive=False),
    legacy_methods: bool = typer.Option(False, "--legacy-methods", help="Reject PATCH like older bindings."),
    show_headers: bool = typer.Option(True, "--headers/--no-headers", help="Print response headers."),
) -> None:
    """Send a single request and print the raw response."""

    settings = AppSettings()
    placement = place or settings.api_place

    builder = BindingBuilder.new(endpoint, placement).with_settings(settings)
    credential = api_key or settings.api_key
    if credential:
        builder.with_credential(api_key_name or settings.api_key_name, credential)
    if legacy_methods:
        builder.with_methods(LEGACY_METHODS)

    request_builder = RequestDescriptorBuilder.new(path, method)
    for key, value in _parse_pairs(header, "--header"):
        request_builder = request_builder.with_header(Header(key, value))
    for key, value in _parse_pairs(query, "--query"):
        request_builder = request_builder.with_query_param(QueryParam(key, value))
    body_fields = _parse_pairs(body, "--body")
    # La credencial en body necesita un body presente.
    if body_fields or (credential and placement is CredentialPlacement.BODY):
        request_builder = request_builder.with_body(Body.from_mapping(dict(body_fields)))

    try:
        response = asyncio.run(_dispatch(builder, request_builder.build()))
    except ApiError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    print_response(_console, response, show_headers=show_headers)


def run() -> None:
    app()
