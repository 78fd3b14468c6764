"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `send` y `doctor`.
"""

from __future__ import annotations

import json

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from quickapi.core.domain.errors import InvalidResponse
from quickapi.core.services.binding import read_json


def build_status_line(response: httpx.Response) -> Text:
    style = "green" if response.is_success else "yellow" if response.is_redirect else "red"
    line = Text()
    line.append(f"HTTP {response.status_code}", style=f"bold {style}")
    if response.reason_phrase:
        line.append(f" {response.reason_phrase}", style=style)
    line.append(f"  {response.request.method} {response.request.url}", style="dim")
    return line


def build_headers_table(response: httpx.Response) -> Table:
    table = Table(title="Response Headers")
    table.add_column("Header", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in response.headers.items():
        table.add_row(key, value)
    return table


def build_body_panel(response: httpx.Response) -> Panel:
    """Panel con el cuerpo; JSON formateado si se puede decodificar."""

    if not response.content:
        return Panel(Text("(empty body)", style="dim"), title="Body", border_style="dim")
    try:
        payload = read_json(response)
    except InvalidResponse:
        return Panel(Text(response.text), title="Body", border_style="magenta")
    rendered = json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    return Panel(Syntax(rendered, "json", word_wrap=True), title="Body (JSON)", border_style="magenta")


def print_response(console: Console, response: httpx.Response, *, show_headers: bool = True) -> None:
    console.print(build_status_line(response))
    if show_headers:
        console.print(build_headers_table(response))
    console.print(build_body_panel(response))
