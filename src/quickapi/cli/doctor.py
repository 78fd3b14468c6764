"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from quickapi.core.config import AppSettings, get_user_env_file, write_user_env_vars
from quickapi.core.domain.errors import ApiError
from quickapi.core.domain.models import CredentialPlacement, Method, RequestDescriptorBuilder
from quickapi.core.services.binding import BindingBuilder

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    descriptor = RequestDescriptorBuilder.new("", Method.GET).build()
    try:
        async with BindingBuilder.from_settings(settings).build() as binding:
            binding.authorize(descriptor)
            response = await binding.send(descriptor)
        return True, f"HTTP {response.status_code}"
    except ApiError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics against the configured endpoint."""

    settings = AppSettings()

    table = Table(title="quickapi Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Config file", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))
    if settings.api_key:
        table.add_row("API key", "OK", f"{settings.api_key_name} -> {settings.api_place.value}")
    else:
        table.add_row("API key", "OPTIONAL", "No key set -> requests go out unauthenticated")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:.1f}s")
    table.add_row("User-Agent", "OK", settings.user_agent)

    if settings.base_url:
        table.add_row("Base URL", "OK", settings.base_url)
        # Connectivity (best-effort)
        ok_http, detail_http = asyncio.run(_check_http(settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)
    else:
        table.add_row("Base URL", "MISSING", "Run `quickapi doctor configure` or set QUICKAPI_BASE_URL")

    _console.print(table)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    base_url = typer.prompt("Base URL").strip()
    if not base_url:
        raise typer.BadParameter("base URL is required")

    api_key = typer.prompt("API key (blank for none)", default="", hide_input=True, show_default=False).strip()
    api_key_name = typer.prompt("API key name", default="X-API-Key", show_default=True).strip()
    raw_place = typer.prompt("API key placement", default=CredentialPlacement.HEADER.value, show_default=True)
    try:
        place = CredentialPlacement(raw_place.strip().lower()).value
    except ValueError:
        choices = ", ".join(p.value for p in CredentialPlacement)
        raise typer.BadParameter(f"placement must be one of: {choices}") from None

    env_path = write_user_env_vars(
        {
            "QUICKAPI_BASE_URL": base_url,
            "QUICKAPI_API_KEY": api_key or None,
            "QUICKAPI_API_KEY_NAME": api_key_name,
            "QUICKAPI_API_PLACE": place,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
