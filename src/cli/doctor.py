"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from adapters.medications_api import MEDICATIONS_PATH, MedicationsApi
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import ApiError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def check_backend(settings: AppSettings, api: MedicationsApi | None = None) -> tuple[bool, str]:
    """Call `GET /medications` and describe the outcome."""

    api = api or MedicationsApi(settings)
    async with api:
        try:
            medications = await api.list()
        except ApiError as exc:
            return False, f"{exc.kind.value}: {exc}"
    return True, f"{len(medications)} medications"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()

    table = Table(title="medshelf Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", Text(settings.base_url))
    table.add_row("Origin header", "OK" if settings.origin else "OPTIONAL", Text(settings.origin or "not sent"))
    table.add_row("Request timeout", "OK", f"{settings.request_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", Text(str(get_user_env_file())))

    ok_http, detail_http = asyncio.run(check_backend(settings))
    table.add_row(f"GET {MEDICATIONS_PATH}", "OK" if ok_http else "FAIL", Text(detail_http))

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Hosted backends on free tiers may take a while to wake up; "
            "run the doctor again in a minute."
        )
        raise typer.Exit(1)


@app.command()
def configure(
    base_url: str = typer.Option(..., "--base-url", prompt="Backend base URL", help="Backend origin."),
    origin: Optional[str] = typer.Option(None, "--origin", help="Origin header to send (optional)."),
) -> None:
    """Store the backend settings in the user config .env."""

    base_url = base_url.strip().rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base_url must start with http:// or https://")

    env_path = write_user_env_vars(
        {
            "MEDSHELF_BASE_URL": base_url,
            "MEDSHELF_ORIGIN": origin.strip() if origin else None,
        }
    )
    _console.print("[green]Saved config to:[/green]", Text(str(env_path)))
