"""CLI de medshelf (Typer + Rich).

Por qué la CLI es delgada:
- Cada comando abre un cliente, carga el `MedicationStore` y delega la
  operación; el store decide cómo reconciliar y qué notificar.
- Los comandos solo traducen argumentos y pintan el resultado.

Usage:
    medshelf list [--table | --json]
    medshelf add --name "Ibuprofen" --price 4.5
    medshelf edit <id> --description "200mg tablets"
    medshelf delete <id> --yes
    medshelf export reports/medications.json
    medshelf doctor run
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_medications_json
from adapters.medications_api import MedicationsApi
from cli import doctor
from cli.ui_components import (
    build_medications_grid,
    build_medications_table,
    print_banner,
    print_notice,
)
from core.config import AppSettings
from core.domain.models import MedicationDraft, MedicationPatch
from core.logging import setup_logging
from core.services.collection_store import MedicationStore, StoreHooks

app = typer.Typer(
    name="medshelf",
    help="Manage medication records on a remote REST API.",
    no_args_is_help=True,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

StoreOperation = Callable[[MedicationStore], Awaitable[bool]]


def open_api(settings: AppSettings) -> MedicationsApi:
    """Factory del cliente HTTP (los tests la sustituyen por un fake)."""

    return MedicationsApi(settings)


def _settings(ctx: typer.Context) -> AppSettings:
    settings = ctx.obj if isinstance(ctx.obj, AppSettings) else None
    return settings or AppSettings()


async def _session(settings: AppSettings, operation: StoreOperation | None = None) -> tuple[MedicationStore, bool]:
    hooks = StoreHooks(notify=lambda notice: print_notice(_err_console, notice))
    async with open_api(settings) as api:
        store = MedicationStore(api, hooks=hooks)
        if not await store.load():
            return store, False
        if operation is None:
            return store, True
        return store, await operation(store)


def _run(settings: AppSettings, operation: StoreOperation | None = None) -> MedicationStore:
    store, ok = asyncio.run(_session(settings, operation))
    if not ok:
        raise typer.Exit(1)
    return store


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Backend origin (overrides MEDSHELF_BASE_URL)."),
    debug: bool = typer.Option(False, "--debug", help="Verbose diagnostic logging."),
) -> None:
    """Medication Management."""

    overrides: dict[str, object] = {}
    if base_url:
        overrides["base_url"] = base_url
    if debug:
        overrides["debug"] = True
    settings = AppSettings(**overrides)
    setup_logging(settings.effective_log_level, settings.log_format)
    ctx.obj = settings


@app.command("list")
def cmd_list(
    ctx: typer.Context,
    as_table: bool = typer.Option(False, "--table", help="Render a table instead of cards."),
    as_json: bool = typer.Option(False, "--json", help="Print the collection as JSON."),
) -> None:
    """Show every medication."""

    store = _run(_settings(ctx))
    if as_json:
        _console.print_json(data=[m.to_wire() for m in store.records])
        return
    if as_table:
        _console.print(build_medications_table(store.records))
        return
    print_banner(_console)
    _console.print(build_medications_grid(store.records))


@app.command("add")
def cmd_add(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Display name."),
    description: str = typer.Option("", "--description", "-d"),
    price: float = typer.Option(0.0, "--price", "-p", help="0 hides the price."),
    image_url: str = typer.Option("", "--image-url", "-i"),
) -> None:
    """Create a medication (the server assigns its id)."""

    try:
        draft = MedicationDraft(name=name, description=description, price=price, image_url=image_url)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    async def operation(store: MedicationStore) -> bool:
        return await store.add(draft) is not None

    store = _run(_settings(ctx), operation)
    _console.print(build_medications_grid(store.records))


@app.command("edit")
def cmd_edit(
    ctx: typer.Context,
    medication_id: str = typer.Argument(..., help="Id of the medication to edit."),
    name: Optional[str] = typer.Option(None, "--name", "-n"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    price: Optional[float] = typer.Option(None, "--price", "-p"),
    image_url: Optional[str] = typer.Option(None, "--image-url", "-i"),
) -> None:
    """Replace a medication with the given fields applied."""

    try:
        patch = MedicationPatch(name=name, description=description, price=price, image_url=image_url)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if patch.is_empty():
        raise typer.BadParameter("nothing to change; pass at least one field option")

    async def operation(store: MedicationStore) -> bool:
        current = store.get(medication_id)
        if current is None:
            _err_console.print(f"[red]Error:[/red] no medication with id {escape(repr(medication_id))}")
            return False
        return await store.edit(medication_id, current.apply(patch)) is not None

    store = _run(_settings(ctx), operation)
    _console.print(build_medications_grid(store.records))


@app.command("delete")
def cmd_delete(
    ctx: typer.Context,
    medication_id: str = typer.Argument(..., help="Id of the medication to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete a medication."""

    if not yes and not typer.confirm(f"Delete medication {medication_id}?"):
        raise typer.Abort()

    async def operation(store: MedicationStore) -> bool:
        return await store.remove(medication_id)

    store = _run(_settings(ctx), operation)
    _console.print(build_medications_grid(store.records))


@app.command("export")
def cmd_export(
    ctx: typer.Context,
    output_path: Path = typer.Argument(..., help="Destination JSON file."),
) -> None:
    """Write the current collection to a JSON file."""

    store = _run(_settings(ctx))
    path = export_medications_json(medications=store.records, output_path=output_path)
    _err_console.print(f"[green]Saved {len(store.records)} medications to:[/green] {escape(str(path))}")


def run() -> None:
    app()
