"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Las reglas de presentación (precio 0 oculto, imagen por defecto) viven en
  funciones puras testeables sin consola.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Medication
from core.services.collection_store import Notice, NoticeLevel

DEFAULT_IMAGE_URL = "https://placehold.co/400x300?text=Medication"
CARD_WIDTH = 36


def format_price(medication: Medication) -> str | None:
    """Precio formateado, o `None` cuando es 0 (la línea no se muestra)."""

    if medication.price == 0:
        return None
    return f"${medication.price:.2f}"


def image_for(medication: Medication) -> str:
    return medication.image_url.strip() or DEFAULT_IMAGE_URL


def print_banner(console: Console) -> None:
    title = Text("MEDSHELF", style="bold cyan")
    subtitle = Text("Medication Management", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_add_card() -> Panel:
    """Tarjeta 'Add New Medication' (siempre la primera del grid)."""

    body = Align.center(Text.assemble(Text("+", style="bold"), "\n", "Add New Medication"), vertical="middle")
    return Panel(
        body,
        border_style="dim",
        width=CARD_WIDTH,
        subtitle="medshelf add",
        subtitle_align="right",
    )


def build_medication_card(medication: Medication) -> Panel:
    lines: list[Text] = [
        Text(image_for(medication), style="magenta", overflow="ellipsis", no_wrap=True),
        Text(medication.name, style="bold"),
    ]
    if medication.description:
        lines.append(Text(medication.description, style="dim"))
    price = format_price(medication)
    if price is not None:
        lines.append(Text(price, style="bold green"))

    return Panel(
        Group(*lines),
        title=Text(medication.id, style="cyan"),
        title_align="left",
        border_style="white",
        width=CARD_WIDTH,
    )


def build_medications_grid(medications: Iterable[Medication]) -> Columns:
    cards: list[Panel] = [build_add_card()]
    cards.extend(build_medication_card(m) for m in medications)
    return Columns(cards, equal=True, expand=False)


def build_medications_table(medications: Iterable[Medication]) -> Table:
    table = Table(title="Medications")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Description", style="dim")
    table.add_column("Price", style="green", justify="right")
    table.add_column("Image", style="magenta")
    for m in medications:
        # Text: los datos del servidor no se interpretan como markup.
        table.add_row(
            Text(m.id),
            Text(m.name),
            Text(m.description),
            Text(format_price(m) or ""),
            Text(image_for(m)),
        )
    return table


def print_notice(console: Console, notice: Notice) -> None:
    style = "green" if notice.level is NoticeLevel.SUCCESS else "red"
    console.print(Text.assemble((f"{notice.title}:", style), " ", notice.message))
