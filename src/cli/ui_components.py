"""CLI UI components (Rich).

Why separate components:
- Avoids mixing command logic with visual details.
- Lets several commands reuse tables/panels.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import PersonInfo
from core.domain.style import AggregationStyle


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Skipped by commands in non-interactive modes (JSON output).
    """

    title = Text("SWAPI-AGGREGATE", style="bold cyan")
    subtitle = Text("Person • Homeworld • Films", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def configure_logging(level: str, *, console: Console | None = None) -> None:
    """Route stdlib logging through Rich. Only the CLI calls this."""

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def build_person_panel(person: PersonInfo, *, style: AggregationStyle | None = None) -> Panel:
    """Panel with the person's scalar fields."""

    body = Text()
    body.append("Height: ", style="bold")
    body.append(f"{person.height} cm\n" if person.height is not None else "unknown\n")
    body.append("Gender: ", style="bold")
    body.append(f"{person.gender}\n")
    body.append("Homeworld: ", style="bold")
    body.append(person.homeworld)
    if style is not None:
        body.append(f"\n\nStyle: {style.label()}", style="dim")
    return Panel(body, title=Text(person.name, style="bold yellow"), border_style="yellow")


def build_films_table(person: PersonInfo) -> Table:
    """Films in aggregate order."""

    table = Table(title="Films")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Director", style="white")
    table.add_column("Release date", style="magenta", no_wrap=True)
    for index, film in enumerate(person.films, start=1):
        table.add_row(str(index), film.title, film.director, film.release_date)
    return table


def build_comparison_table(results: dict[AggregationStyle, PersonInfo]) -> Table:
    """One row per style, flagged against the first result."""

    table = Table(title="Style comparison")
    table.add_column("Style", style="bright_green", no_wrap=True)
    table.add_column("Films", justify="right")
    table.add_column("Matches", style="white")
    reference = next(iter(results.values()), None)
    for style, person in results.items():
        same = person == reference
        table.add_row(style.label(), str(len(person.films)), "yes" if same else "[red]no[/red]")
    return table
