"""Command line entry point (Typer + Rich).

The CLI only parses options, prints and exits: the aggregation itself lives
in `core.services.aggregator`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from adapters.http_client import build_async_client
from adapters.json_exporter import export_person_json, render_person_json
from cli import doctor
from cli.ui_components import (
    build_comparison_table,
    build_films_table,
    build_person_panel,
    configure_logging,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import PersonInfo
from core.domain.style import AggregationStyle
from core.errors import FetchError
from core.services.aggregator import aggregate_person, compare_styles

app = typer.Typer(
    no_args_is_help=True,
    help="Fetch a SWAPI person with homeworld and films as one object.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _load_settings(**overrides: Any) -> AppSettings:
    return AppSettings(**{k: v for k, v in overrides.items() if v is not None})


async def _fetch(settings: AppSettings, style: AggregationStyle) -> PersonInfo:
    async with build_async_client(settings) as client:
        return await aggregate_person(settings=settings, style=style, client=client)


async def _compare(settings: AppSettings) -> dict[AggregationStyle, PersonInfo]:
    async with build_async_client(settings) as client:
        return await compare_styles(settings=settings, client=client)


def _fail(exc: FetchError) -> None:
    detail = f" ({exc.url})" if exc.url else ""
    _err_console.print(f"[red]Fetch failed{detail}:[/red] {exc}")
    raise typer.Exit(code=1)


@app.command()
def fetch(
    style: Optional[AggregationStyle] = typer.Option(
        None, "--style", "-s", case_sensitive=False, help="Aggregation style (default from settings)."
    ),
    person_id: Optional[int] = typer.Option(None, "--person-id", min=1, help="Root person id."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API base URL."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the JSON to this file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Fetch the person, its homeworld and films, and print the merged result."""

    settings = _load_settings(person_id=person_id, base_url=base_url)
    configure_logging("DEBUG" if verbose else settings.log_level, console=_err_console)
    chosen = style or settings.default_style

    try:
        person = asyncio.run(_fetch(settings, chosen))
    except FetchError as exc:
        _fail(exc)
        return

    if output is not None:
        export_person_json(person=person, output_path=output)

    if as_json:
        typer.echo(render_person_json(person))
        return

    print_banner(_console)
    _console.print(build_person_panel(person, style=chosen))
    _console.print(build_films_table(person))
    if output is not None:
        _console.print(f"[dim]JSON written to {output}[/dim]")


@app.command()
def compare(
    person_id: Optional[int] = typer.Option(None, "--person-id", min=1, help="Root person id."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API base URL."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Run every aggregation style and check that they agree."""

    settings = _load_settings(person_id=person_id, base_url=base_url)
    configure_logging("DEBUG" if verbose else settings.log_level, console=_err_console)

    try:
        results = asyncio.run(_compare(settings))
    except FetchError as exc:
        _fail(exc)
        return

    _console.print(build_comparison_table(results))
    reference = next(iter(results.values()))
    if any(person != reference for person in results.values()):
        _err_console.print("[red]Styles disagree.[/red]")
        raise typer.Exit(code=1)
    _console.print("[green]All styles produced the same result.[/green]")


def run() -> None:
    app()
