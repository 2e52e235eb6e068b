"""net-phrasebook command line.

Thin layer over `core.services.phrasebook`: argument parsing, settings
defaults, rendering, and mapping of phrasebook errors to exit codes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Pattern

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import build_resolved_view, export_view_json
from cli.doctor import app as doctor_app
from cli.ui_components import build_families_table, build_view_table, print_error
from core.config import AppSettings
from core.errors import MalformedSourceError, NoMappingError, PhrasebookError
from core.services.family_resolver import FamilyResolver
from core.services.phrasebook import Phrasebook, compile_delimiters

app = typer.Typer(no_args_is_help=True, help="Network appliance command-line phrasebook.")
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

EXIT_BAD_REQUEST = 1
EXIT_NO_MAPPING = 2
EXIT_BAD_DATA = 3


def _exit_code(exc: PhrasebookError) -> int:
    if isinstance(exc, NoMappingError):
        return EXIT_NO_MAPPING
    if isinstance(exc, MalformedSourceError):
        return EXIT_BAD_DATA
    # MissingArgumentError, UnknownPlatformError
    return EXIT_BAD_REQUEST


def _fail(exc: PhrasebookError) -> typer.Exit:
    print_error(_err_console, str(exc))
    return typer.Exit(code=_exit_code(exc))


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _parse_params(raw: list[str] | None) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in raw or []:
        if "=" not in item:
            raise typer.BadParameter(f"expected NAME=VALUE, got '{item}'", param_hint="--param")
        name, value = item.split("=", 1)
        params[name.strip()] = value
    return params


def _open_phrasebook(
    settings: AppSettings,
    platforms: list[str] | None,
    source: Path | None,
    delimiters: Pattern[str] | None = None,
) -> tuple[Phrasebook, str | None]:
    source = source or settings.phrasebook_path
    if not platforms and settings.default_platform:
        platforms = [settings.default_platform]

    platform: str | list[str] | None = None
    if platforms:
        platform = platforms[0] if len(platforms) == 1 else list(platforms)

    phrasebook = Phrasebook.new(platform=platform, source=source, delimiters=delimiters)
    return phrasebook, phrasebook.store.source


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    settings = AppSettings()
    _configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def fetch(
    keyword: str = typer.Argument(..., help="Keyword to look up (e.g. paging)."),
    platform: list[str] | None = typer.Option(
        None, "--platform", "-p", help="Platform, or ordered dictionaries with --source (repeatable)."
    ),
    source: Path | None = typer.Option(None, "--source", "-s", help="External YAML phrasebook."),
    param: list[str] | None = typer.Option(None, "--param", help="Placeholder value NAME=VALUE (repeatable)."),
    delimiters: str | None = typer.Option(None, "--delimiters", help="Placeholder regex with one group."),
) -> None:
    """Print the value of KEYWORD for a platform."""

    settings = AppSettings()
    params = _parse_params(param)
    hint = "--delimiters"
    if params and delimiters is None:
        delimiters = settings.placeholder_pattern
        hint = "NET_PHRASEBOOK_PLACEHOLDER_PATTERN"
    try:
        pattern = compile_delimiters(delimiters)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=hint) from exc

    try:
        phrasebook, _ = _open_phrasebook(settings, platform, source, pattern)
        value = phrasebook.fetch(keyword, params or None)
    except PhrasebookError as exc:
        raise _fail(exc) from exc

    typer.echo(value)


@app.command()
def path(platform: str = typer.Argument(..., help="Built-in platform name.")) -> None:
    """Print the built-in search path for PLATFORM."""

    try:
        search_path = FamilyResolver().resolve_search_path(platform)
    except PhrasebookError as exc:
        raise _fail(exc) from exc

    typer.echo(" ".join(search_path))


@app.command()
def platforms() -> None:
    """List the built-in platform families."""

    _console.print(build_families_table(FamilyResolver()))


@app.command()
def show(
    platform: list[str] | None = typer.Option(None, "--platform", "-p", help="Platform (repeatable with --source)."),
    source: Path | None = typer.Option(None, "--source", "-s", help="External YAML phrasebook."),
) -> None:
    """Show every keyword visible from a platform."""

    settings = AppSettings()
    try:
        phrasebook, origin = _open_phrasebook(settings, platform, source)
    except PhrasebookError as exc:
        raise _fail(exc) from exc

    _console.print(build_view_table(build_resolved_view(phrasebook, source=origin)))


@app.command()
def export(
    output: Path = typer.Argument(..., help="Destination JSON file."),
    platform: list[str] | None = typer.Option(None, "--platform", "-p", help="Platform (repeatable with --source)."),
    source: Path | None = typer.Option(None, "--source", "-s", help="External YAML phrasebook."),
) -> None:
    """Write the resolved view of a platform as JSON."""

    settings = AppSettings()
    try:
        phrasebook, origin = _open_phrasebook(settings, platform, source)
    except PhrasebookError as exc:
        raise _fail(exc) from exc

    out = export_view_json(view=build_resolved_view(phrasebook, source=origin), output_path=output)
    _console.print(f"[green]Saved:[/green] {out}")


def run() -> None:
    app()
