"""Doctor command for phrasebook diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.config import AppSettings, get_user_env_file, read_user_settings, write_user_settings
from core.errors import PhrasebookError
from core.resources_loader import get_builtin_phrasebook_path
from core.services.dictionary_store import DictionaryStore, get_builtin_store
from core.services.family_resolver import FamilyResolver
from core.services.phrasebook import Phrasebook

app = typer.Typer(no_args_is_help=True, help="Phrasebook diagnostics and configuration checks.")

_console = Console()


def _check_builtin() -> tuple[bool, str]:
    try:
        store = get_builtin_store()
        resolver = FamilyResolver()
    except PhrasebookError as exc:
        return False, str(exc)

    missing = [name for name in resolver.platforms() if name not in store]
    if missing:
        return False, f"families reference unknown dictionaries: {', '.join(missing)}"
    return True, f"{len(store.names())} dictionaries, {len(resolver.families)} families"


def _check_external(path: Path) -> tuple[bool, str]:
    try:
        store = DictionaryStore.from_source(path)
    except PhrasebookError as exc:
        return False, str(exc)
    return True, f"{len(store.names())} dictionaries"


def _check_default_platform(settings: AppSettings) -> tuple[bool, str]:
    try:
        phrasebook = Phrasebook.new(
            platform=settings.default_platform,
            source=settings.phrasebook_path,
        )
    except PhrasebookError as exc:
        return False, str(exc)
    return True, " > ".join(phrasebook.search_path)


@app.command()
def run() -> None:
    """Validate the built-in and configured phrasebooks."""

    settings = AppSettings()

    table = Table(title="net-phrasebook Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    stored = read_user_settings()
    table.add_row(
        "User settings",
        "OK" if stored else "OPTIONAL",
        Text(f"{get_user_env_file()}: {', '.join(sorted(stored)) or 'none'}"),
    )

    ok_builtin, detail = _check_builtin()
    table.add_row("Built-in phrasebook", "OK" if ok_builtin else "FAIL", Text(detail))
    table.add_row("Built-in file", "OK", Text(str(get_builtin_phrasebook_path())))

    ok_external = True
    if settings.phrasebook_path is None:
        table.add_row("External phrasebook", "OPTIONAL", "Not configured -> built-in data")
    else:
        ok_external, detail = _check_external(settings.phrasebook_path)
        table.add_row("External phrasebook", "OK" if ok_external else "FAIL", Text(detail))

    ok_default = True
    if settings.default_platform is None:
        table.add_row("Default platform", "OPTIONAL", "Not configured -> --platform required")
    else:
        ok_default, detail = _check_default_platform(settings)
        table.add_row("Default platform", "OK" if ok_default else "FAIL", Text(detail))

    _console.print(table)

    if not (ok_builtin and ok_external and ok_default):
        raise typer.Exit(code=1)


@app.command(name="set-default")
def set_default(
    platform: str | None = typer.Option(None, "--platform", "-p", help="Default platform."),
    phrasebook: Path | None = typer.Option(None, "--phrasebook", help="Default external YAML phrasebook."),
    clear: bool = typer.Option(False, "--clear", help="Remove the stored defaults."),
) -> None:
    """Store (or clear) defaults in the user config .env."""

    if clear:
        env_path = write_user_settings(default_platform=None, phrasebook_path=None)
        _console.print(f"[green]Cleared defaults in:[/green] {env_path}")
        return

    if platform is None and phrasebook is None:
        raise typer.BadParameter("give --platform and/or --phrasebook, or --clear")

    values: dict[str, str | Path] = {}
    if platform is not None:
        values["default_platform"] = platform
    if phrasebook is not None:
        phrasebook = phrasebook.expanduser().resolve()
        try:
            DictionaryStore.from_source(phrasebook)
        except PhrasebookError as exc:
            raise typer.BadParameter(str(exc), param_hint="--phrasebook") from exc
        values["phrasebook_path"] = phrasebook

    env_path = write_user_settings(**values)
    _console.print(f"[green]Saved defaults to:[/green] {env_path}")
