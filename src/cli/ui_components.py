"""Rich UI components for the CLI.

Keeps table/panel layout out of the command functions. Values are wrapped in
`Text` so regexes such as ``[#>]`` are never read as Rich markup.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import ResolvedView
from core.services.family_resolver import FamilyResolver


def build_view_table(view: ResolvedView) -> Table:
    """Table with every visible keyword, its value and the answering dictionary."""

    table = Table(title=" > ".join(view.search_path))
    table.add_column("Keyword", style="cyan", no_wrap=True)
    table.add_column("Value", style="white", overflow="fold")
    table.add_column("Dictionary", style="magenta", no_wrap=True)
    for entry in view.entries:
        table.add_row(Text(entry.keyword), Text(entry.value), Text(entry.dictionary))
    return table


def build_families_table(resolver: FamilyResolver) -> Table:
    table = Table(title="Platform families")
    table.add_column("Platform", style="cyan", no_wrap=True)
    table.add_column("Search path", style="white")
    for family in resolver.families:
        for platform in family.members:
            path = resolver.resolve_search_path(platform)
            table.add_row(Text(platform), Text(" > ".join(path)))
    return table


def print_error(console: Console, message: str) -> None:
    console.print(Text.assemble(("Error: ", "bold red"), message))
