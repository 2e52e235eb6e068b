"""JSON export of a resolved phrasebook view.

Lets other tooling (session drivers in other languages, CI checks) consume
the effective dictionary without re-implementing the fallback rules.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ResolvedEntry, ResolvedView
from core.interfaces.lookup import PhraseLookup


def build_resolved_view(lookup: PhraseLookup, *, source: str | None = None) -> ResolvedView:
    """Collect every visible keyword of ``lookup`` into a `ResolvedView`."""

    entries = [
        ResolvedEntry(keyword=keyword, value=value, dictionary=dictionary)
        for keyword, (dictionary, value) in lookup.resolve_all().items()
    ]
    return ResolvedView(search_path=list(lookup.search_path), source=source, entries=entries)


def export_view_json(*, view: ResolvedView, output_path: Path) -> Path:
    """Export a `ResolvedView` as UTF-8 JSON with stable formatting."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = view.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
