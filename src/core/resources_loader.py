"""Bundled resources.

Lives in `core/` because the built-in phrasebook is part of the library, not
of any adapter: the YAML ships inside the package and is read through
`importlib.resources`.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

from adapters.phrasebook_source import loads_phrasebook
from core.domain.models import PhrasebookData

logger = logging.getLogger(__name__)

BUILTIN_PHRASEBOOK = "phrasebook.yml"


def get_builtin_phrasebook_path() -> Path:
    """Absolute path of the bundled YAML phrasebook."""

    return Path(str(resources.files("core.data") / BUILTIN_PHRASEBOOK))


def load_builtin_phrasebook() -> PhrasebookData:
    """Parse the bundled phrasebook.

    Each call parses again; use `core.services.dictionary_store.get_builtin_store`
    for the shared, parse-once instance.
    """

    text = (resources.files("core.data") / BUILTIN_PHRASEBOOK).read_text(encoding="utf-8")
    logger.debug("Parsing built-in phrasebook %s", BUILTIN_PHRASEBOOK)
    return loads_phrasebook(text, source=f"<builtin:{BUILTIN_PHRASEBOOK}>")
