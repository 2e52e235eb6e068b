from adapters.phrasebook_source.loader import (
    DEFAULT_DICTIONARY,
    PhrasebookSource,
    load_phrasebook,
    loads_phrasebook,
    parse_phrasebook,
)

__all__ = [
    "DEFAULT_DICTIONARY",
    "PhrasebookSource",
    "load_phrasebook",
    "loads_phrasebook",
    "parse_phrasebook",
]
