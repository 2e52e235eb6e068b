"""Dictionary store and first-match lookups.

The store is read-only once built. A name in a search path that has no
dictionary in the store is skipped, exactly like an empty (alias) dictionary.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Mapping

from adapters.phrasebook_source import PhrasebookSource, load_phrasebook, parse_phrasebook
from core.domain.models import Dictionary, PhrasebookData
from core.errors import NoMappingError
from core.resources_loader import load_builtin_phrasebook

logger = logging.getLogger(__name__)


class DictionaryStore:
    """Named dictionaries with search-path lookups."""

    def __init__(self, data: PhrasebookData | Mapping[str, Mapping[str, str] | None]) -> None:
        if not isinstance(data, PhrasebookData):
            data = parse_phrasebook(data, source="<mapping>")
        self._data = data

    @classmethod
    def from_source(cls, source: PhrasebookSource) -> "DictionaryStore":
        """Build a store from an external phrasebook (path, handle or mapping)."""

        return cls(load_phrasebook(source))

    @property
    def source(self) -> str | None:
        return self._data.source

    def names(self) -> list[str]:
        return list(self._data.dictionaries)

    def __contains__(self, name: object) -> bool:
        return name in self._data.dictionaries

    def get(self, name: str) -> Dictionary | None:
        return self._data.dictionaries.get(name)

    def _dictionaries(self, search_path: Iterable[str]) -> Iterable[Dictionary]:
        for name in search_path:
            dictionary = self._data.dictionaries.get(name)
            if dictionary is not None:
                yield dictionary

    def lookup(self, search_path: Iterable[str], keyword: str) -> tuple[str, str]:
        """Return ``(dictionary_name, value)`` for the first dictionary with ``keyword``."""

        search_path = tuple(search_path)
        for dictionary in self._dictionaries(search_path):
            value = dictionary.get(keyword)
            if value is not None:
                logger.debug("Fetched %r from %s", keyword, dictionary.name)
                return dictionary.name, value
        logger.debug("No mapping for %r in %s", keyword, search_path)
        raise NoMappingError(keyword, search_path)

    def fetch(self, search_path: Iterable[str], keyword: str) -> str:
        """Return the value of ``keyword`` from the first dictionary that has it.

        Raises:
            NoMappingError: if no dictionary along ``search_path`` has ``keyword``.
        """

        return self.lookup(search_path, keyword)[1]

    def resolve_all(self, search_path: Iterable[str]) -> dict[str, tuple[str, str]]:
        """Effective view of every visible keyword: ``keyword -> (dictionary, value)``."""

        view: dict[str, tuple[str, str]] = {}
        for dictionary in self._dictionaries(search_path):
            for keyword, value in dictionary.entries.items():
                view.setdefault(keyword, (dictionary.name, value))
        return dict(sorted(view.items()))

    def keywords(self, search_path: Iterable[str]) -> list[str]:
        return list(self.resolve_all(search_path))


_builtin_lock = threading.Lock()
_builtin_store: DictionaryStore | None = None


def get_builtin_store() -> DictionaryStore:
    """Return the process-wide store built from the bundled phrasebook.

    The bundled YAML is parsed at most once; concurrent first callers block
    until the single load has finished.
    """

    global _builtin_store
    if _builtin_store is None:
        with _builtin_lock:
            if _builtin_store is None:
                _builtin_store = DictionaryStore(load_builtin_phrasebook())
                logger.debug("Built-in store loaded: %s", ", ".join(_builtin_store.names()))
    return _builtin_store
