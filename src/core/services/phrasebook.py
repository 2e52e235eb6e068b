"""Phrasebook sessions.

A `Phrasebook` binds one search path to a `DictionaryStore` and answers
keyword fetches. It owns neither: the search path comes from a
`FamilyResolver` (built-in mode) or straight from the caller (external mode),
and the store is shared.

Usage::

    pb = Phrasebook.new(platform="FWSM3")
    pb.fetch("paging")            # 'terminal pager lines'

    pb = Phrasebook.new(platform=["MyOS2", "MyOS"], source="my.yml")
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Pattern, Sequence, Union

from adapters.phrasebook_source import PhrasebookSource
from core.domain.models import SearchPath
from core.errors import MissingArgumentError, UnknownPlatformError
from core.services.dictionary_store import DictionaryStore, get_builtin_store
from core.services.family_resolver import FamilyResolver

logger = logging.getLogger(__name__)

Platform = Union[str, Sequence[str]]


def _is_missing(platform: Platform | None) -> bool:
    if platform is None:
        return True
    if isinstance(platform, str):
        return not platform.strip()
    if not isinstance(platform, Sequence):
        raise UnknownPlatformError(platform)
    return len(platform) == 0


def compile_delimiters(delimiters: str | Pattern[str] | None) -> Pattern[str] | None:
    """Compile a placeholder regex; it must capture the placeholder name.

    Raises:
        ValueError: the pattern does not compile or has no group.
    """

    if delimiters is None:
        return None
    if isinstance(delimiters, str):
        try:
            pattern = re.compile(delimiters)
        except re.error as exc:
            raise ValueError(f"invalid delimiters {delimiters!r}: {exc}") from exc
    else:
        pattern = delimiters
    if pattern.groups < 1:
        raise ValueError("delimiters must capture the placeholder name in a group")
    return pattern


class Phrasebook:
    """Keyword lookups for one platform (or one explicit list of dictionaries)."""

    def __init__(
        self,
        search_path: Sequence[str],
        store: DictionaryStore,
        *,
        delimiters: str | Pattern[str] | None = None,
    ) -> None:
        if not search_path:
            raise MissingArgumentError()
        self._search_path: SearchPath = tuple(search_path)
        self._store = store
        self._delimiters = compile_delimiters(delimiters)

    @classmethod
    def new(
        cls,
        platform: Platform | None = None,
        source: PhrasebookSource | DictionaryStore | None = None,
        *,
        resolver: FamilyResolver | None = None,
        store: DictionaryStore | None = None,
        delimiters: str | Pattern[str] | None = None,
    ) -> "Phrasebook":
        """Create a phrasebook session.

        Without ``source`` the built-in families and dictionaries are used
        (or ``resolver``/``store`` when given) and ``platform`` must be a
        single name. With ``source`` the caller's data is loaded and
        ``platform`` (a name or an ordered list of names) is used verbatim
        as the search path.

        Raises:
            MissingArgumentError: ``platform`` was not supplied.
            UnknownPlatformError: built-in mode and ``platform`` is in no family,
                or ``platform`` (or one of its names) is not a string.
            MalformedSourceError: ``source`` could not be loaded.
            ValueError: ``delimiters`` is not a usable placeholder regex.
        """

        if _is_missing(platform):
            raise MissingArgumentError("platform")

        if source is not None:
            if isinstance(platform, str):
                search_path: SearchPath = (platform,)
            else:
                search_path = tuple(platform)
                for name in search_path:
                    if not isinstance(name, str):
                        raise UnknownPlatformError(name)
                    if not name.strip():
                        raise MissingArgumentError("platform")
            if not isinstance(source, DictionaryStore):
                source = DictionaryStore.from_source(source)
            logger.debug("External phrasebook %s, search path %s", source.source, search_path)
            return cls(search_path, source, delimiters=delimiters)

        if not isinstance(platform, str):
            # lists of dictionaries only make sense with the caller's own data
            raise UnknownPlatformError(list(platform))

        resolver = resolver or FamilyResolver()
        search_path = resolver.resolve_search_path(platform)
        return cls(search_path, store or get_builtin_store(), delimiters=delimiters)

    load = new

    @property
    def search_path(self) -> SearchPath:
        return self._search_path

    @property
    def store(self) -> DictionaryStore:
        return self._store

    def _substitute(self, value: str, params: Mapping[str, Any]) -> str:
        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in params:
                return str(params[name])
            return match.group(0)

        return self._delimiters.sub(replace, value)

    def fetch(self, keyword: str, params: Mapping[str, Any] | None = None) -> str:
        """Return the value for ``keyword``.

        When the phrasebook has ``delimiters`` and ``params`` are given,
        placeholders found in the value are replaced by their parameter.

        Raises:
            NoMappingError: no dictionary along the search path has ``keyword``.
        """

        value = self._store.fetch(self._search_path, keyword)
        if params and self._delimiters is not None:
            value = self._substitute(value, params)
        return value

    def lookup(self, keyword: str) -> tuple[str, str]:
        """Like `fetch` but also report which dictionary answered."""

        return self._store.lookup(self._search_path, keyword)

    def keywords(self) -> list[str]:
        return self._store.keywords(self._search_path)

    def resolve_all(self) -> dict[str, tuple[str, str]]:
        return self._store.resolve_all(self._search_path)

    def __repr__(self) -> str:
        return f"Phrasebook(search_path={list(self._search_path)!r})"
