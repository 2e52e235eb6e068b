"""YAML phrasebook loading.

Supported shape::

    ---
    0000default :          # ignored, keeps the document a mapping
    IOS :
        paging : 'terminal length'
    Aironet :              # alias: no own entries

The whole document is parsed and validated up front; lookups never touch the
underlying file or stream.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Hashable, Mapping
from pathlib import Path
from typing import IO, Any, Union

import yaml
from pydantic import ValidationError

from core.domain.models import Dictionary, PhrasebookData
from core.errors import MalformedSourceError

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY = "0000default"
_MERGE_TAG = "tag:yaml.org,2002:merge"

PhrasebookSource = Union[str, os.PathLike, IO[str], IO[bytes], Mapping[str, Any]]


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that refuses duplicate keys inside one mapping."""


def _construct_unique_mapping(loader: _UniqueKeyLoader, node: yaml.MappingNode, deep: bool = False) -> dict:
    # only the mapping's own keys; keys pulled in by "<<" may be overridden
    seen: set[Any] = set()
    for key_node, _ in node.value:
        if key_node.tag == _MERGE_TAG:
            continue
        key = loader.construct_object(key_node, deep=deep)
        if not isinstance(key, Hashable):
            continue
        if key in seen:
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                f"found duplicate key {key!r}",
                key_node.start_mark,
            )
        seen.add(key)
    return loader.construct_mapping(node, deep=deep)


_UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_unique_mapping,
)


def _as_text(value: Any, *, what: str, source: str | None) -> str:
    # bool is an int subclass; YAML 'yes'/'no' should not silently become "True"
    if isinstance(value, bool) or value is None:
        raise MalformedSourceError(f"{what} must be a string, got {value!r}", source=source)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise MalformedSourceError(
        f"{what} must be a string, got {type(value).__name__}",
        source=source,
    )


def _parse_entries(name: str, raw: Any, *, source: str | None) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise MalformedSourceError(
            f"dictionary '{name}' must be a mapping of keywords, got {type(raw).__name__}",
            source=source,
        )

    entries: dict[str, str] = {}
    for raw_key, raw_value in raw.items():
        keyword = _as_text(raw_key, what=f"keyword in dictionary '{name}'", source=source)
        if keyword in entries:
            raise MalformedSourceError(
                f"duplicate keyword '{keyword}' in dictionary '{name}'",
                source=source,
            )
        entries[keyword] = _as_text(
            raw_value,
            what=f"value of '{name}.{keyword}'",
            source=source,
        )
    return entries


def parse_phrasebook(document: Any, *, source: str | None = None) -> PhrasebookData:
    """Validate an already-decoded document and build `PhrasebookData`."""

    if document is None:
        raise MalformedSourceError("phrasebook is empty", source=source)
    if not isinstance(document, Mapping):
        raise MalformedSourceError(
            f"top level must be a mapping of dictionary names, got {type(document).__name__}",
            source=source,
        )

    dictionaries: dict[str, Dictionary] = {}
    for raw_name, raw_entries in document.items():
        name = _as_text(raw_name, what="dictionary name", source=source)
        if name == DEFAULT_DICTIONARY:
            continue
        if name in dictionaries:
            raise MalformedSourceError(f"duplicate dictionary '{name}'", source=source)
        entries = _parse_entries(name, raw_entries, source=source)
        try:
            dictionaries[name] = Dictionary(name=name, entries=entries)
        except ValidationError as exc:
            raise MalformedSourceError(str(exc), source=source) from exc

    if not dictionaries:
        raise MalformedSourceError("phrasebook defines no dictionaries", source=source)

    data = PhrasebookData(dictionaries=dictionaries, source=source)
    logger.debug("Parsed %d dictionaries from %s", len(dictionaries), source or "<unknown>")
    return data


def loads_phrasebook(text: str | bytes, *, source: str | None = "<string>") -> PhrasebookData:
    """Parse a YAML phrasebook from text."""

    try:
        document = yaml.load(text, Loader=_UniqueKeyLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        raise MalformedSourceError(f"invalid YAML: {exc}", source=source) from exc
    return parse_phrasebook(document, source=source)


def load_phrasebook(source: PhrasebookSource) -> PhrasebookData:
    """Load a phrasebook from a path, an open handle or a decoded mapping.

    Paths are opened and closed here. Handles belong to the caller: they are
    read to the end but left open.
    """

    if isinstance(source, Mapping):
        return parse_phrasebook(source, source="<mapping>")

    if hasattr(source, "read"):
        name = str(getattr(source, "name", "<stream>"))
        return loads_phrasebook(source.read(), source=name)

    path = Path(source)
    try:
        with path.open("r", encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise MalformedSourceError(f"cannot read phrasebook: {exc}", source=str(path)) from exc
    logger.debug("Read phrasebook file %s", path)
    return loads_phrasebook(text, source=str(path))
