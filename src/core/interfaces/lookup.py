"""Phrase lookup contract.

Structural (duck typing) so a session driver can be handed a `Phrasebook`
or any test double with the same methods.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class PhraseLookup(Protocol):
    """Minimal contract for something that answers keyword fetches."""

    @property
    def search_path(self) -> tuple[str, ...]:
        """Dictionaries consulted, in order."""

        ...

    def fetch(self, keyword: str, params: Mapping[str, Any] | None = None) -> str:
        """Return the value for ``keyword`` or raise `NoMappingError`."""

        ...

    def resolve_all(self) -> dict[str, tuple[str, str]]:
        """Every visible keyword mapped to ``(dictionary, value)``."""

        ...
