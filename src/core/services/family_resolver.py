"""Platform families and search-path resolution.

A family lists platforms from most specific to most general. Resolving a
platform returns the tail of its family starting at that platform, which is
the order dictionaries are consulted in.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from pydantic import ValidationError

from core.domain.models import Family, SearchPath
from core.errors import MalformedSourceError, UnknownPlatformError

logger = logging.getLogger(__name__)

BUILTIN_FAMILIES: tuple[tuple[str, ...], ...] = (
    ("FWSM3", "FWSM", "PIXOS"),
    ("Aironet", "IOS"),
)


def _build_families(table: Iterable[Sequence[str] | Family]) -> tuple[Family, ...]:
    families: list[Family] = []
    owner: dict[str, int] = {}
    for index, entry in enumerate(table):
        if isinstance(entry, Family):
            family = entry
        elif isinstance(entry, str):
            raise MalformedSourceError(f"family #{index} must be a list of names, got '{entry}'")
        else:
            try:
                family = Family(members=tuple(entry))
            except ValidationError as exc:
                raise MalformedSourceError(f"family #{index} is invalid: {exc}") from exc

        for platform in family.members:
            if platform in owner:
                raise MalformedSourceError(
                    f"platform '{platform}' is declared in family #{owner[platform]} "
                    f"and family #{index}"
                )
            owner[platform] = index
        families.append(family)
    return tuple(families)


class FamilyResolver:
    """Resolves a platform name to its search path.

    The family table is validated once, at construction: families must be
    non-empty, must not repeat a member and must be disjoint.
    """

    def __init__(self, families: Iterable[Sequence[str] | Family] = BUILTIN_FAMILIES) -> None:
        self._families = _build_families(families)

    @property
    def families(self) -> tuple[Family, ...]:
        return self._families

    def platforms(self) -> list[str]:
        """Every known platform, in declaration order."""

        return [name for family in self._families for name in family.members]

    def __contains__(self, platform: object) -> bool:
        return any(platform in family for family in self._families)

    def resolve_search_path(self, platform: str) -> SearchPath:
        """Return the search path for ``platform``.

        Raises:
            UnknownPlatformError: if no family declares ``platform``.
        """

        for family in self._families:
            if platform in family:
                path = family.suffix_from(platform)
                logger.debug("Resolved %s -> %s", platform, " > ".join(path))
                return path
        raise UnknownPlatformError(platform)
