"""Domain models (Pydantic v2).

These models describe *what* a phrasebook is, not *how* it is loaded. All of
them are frozen: once a phrasebook is parsed it is never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

SearchPath = tuple[str, ...]
"""Ordered dictionary names consulted by a single fetch, most specific first."""


class Dictionary(BaseModel):
    """A named keyword -> value mapping for one platform.

    A dictionary without entries is an alias: everything it answers comes
    from the dictionaries after it in the search path.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Dictionary (platform) name, e.g. 'IOS' or 'FWSM3'.",
    )
    entries: dict[str, str] = Field(
        default_factory=dict,
        description="Keyword -> value map (commands, prompts, error regexes).",
    )

    def __contains__(self, keyword: object) -> bool:
        return keyword in self.entries

    def get(self, keyword: str) -> str | None:
        return self.entries.get(keyword)

    def keywords(self) -> list[str]:
        return sorted(self.entries)

    @property
    def is_alias(self) -> bool:
        return not self.entries


class Family(BaseModel):
    """An inheritance lineage of platforms, most specific first.

    Example: ``Family(members=("FWSM3", "FWSM", "PIXOS"))``.
    """

    model_config = ConfigDict(frozen=True)

    members: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Platform names from most specific to most general.",
    )

    @field_validator("members")
    @classmethod
    def _check_members(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not name for name in value):
            raise ValueError("family members must be non-empty names")
        seen: set[str] = set()
        for name in value:
            if name in seen:
                raise ValueError(f"platform '{name}' appears twice in the same family")
            seen.add(name)
        return value

    def __contains__(self, platform: object) -> bool:
        return platform in self.members

    def suffix_from(self, platform: str) -> SearchPath:
        """Return the members starting at ``platform``, inclusive."""

        return self.members[self.members.index(platform):]


class PhrasebookData(BaseModel):
    """A fully parsed phrasebook: every dictionary keyed by its name."""

    model_config = ConfigDict(frozen=True)

    dictionaries: dict[str, Dictionary] = Field(
        default_factory=dict,
        description="Dictionaries keyed by name.",
    )
    source: str | None = Field(
        default=None,
        description="Human readable description of where the data came from.",
    )

    @model_validator(mode="after")
    def _check_names(self) -> "PhrasebookData":
        for key, dictionary in self.dictionaries.items():
            if key != dictionary.name:
                raise ValueError(
                    f"dictionary stored under '{key}' is named '{dictionary.name}'"
                )
        return self


class ResolvedEntry(BaseModel):
    """One keyword as seen through a search path."""

    keyword: str = Field(..., min_length=1, description="Keyword looked up.")
    value: str = Field(..., description="Value returned by fetch.")
    dictionary: str = Field(..., min_length=1, description="Dictionary that answered.")


class ResolvedView(BaseModel):
    """Effective contents of a phrasebook for one search path."""

    search_path: list[str] = Field(
        ...,
        min_length=1,
        description="Dictionaries consulted, most specific first.",
    )
    source: str | None = Field(
        default=None,
        description="Where the dictionaries were loaded from.",
    )
    entries: list[ResolvedEntry] = Field(
        default_factory=list,
        description="Visible keywords, sorted by keyword.",
    )
