"""Phrasebook exceptions.

The hierarchy separates "bad request" (missing/unknown platform), "no such
entry" (keyword miss) and "bad data" (load-time) so callers can react
differently to each.
"""

from __future__ import annotations


class PhrasebookError(Exception):
    """Base exception for phrasebook errors."""


class MissingArgumentError(PhrasebookError):
    """Raised when the required ``platform`` argument is not supplied."""

    def __init__(self, argument: str = "platform") -> None:
        self.argument = argument
        super().__init__(f"missing argument to Phrasebook.new: {argument}")


class UnknownPlatformError(PhrasebookError):
    """Raised when a platform is not declared in any family."""

    def __init__(self, platform: object) -> None:
        self.platform = platform
        super().__init__(f"unknown platform: {platform}, could not find dictionary")


class NoMappingError(PhrasebookError):
    """Raised when a keyword is not found anywhere along the search path."""

    def __init__(self, keyword: str, search_path: tuple[str, ...] = ()) -> None:
        self.keyword = keyword
        self.search_path = search_path
        where = f" in dictionaries {', '.join(search_path)}" if search_path else ""
        super().__init__(f"no mapping for keyword '{keyword}'{where}")


class MalformedSourceError(PhrasebookError):
    """Raised when phrasebook data fails structural validation at load time."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


__all__ = [
    "PhrasebookError",
    "MissingArgumentError",
    "UnknownPlatformError",
    "NoMappingError",
    "MalformedSourceError",
]
