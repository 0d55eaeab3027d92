"""Exception types raised by the seb package."""

from __future__ import annotations


class SebError(Exception):
    """Base class for every error raised by seb."""


class FormatError(SebError):
    """Raw text could not be deserialized into a bibliography."""


class StorageError(SebError):
    """Reading or writing a bibliography file failed."""


class UnresolvedEntryError(SebError, ValueError):
    """An entry was finalized while required fields were still missing."""

    def __init__(self, cite: str, missing: list[str]):
        self.cite = cite
        self.missing = list(missing)
        super().__init__(
            f"entry '{cite}' is missing required field(s): {', '.join(self.missing)}"
        )


class DuplicateEntryError(SebError):
    """The bibliography already holds an entry with the same identifier."""

    def __init__(self, field: str, value: str, cite: str):
        self.field = field
        self.value = value
        self.cite = cite
        super().__init__(
            f"an entry with {field} '{value}' already exists with cite key '{cite}'"
        )
