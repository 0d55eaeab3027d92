"""Bibliography entry model.

Entries are a closed set of kinds (:class:`EntryKind`).  Every kind fixes a
canonical, ordered list of required field names; any other field is stored
as an optional field, preserving insertion order.

Entries are built in two phases.  A :class:`Resolver` accumulates fields
without validating them; :meth:`Resolver.finalize` turns it into an
:class:`Entry` once every required field of the kind is present.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple

from .exceptions import UnresolvedEntryError
from .quoted import QuotedString

logger = logging.getLogger(__name__)


class EntryKind(Enum):
    """Category of a bibliography record.

    Each member's value is ``(keyword, required_fields)`` where ``keyword`` is
    the BibTeX entry type used when composing.
    """

    ARTICLE = ("article", ("author", "title", "journal", "year"))
    BOOK = ("book", ("author", "title", "publisher", "year"))
    BOOKLET = ("booklet", ("title",))
    BOOK_CHAPTER = ("inbook", ("author", "title", "chapter", "publisher", "year"))
    BOOK_PAGES = ("inbook", ("author", "title", "pages", "publisher", "year"))
    BOOK_SECTION = ("incollection", ("author", "title", "book_title", "publisher", "year"))
    IN_PROCEEDINGS = ("inproceedings", ("author", "title", "book_title", "year"))
    MANUAL = ("manual", ("title",))
    MASTER_THESIS = ("mastersthesis", ("author", "title", "school", "year"))
    PHD_THESIS = ("phdthesis", ("author", "title", "school", "year"))
    OTHER = ("misc", ())
    PROCEEDINGS = ("proceedings", ("title", "year"))
    TECH_REPORT = ("techreport", ("author", "title", "institution", "year"))
    UNPUBLISHED = ("unpublished", ("author", "title", "note"))

    def __init__(self, keyword: str, required: tuple[str, ...]):
        self.keyword = keyword
        self.required_fields = required

    def resolver(self, cite: str) -> "Resolver":
        """Return an empty :class:`Resolver` for this kind."""
        return Resolver(self, cite)


class Field(NamedTuple):
    """A ``(name, value)`` view of one field of an entry."""

    name: str
    value: QuotedString


def _coerce(value: QuotedString | str) -> QuotedString:
    if isinstance(value, QuotedString):
        return value
    return QuotedString(str(value))


@dataclass
class Entry:
    """A finalized bibliography entry.

    ``required`` holds exactly the required fields of ``kind``; ``optional``
    holds everything else in insertion order.  Construction fails with
    :class:`~seb.exceptions.UnresolvedEntryError` if a required field is
    missing, so an ``Entry`` is always complete.  Apart from
    :meth:`set_cite`, entries are treated as read-only.
    """

    kind: EntryKind
    cite: str
    required: dict[str, QuotedString]
    optional: dict[str, QuotedString] = field(default_factory=dict)

    def __post_init__(self):
        required = {k: _coerce(v) for k, v in self.required.items()}
        optional = {k: _coerce(v) for k, v in self.optional.items()}
        for name in list(required):
            if name not in self.kind.required_fields:
                optional[name] = required.pop(name)
        missing = [n for n in self.kind.required_fields if n not in required]
        if missing:
            raise UnresolvedEntryError(self.cite, missing)
        # canonical order for required fields
        self.required = {n: required[n] for n in self.kind.required_fields}
        self.optional = optional

    @classmethod
    def create(cls, kind: EntryKind, cite: str, **fields: QuotedString | str) -> "Entry":
        """Build an entry from keyword fields, splitting required and optional."""
        resolver = kind.resolver(cite)
        for name, value in fields.items():
            resolver.set_field(name, value)
        return resolver.finalize()

    def fields(self) -> list[Field]:
        """Required fields in canonical order followed by optional fields."""
        out = [Field(name, value) for name, value in self.required.items()]
        out.extend(Field(name, value) for name, value in self.optional.items())
        return out

    def get_field(self, name: str) -> QuotedString | None:
        if name in self.required:
            return self.required[name]
        return self.optional.get(name)

    def set_cite(self, cite: str) -> None:
        self.cite = cite

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields())


class Resolver:
    """Mutable, possibly incomplete builder for a single :class:`Entry`."""

    def __init__(self, kind: EntryKind, cite: str):
        self.kind = kind
        self.cite = cite
        self._required: dict[str, QuotedString] = {}
        self.optional: dict[str, QuotedString] = {}

    def set_field(self, name: str, value: QuotedString | str) -> None:
        """Store ``value`` under ``name``; the last write wins."""
        value = _coerce(value)
        if name in self.kind.required_fields:
            self._required[name] = value
        else:
            self.optional[name] = value

    def book_title(self, value: QuotedString | str) -> None:
        self.set_field("book_title", value)

    def set_cite(self, cite: str) -> None:
        self.cite = cite

    def get_field(self, name: str) -> QuotedString | None:
        if name in self._required:
            return self._required[name]
        return self.optional.get(name)

    def fields(self) -> list[Field]:
        """Fields filled so far, required (canonical order) then optional."""
        out = [
            Field(name, self._required[name])
            for name in self.kind.required_fields
            if name in self._required
        ]
        out.extend(Field(name, value) for name, value in self.optional.items())
        return out

    def missing_fields(self) -> list[str]:
        return [n for n in self.kind.required_fields if n not in self._required]

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def finalize(self) -> Entry:
        """Return the finished entry or raise ``UnresolvedEntryError``."""
        missing = self.missing_fields()
        if missing:
            raise UnresolvedEntryError(self.cite, missing)
        logger.debug("resolved entry '%s' as %s", self.cite, self.kind.name)
        return Entry(self.kind, self.cite, dict(self._required), dict(self.optional))

    def __repr__(self) -> str:
        return f"Resolver({self.kind.name}, {self.cite!r}, missing={self.missing_fields()})"
