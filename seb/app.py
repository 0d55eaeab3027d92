"""Operations the command layer performs on a loaded bibliography.

Entries coming from lookups (DOI, ISBN, RFC, ...) are already complete, so
they are inserted directly; only text read from a file goes through the
resolver.
"""

from __future__ import annotations

import logging
from typing import Sequence

from . import utils
from .biblio import Biblio, BiblioResolver
from .entries import Entry
from .exceptions import DuplicateEntryError

logger = logging.getLogger(__name__)


def check_entry_field_duplication(biblio: Biblio, field: str, value: str) -> None:
    """Raise :class:`DuplicateEntryError` if an entry already has ``value``.

    Values are compared after :func:`utils.normalize_identifier`, so
    ``doi:10.1000/XYZ`` matches ``10.1000/xyz``.
    """
    if utils.normalize_identifier(field, value) is None:
        return
    entry = biblio.find_by_field(
        field, value, key=lambda text: utils.normalize_identifier(field, text)
    )
    if entry is not None:
        raise DuplicateEntryError(field, value, entry.cite)


def add_entry(biblio: Biblio, entry: Entry, cite: str | None = None) -> str:
    """Insert ``entry``, optionally overriding its cite key first.

    Returns the cite key the entry was stored under.
    """
    if cite:
        logger.info("overriding cite key value with '%s'", cite)
        entry.set_cite(cite)
    biblio.insert(entry)
    return entry.cite


def add_first(
    biblio: Biblio,
    entries: Sequence[Entry],
    cite: str | None = None,
    field: str | None = None,
    value: str | None = None,
) -> str | None:
    """Add the first of ``entries`` found by a lookup.

    When ``field`` and ``value`` name the identifier that was searched for,
    the bibliography is checked for it before anything is added.  Returns the
    new cite key, or ``None`` when the lookup found nothing.
    """
    if field is not None and value is not None:
        check_entry_field_duplication(biblio, field, value)
    if not entries:
        return None
    return add_entry(biblio, entries[0], cite)


def remove_entry(biblio: Biblio, cite: str) -> str:
    if biblio.remove(cite) is not None:
        return "Entry removed from bibliography"
    return f"No entry found with the cite key of '{cite}'"


def describe_unresolved(resolver: BiblioResolver) -> list[str]:
    """One line per incomplete record, naming its missing fields."""
    return [
        f"{cite or '<no cite key>'}: missing {', '.join(missing)}"
        for cite, missing in resolver.missing()
    ]
