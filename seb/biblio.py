"""The bibliography collection and its resolution engine."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional, Union

from .entries import Entry, Resolver
from .quoted import QuotedString

logger = logging.getLogger(__name__)


class Biblio:
    """Ordered collection of entries, unique by cite key, with dirty tracking.

    Duplicate cite keys are overwritten: the later entry replaces the earlier
    one at the earlier one's position.  This applies both to construction
    and to :meth:`insert`.

    ``dirty`` becomes ``True`` on every insert and on every remove that found
    something.  Only the storage layer clears it, through :meth:`mark_clean`,
    after the bibliography has been written out.
    """

    def __init__(self, entries: Iterable[Entry] = ()):
        self._entries: dict[str, Entry] = {}
        self._dirty = False
        for entry in entries:
            self._put(entry)

    @classmethod
    def try_resolve(cls, resolvers: Iterable[Resolver]) -> Union["Biblio", "BiblioResolver"]:
        return BiblioResolver.try_resolve(resolvers)

    def _put(self, entry: Entry) -> Entry | None:
        previous = self._entries.get(entry.cite)
        if previous is not None:
            logger.warning("replacing existing entry with cite key '%s'", entry.cite)
        self._entries[entry.cite] = entry
        return previous

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    def insert(self, entry: Entry) -> Entry | None:
        """Add ``entry``, returning the entry it replaced, if any."""
        previous = self._put(entry)
        self._dirty = True
        return previous

    def remove(self, cite: str) -> Entry | None:
        entry = self._entries.pop(cite, None)
        if entry is not None:
            self._dirty = True
        return entry

    def get(self, cite: str) -> Entry | None:
        return self._entries.get(cite)

    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries.values())

    def find_by_field(
        self,
        name: str,
        value: QuotedString | str,
        key: Callable[[str], Optional[str]] | None = None,
    ) -> Entry | None:
        """Return the first entry whose field ``name`` decodes to ``value``.

        With ``key``, both sides are compared after passing through it.
        """
        key = key or str
        wanted = key(str(value))
        for entry in self._entries.values():
            current = entry.get_field(name)
            if current is not None and key(str(current)) == wanted:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries())

    def __contains__(self, cite: object) -> bool:
        return cite in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Biblio):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Biblio({list(self._entries)!r}, dirty={self._dirty})"


class BiblioResolver:
    """Outcome of a resolution where at least one record was incomplete.

    Records keep their input order.  Finalized entries are available from
    :meth:`resolved`; the incomplete :class:`~seb.entries.Resolver` objects
    from :meth:`unresolved` can be repaired in place with ``set_field`` and
    the whole set re-checked with :meth:`resolve`, without going back to the
    raw text.
    """

    def __init__(self, slots: Iterable[Entry | Resolver]):
        self._slots: list[Entry | Resolver] = list(slots)

    @classmethod
    def try_resolve(cls, resolvers: Iterable[Resolver]) -> Union[Biblio, "BiblioResolver"]:
        """Finalize every resolver independently.

        Returns a :class:`Biblio` when all of them succeed, otherwise a
        :class:`BiblioResolver` holding both outcomes.
        """
        return cls(resolvers).resolve()

    def resolve(self) -> Union[Biblio, "BiblioResolver"]:
        slots: list[Entry | Resolver] = []
        for slot in self._slots:
            if isinstance(slot, Resolver) and slot.is_complete():
                slot = slot.finalize()
            slots.append(slot)
        self._slots = slots

        unresolved = self.unresolved()
        if not unresolved:
            return Biblio(self.resolved())
        for resolver in unresolved:
            logger.debug(
                "entry '%s' is missing: %s", resolver.cite, ", ".join(resolver.missing_fields())
            )
        return self

    def resolved(self) -> list[Entry]:
        return [s for s in self._slots if isinstance(s, Entry)]

    def unresolved(self) -> list[Resolver]:
        return [s for s in self._slots if isinstance(s, Resolver)]

    def missing(self) -> list[tuple[str, list[str]]]:
        """``(cite, missing required fields)`` for every unresolved record."""
        return [(r.cite, r.missing_fields()) for r in self.unresolved()]

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"BiblioResolver(resolved={len(self.resolved())}, unresolved={self.missing()!r})"
