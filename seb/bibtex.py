"""BibTeX reader and writer.

Tokenizing is left to :mod:`bibtexparser`; this module maps its records onto
:class:`~seb.entries.Resolver` objects and composes a
:class:`~seb.biblio.Biblio` back into text of the form::

    @article{cite,
        title = {Some {Verbatim} Title},
        ...
    }

Literal braces in normal text are written as ``\\textbraceleft{}`` and
``\\textbraceright{}`` because bibtexparser counts every brace.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Union

import bibtexparser  # type: ignore[import]
from bibtexparser.bparser import BibTexParser  # type: ignore[import]

from .biblio import Biblio, BiblioResolver
from .entries import Entry, EntryKind, Field, Resolver
from .exceptions import FormatError
from .formats import Format
from .quoted import Part, QuotedString

logger = logging.getLogger(__name__)

INDENT = "    "

KIND_BY_KEYWORD = {
    "article": EntryKind.ARTICLE,
    "book": EntryKind.BOOK,
    "booklet": EntryKind.BOOKLET,
    "incollection": EntryKind.BOOK_SECTION,
    "inproceedings": EntryKind.IN_PROCEEDINGS,
    "conference": EntryKind.IN_PROCEEDINGS,
    "manual": EntryKind.MANUAL,
    "mastersthesis": EntryKind.MASTER_THESIS,
    "masterthesis": EntryKind.MASTER_THESIS,
    "phdthesis": EntryKind.PHD_THESIS,
    "proceedings": EntryKind.PROCEEDINGS,
    "techreport": EntryKind.TECH_REPORT,
    "report": EntryKind.TECH_REPORT,
    "unpublished": EntryKind.UNPUBLISHED,
}

# bibtexparser keys that are not fields
_RESERVED_KEYS = ("ENTRYTYPE", "ID")

_LINE_BREAK = re.compile(r"[ \t]*\r?\n\s*")

# literal braces in normal text; bibtexparser counts every brace, escaped or not
_BRACE_MACROS = {"{": r"\textbraceleft{}", "}": r"\textbraceright{}"}
_UNESCAPED_BRACE = re.compile(r"(?<!\\)[{}]")


def kind_for(keyword: str, field_names: Iterable[str] = ()) -> EntryKind:
    """Map a BibTeX entry type onto an :class:`EntryKind`.

    ``@inbook`` covers two kinds; it is read as a page range when it has
    ``pages`` but no ``chapter``, so a ``BOOK_PAGES`` entry that also carries
    a ``chapter`` reads back as ``BOOK_CHAPTER``.  Unknown types become
    ``OTHER``.
    """
    keyword = keyword.lower()
    if keyword == "inbook":
        names = set(field_names)
        if "pages" in names and "chapter" not in names:
            return EntryKind.BOOK_PAGES
        return EntryKind.BOOK_CHAPTER
    return KIND_BY_KEYWORD.get(keyword, EntryKind.OTHER)


def split_chunks(raw: str) -> list[Part]:
    r"""Split a raw field value into ``(verbatim, text)`` chunks.

    Top-level ``{...}`` groups are verbatim and keep their inner text as is.
    Outside of them ``\textbraceleft{}`` and ``\textbraceright{}`` decode to
    literal braces.  Escaped braces (``\{``, ``\}``) never open or close a
    group and, like unmatched braces, stay in the text unchanged.  Line breaks
    collapse to a single space.
    """
    raw = _LINE_BREAK.sub(" ", raw)
    chunks: list[Part] = []
    normal: list[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == "\\" and depth == 0:
            for brace, macro in _BRACE_MACROS.items():
                if raw.startswith(macro, i):
                    normal.append(brace)
                    i += len(macro)
                    break
            else:
                if i + 1 < len(raw) and raw[i + 1] in "{}":
                    normal.append(raw[i:i + 2])
                    i += 2
                else:
                    normal.append(ch)
                    i += 1
            continue
        if ch == "\\" and i + 1 < len(raw) and raw[i + 1] in "{}":
            i += 2
            continue
        if ch == "{":
            if depth == 0:
                chunks.append((False, "".join(normal)))
                normal = []
                start = i + 1
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                chunks.append((True, raw[start:i]))
        elif depth == 0:
            normal.append(ch)
        i += 1
    if depth > 0:
        # unbalanced group: keep it as plain text
        normal.append(raw[start - 1:])
    chunks.append((False, "".join(normal)))
    return chunks


def quoted_from_raw(raw: str) -> QuotedString:
    return QuotedString.from_parts(split_chunks(raw))


def resolver_from_record(record: dict[str, Any]) -> Resolver:
    """Build a :class:`Resolver` from one ``bibtexparser`` entry dict."""
    fields = {
        key.lower(): value
        for key, value in record.items()
        if key not in _RESERVED_KEYS
    }
    kind = kind_for(record.get("ENTRYTYPE", ""), fields)
    resolver = kind.resolver(record.get("ID", ""))
    for name, value in fields.items():
        value = quoted_from_raw(str(value))
        if name == "booktitle":
            resolver.book_title(value)
        else:
            resolver.set_field(name, value)
    return resolver


def bibtex_esc(text: str) -> str:
    return f"{{{text}}}"


def escape_normal(text: str) -> str:
    r"""Write literal braces as ``\textbraceleft{}`` / ``\textbraceright{}``.

    Braces already escaped with a backslash are TeX and are kept as is.
    """
    return _UNESCAPED_BRACE.sub(lambda m: _BRACE_MACROS[m.group()], text)


def _balanced(text: str) -> bool:
    depth = 0
    for ch in text:
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def compose_value(name: str, value: QuotedString) -> str:
    """Render ``value`` as the text between the outer braces of a field.

    Line breaks are written as spaces.  Raises
    :class:`~seb.exceptions.FormatError` when the text would not read back
    as the same value, rather than writing a record the parser rejects.
    """
    value = QuotedString.from_parts(
        (verbatim, _LINE_BREAK.sub(" ", text)) for verbatim, text in value.parts
    )
    body = value.map_quoted(bibtex_esc, escape_normal)
    if not _balanced(body) or quoted_from_raw(body) != value:
        raise FormatError(f"field '{name}' cannot be written as BibTeX: {str(value)!r}")
    return body


def compose_variant(entry: Entry) -> str:
    return entry.kind.keyword


def compose_fields(fields: Iterable[Field]) -> str:
    """Render fields as indented ``name = {value},`` lines.

    Underscores are removed from every field name, so ``book_title`` is
    written as ``booktitle``.
    Raises :class:`~seb.exceptions.FormatError` for values that cannot be
    represented.
    """
    return "".join(
        f"{INDENT}{field.name.replace('_', '')} = "
        f"{{{compose_value(field.name, field.value)}}},\n"
        for field in fields
    )


def compose_entry(entry: Entry) -> str:
    return f"@{compose_variant(entry)}{{{entry.cite},\n{compose_fields(entry.fields())}}}\n"


class BibTex(Format):
    """The BibTeX format."""

    name = "BibTex"
    ext = "bib"

    @classmethod
    def parse(cls, raw: str) -> Union[Biblio, BiblioResolver]:
        if not raw:
            return Biblio()

        parser = BibTexParser(common_strings=True)
        parser.ignore_nonstandard_types = False
        parser.homogenize_fields = False
        try:
            database = bibtexparser.loads(raw, parser=parser)
        except Exception as exc:
            raise FormatError(f"Unable to parse string as BibTeX: {exc}") from exc

        if not database.entries:
            raise FormatError("Unable to parse string as BibTeX")

        logger.debug("parsed %d BibTeX record(s)", len(database.entries))
        resolvers = [resolver_from_record(record) for record in database.entries]
        return BiblioResolver.try_resolve(resolvers)

    @classmethod
    def compose(cls, biblio: Biblio) -> str:
        return "".join(compose_entry(entry) for entry in biblio.entries())
