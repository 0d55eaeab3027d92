"""Styling-aware text values used for every entry field.

A :class:`QuotedString` is an ordered sequence of parts, each flagged as
*verbatim* (text that must not be re-cased or reformatted downstream, written
inside an extra pair of braces in BibTeX) or *normal*.
"""

from __future__ import annotations

from typing import Callable, Iterable, Tuple

Part = Tuple[bool, str]

# characters around which chunk-based parsers break one verbatim span into
# verbatim/normal/verbatim pieces
SPLIT_DELIMITERS = frozenset("/.")


def _merge(parts: Iterable[Part]) -> list[Part]:
    merged: list[Part] = []
    for verbatim, text in parts:
        if not text:
            continue
        verbatim = bool(verbatim)
        if merged and merged[-1][0] == verbatim:
            merged[-1] = (verbatim, merged[-1][1] + text)
        else:
            merged.append((verbatim, text))
    return merged


def _correct_escapes(parts: list[Part]) -> list[Part]:
    """Fold ``V N V`` runs that were split on a delimiter back into one ``V``.

    Only a normal part without whitespace, following a verbatim part that ends
    in a split delimiter, is folded: ``{U.S.} policy on {NATO}`` is real
    styling and stays as three parts.  ``parts`` must already be merged, so
    verbatim and normal parts alternate.
    """
    result: list[Part] = []
    i = 0
    while i < len(parts):
        verbatim, text = parts[i]
        if (
            not verbatim
            and result
            and result[-1][0]
            and result[-1][1][-1] in SPLIT_DELIMITERS
            and not any(c.isspace() for c in text)
            and i + 1 < len(parts)
            and parts[i + 1][0]
        ):
            result[-1] = (True, result[-1][1] + text + parts[i + 1][1])
            i += 2
            continue
        result.append((verbatim, text))
        i += 1
    return result


class QuotedString:
    """Normalized field text made of verbatim and normal parts.

    Two instances compare equal when their normalized parts are equal, so a
    string built from ``[(False, "a"), (False, "b")]`` equals one built from
    ``[(False, "ab")]``.  ``str()`` returns the decoded text without any
    escaping.
    """

    __slots__ = ("_parts",)

    def __init__(self, text: str = ""):
        self._parts: tuple[Part, ...] = ((False, text),) if text else ()

    @classmethod
    def verbatim(cls, text: str) -> "QuotedString":
        return cls.from_parts([(True, text)])

    @classmethod
    def from_parts(cls, parts: Iterable[Part]) -> "QuotedString":
        """Build from ``(verbatim, text)`` parts as produced by a chunk parser."""
        qs = cls()
        qs._parts = tuple(_correct_escapes(_merge(parts)))
        return qs

    @property
    def parts(self) -> tuple[Part, ...]:
        return self._parts

    @property
    def is_verbatim(self) -> bool:
        return len(self._parts) == 1 and self._parts[0][0]

    def map_quoted(
        self,
        escape: Callable[[str], str],
        normal: Callable[[str], str] | None = None,
    ) -> str:
        """Concatenate the parts, passing verbatim text through ``escape``.

        Normal text is copied unchanged unless ``normal`` is given.
        """
        out = []
        for verbatim, text in self._parts:
            if verbatim:
                out.append(escape(text))
            elif normal is not None:
                out.append(normal(text))
            else:
                out.append(text)
        return "".join(out)

    def __str__(self) -> str:
        return "".join(text for _, text in self._parts)

    def __repr__(self) -> str:
        return f"QuotedString.from_parts({list(self._parts)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuotedString):
            return NotImplemented
        return self._parts == other._parts

    def __hash__(self) -> int:
        return hash(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
