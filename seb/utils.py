"""Normalization helpers for comparing identifier fields."""

import re
import unicodedata


def normalize_unicode(text: str | None) -> str | None:
    """Normalize Unicode strings for comparison.

    Returns ``None`` for falsy input to make caller logic simpler.
    """
    if not text:
        return None
    return unicodedata.normalize("NFC", str(text))


def normalize_doi(doi: str | None) -> str | None:
    """Normalize DOI strings to a canonical lowercase form without prefix."""
    if not doi:
        return None
    doi = str(doi).strip().lower()
    if not doi:
        return None
    for prefix in ("doi:", "http://dx.doi.org/", "https://dx.doi.org/", "https://doi.org/"):
        if doi.startswith(prefix):
            doi = doi[len(prefix):]
            break
    return doi.strip()


def normalize_isbn(isbn: str | None) -> str | None:
    """Drop separators and upper-case the check digit."""
    if not isbn:
        return None
    isbn = re.sub(r"[\s-]", "", str(isbn)).upper()
    return isbn or None


def normalize_identifier(field: str, value: str | None) -> str | None:
    """Canonical form of ``value`` for the identifier field ``field``."""
    if field == "doi":
        return normalize_doi(value)
    if field == "isbn":
        return normalize_isbn(value)
    value = normalize_unicode(value)
    if value is None:
        return None
    return value.strip() or None
