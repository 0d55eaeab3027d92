"""Top-level imports for the seb package."""

__version__ = "0.1.0"

from .quoted import QuotedString
from .entries import Entry, EntryKind, Field, Resolver
from .biblio import Biblio, BiblioResolver
from .formats import Format
from .bibtex import BibTex
from .core import FormatFile
from .exceptions import (
    DuplicateEntryError,
    FormatError,
    SebError,
    StorageError,
    UnresolvedEntryError,
)

__all__ = [
    "__version__", "QuotedString", "Entry", "EntryKind", "Field", "Resolver",
    "Biblio", "BiblioResolver", "Format", "BibTex", "FormatFile",
    "SebError", "FormatError", "StorageError", "UnresolvedEntryError",
    "DuplicateEntryError",
]
