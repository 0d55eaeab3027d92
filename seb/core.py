"""File-backed storage for a bibliography.

:class:`FormatFile` ties a path to a :class:`~seb.formats.Format`.  It is the
only part of the package that touches the filesystem: it reads raw text and
hands it to the format, and writes composed text back, clearing the
bibliography's dirty flag once the write succeeded.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Type, Union

from .biblio import Biblio, BiblioResolver
from .bibtex import BibTex
from .exceptions import StorageError
from .formats import Format

logger = logging.getLogger(__name__)

# conventional names looked up in the working directory when no file is given
DEFAULT_FILENAMES = ("references", "bibliography")


def find_default_file(fmt: Type[Format] = BibTex, root: Path | str = ".") -> Path:
    """Return the bibliography file to use when none was named.

    Prefers ``references.<ext>`` and ``bibliography.<ext>``, then the first
    ``*.<ext>`` file in ``root``.  Backup files are ignored.  If nothing
    exists, ``references.<ext>`` is returned so that it gets created.
    """
    root = Path(root)
    for name in DEFAULT_FILENAMES:
        path = root / f"{name}.{fmt.ext}"
        if path.exists():
            return path
    for path in sorted(root.glob(f"*.{fmt.ext}")):
        if not path.name.endswith(".backup"):
            return path
    return root / f"{DEFAULT_FILENAMES[0]}.{fmt.ext}"


class FormatFile:
    """A bibliography file in a given format.

    The file is created empty when it does not exist yet.
    """

    def __init__(self, path: Path | str | None = None, fmt: Type[Format] = BibTex):
        self.format = fmt
        self.path = Path(path) if path is not None else find_default_file(fmt)
        if not self.path.exists():
            logger.info("creating %s file %s", fmt.name, self.path)
            try:
                self.path.touch()
            except OSError as exc:
                raise StorageError(f"Error creating {self.path}: {exc}") from exc

    def read_raw(self) -> str:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return f.read()
        except OSError as exc:
            raise StorageError(f"Error reading {self.path}: {exc}") from exc

    def read(self) -> Union[Biblio, BiblioResolver]:
        """Parse the file; raises :class:`~seb.exceptions.FormatError` on bad text."""
        logger.debug("reading %s", self.path)
        return self.format.parse(self.read_raw())

    def write(self, biblio: Biblio) -> None:
        raw = self.format.compose(biblio)
        try:
            with self.path.open("w", encoding="utf-8") as f:
                f.write(raw)
        except OSError as exc:
            raise StorageError(f"Error writing {self.path}: {exc}") from exc
        biblio.mark_clean()
        logger.debug("wrote %d entries to %s", len(biblio), self.path)

    def __repr__(self) -> str:
        return f"FormatFile({str(self.path)!r}, {self.format.name})"
