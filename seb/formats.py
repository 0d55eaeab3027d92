"""Contract shared by bibliography text formats."""

from __future__ import annotations

import abc
from typing import ClassVar, Union

from .biblio import Biblio, BiblioResolver


class Format(abc.ABC):
    """A text serialization of a :class:`~seb.biblio.Biblio`.

    ``parse`` returns a :class:`Biblio` when every record resolved and a
    :class:`BiblioResolver` when some records lack required fields.  Text that
    cannot be read at all raises :class:`~seb.exceptions.FormatError`.
    """

    name: ClassVar[str]
    ext: ClassVar[str]

    @classmethod
    @abc.abstractmethod
    def parse(cls, raw: str) -> Union[Biblio, BiblioResolver]:
        ...

    @classmethod
    @abc.abstractmethod
    def compose(cls, biblio: Biblio) -> str:
        ...
