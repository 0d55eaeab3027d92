"""Pytest configuration for the seb project.

This file ensures that the project root is on ``sys.path`` so that tests can
import the package without each module having to manipulate ``sys.path``.
"""

from __future__ import annotations

import sys
import pathlib

# add workspace root to path for test imports
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

import pytest

DATA_DIR = pathlib.Path(__file__).parent / "data"


@pytest.fixture
def bibtex1() -> str:
    """Raw text of the sample bibliography shipped with the tests."""
    return (DATA_DIR / "bibtex1.bib").read_text(encoding="utf-8")


@pytest.fixture
def manual_entry():
    from seb import Entry, EntryKind, QuotedString

    return Entry(
        EntryKind.MANUAL,
        "entry1",
        required={"title": QuotedString("Test")},
        optional={"author": QuotedString("Me")},
    )
