#!/usr/bin/env python3
"""Command line interface for seb.

Loads the bibliography file, runs one command against it and writes the file
back only if the command changed something.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import app
from .biblio import Biblio
from .core import FormatFile
from .exceptions import SebError

logger = logging.getLogger(__name__)


def setup_logging(verbosity: int, quiet: bool) -> None:
    """Configure stderr logging; errors are always shown."""
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seb',
        description='Search and edit bibliographic entries in a BibTeX file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ls                    # List the cite keys in references.bib
  %(prog)s -f refs.bib rm key1   # Remove the entry cited as key1
  %(prog)s check                 # Report entries with missing required fields
        """,
    )
    parser.add_argument('-f', '--file', help='The bibliography file (default: references.bib or the first .bib found)')
    parser.add_argument('-v', '--verbosity', action='count', default=0, help='Increase how chatty the program is')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only report errors')

    sub = parser.add_subparsers(dest='command', required=True)
    rm = sub.add_parser('rm', help='Remove an entry from the bibliography file using the cite key')
    rm.add_argument('cite', help='The cite key of the entry to remove')
    sub.add_parser('ls', help='List the entries of the bibliography file')
    sub.add_parser('check', help='Report entries that are missing required fields')
    return parser


def execute(args: argparse.Namespace, biblio: Biblio) -> str:
    if args.command == 'rm':
        return app.remove_entry(biblio, args.cite)
    if args.command == 'ls':
        lines = []
        for entry in biblio.entries():
            title = entry.get_field('title')
            lines.append(f"{entry.cite}\t{entry.kind.keyword}\t{title if title is not None else ''}")
        return "\n".join(lines)
    return f"All {len(biblio)} entries are complete"


def main(argv: list[str] | None = None) -> int:
    """Parse command-line arguments and dispatch to the requested command."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbosity, args.quiet)

    try:
        bibfile = FormatFile(args.file)
        result = bibfile.read()
        if not isinstance(result, Biblio):
            for line in app.describe_unresolved(result):
                print(line, file=sys.stderr)
            print(f"{bibfile.path}: {len(result.unresolved())} entries are missing required fields", file=sys.stderr)
            return 1

        message = execute(args, result)

        if result.dirty:
            logger.debug("updating the bibliography file %s", bibfile.path)
            bibfile.write(result)
    except SebError as exc:
        print(exc, file=sys.stderr)
        return 2

    if not args.quiet and message:
        print(message)
    return 0


if __name__ == '__main__':
    sys.exit(main())
