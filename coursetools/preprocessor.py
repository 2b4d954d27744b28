"""Book preprocessor: strips frontmatter, adds timing notes and expands directives."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from typing import Optional, TextIO

from .course import Courses
from .frontmatter import Book
from .replacements import replace
from .timing_info import insert_timing_info


def _read_book(stream: TextIO) -> Book:
    try:
        data = json.load(stream)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid preprocessor input: {exc}") from exc
    if not isinstance(data, list) or len(data) != 2 or not isinstance(data[1], dict):
        raise ValueError("preprocessor input must be a [context, book] pair")
    try:
        return Book.from_json(data[1])
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"invalid book in preprocessor input: {exc}") from exc


def preprocess(stream: TextIO, out: TextIO) -> Book:
    """Read a ``[context, book]`` pair from ``stream`` and write the processed book.

    Returns the processed book as well.
    """
    book = _read_book(stream)
    courses, book = Courses.extract_structure(book)

    for chapter in list(book.chapters()):
        found = courses.find_slide(chapter)
        if found is None:
            replace(courses, None, None, None, chapter)
        else:
            course, session, segment, slide = found
            insert_timing_info(slide, chapter)
            replace(courses, course, session, segment, chapter)

    json.dump(book.to_json(), out, ensure_ascii=False)
    return book


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="course-preprocessor",
        description="Book preprocessor for course material",
    )
    commands = parser.add_subparsers(dest="command")
    supports = commands.add_parser(
        "supports", help="Report whether a renderer is supported"
    )
    supports.add_argument("renderer")
    args = parser.parse_args(argv)

    if args.command == "supports":
        # Every renderer is supported.
        return 0

    try:
        preprocess(sys.stdin, sys.stdout)
    except (ValueError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())