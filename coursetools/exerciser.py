"""Extraction of exercise files from code blocks marked by HTML comments.

A comment of the form ``<!-- File path/to/file -->`` names the file that the
next code block is written to. Code blocks without such a comment are ignored,
as are comments that no code block follows.
"""

from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from collections.abc import Sequence
from os import PathLike
from pathlib import Path
from typing import Optional, TextIO, Union

from markdown_it import MarkdownIt

from .frontmatter import Book

log = logging.getLogger(__name__)

FILENAME_START = "<!-- File "
FILENAME_END = " -->"

_PARSER = MarkdownIt("commonmark")

PathArg = Union[str, "PathLike[str]"]


def _filename_in(html: str) -> Optional[str]:
    html = html.strip()
    if (
        len(html) >= len(FILENAME_START) + len(FILENAME_END)
        and html.startswith(FILENAME_START)
        and html.endswith(FILENAME_END)
    ):
        return html[len(FILENAME_START) : len(html) - len(FILENAME_END)]
    return None


def process(output_directory: PathArg, input_contents: str) -> list[Path]:
    """Write every named code block in the Markdown text below ``output_directory``.

    Returns the paths written, in order.
    """
    output_directory = Path(output_directory)
    next_filename: Optional[str] = None
    written: list[Path] = []

    for token in _PARSER.parse(input_contents):
        if token.type == "html_block":
            for line in token.content.splitlines():
                filename = _filename_in(line)
                if filename is not None:
                    next_filename = filename
                    log.info("Next file: %r", next_filename)
        elif token.type in ("fence", "code_block"):
            log.info("Code block %r", token.info)
            if next_filename is None:
                continue
            full_filename = output_directory / next_filename
            log.info("Writing %s", full_filename)
            full_filename.parent.mkdir(parents=True, exist_ok=True)
            full_filename.write_text(token.content, encoding="utf-8", newline="")
            written.append(full_filename)
            next_filename = None

    return written


def process_all(book: Book, output_directory: PathArg) -> list[Path]:
    """Extract the exercises of every chapter into a directory named after it."""
    output_directory = Path(output_directory)
    written: list[Path] = []
    for chapter in book.chapters():
        log.debug("Chapter %s / %s", chapter.path, chapter.source_path)
        if chapter.path is None:
            continue
        stem = chapter.path.stem
        if not stem:
            raise ValueError(f"Chapter {str(chapter.path)!r} has no file stem")
        written.extend(process(output_directory / stem, chapter.content))
    return written


def _render(stream: TextIO) -> list[Path]:
    try:
        context = json.load(stream)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Parsing stdin: {exc}") from exc
    if not isinstance(context, dict):
        raise ValueError("Parsing stdin: expected a render context object")

    config = context.get("config")
    output = config.get("output") if isinstance(config, dict) else None
    renderer = output.get("exerciser") if isinstance(output, dict) else None
    if not isinstance(renderer, dict):
        raise ValueError("Missing output.exerciser configuration")
    if "output-directory" not in renderer:
        raise ValueError(
            "Missing output.exerciser.output-directory configuration value"
        )
    directory = renderer["output-directory"]
    if not isinstance(directory, str):
        raise ValueError("Expected a string for output.exerciser.output-directory")

    try:
        book = Book.from_json(context["book"])
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Parsing stdin: invalid book: {exc}") from exc

    output_directory = Path(directory)
    shutil.rmtree(output_directory, ignore_errors=True)
    try:
        output_directory.mkdir()
    except OSError as exc:
        raise OSError(
            f"Failed to create output directory {str(output_directory)!r}: {exc}"
        ) from exc

    return process_all(book, output_directory)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="exerciser",
        description="Book renderer that writes exercise files from code blocks",
    )
    parser.parse_args(argv)
    try:
        _render(sys.stdin)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())