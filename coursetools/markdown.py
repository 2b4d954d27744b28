"""Markdown helpers: relative links, human-readable durations and tables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from os import PathLike, fspath
from pathlib import PurePosixPath
from typing import Union

PathArg = Union[str, "PathLike[str]"]


def _ancestors(path: PurePosixPath) -> Iterator[PurePosixPath]:
    yield path
    yield from path.parents


def _starts_with(path: PurePosixPath, prefix: PurePosixPath) -> bool:
    return path.parts[: len(prefix.parts)] == prefix.parts


def relative_link(doc_path: PathArg, target_path: PathArg) -> str:
    """Return a link to ``target_path`` relative to the document ``doc_path``.

    Both paths are relative to the same source root.
    """
    doc = PurePosixPath(fspath(doc_path))
    target = PurePosixPath(fspath(target_path))

    dotdot = -1
    for parent in _ancestors(doc):
        if _starts_with(target, parent):
            break
        dotdot += 1

    if dotdot > 0:
        return "../" * dotdot + str(target)
    return f"./{target}"


def duration(minutes: int) -> str:
    """Represent a number of minutes in a human-readable way.

    Durations longer than 5 minutes are rounded up to the next multiple of 5.
    """
    if minutes < 0:
        raise ValueError(f"duration must not be negative: {minutes}")
    if minutes > 5:
        minutes += 4
        minutes -= minutes % 5

    hours, minutes = divmod(minutes, 60)
    if hours == 0:
        return "1 minute" if minutes == 1 else f"{minutes} minutes"
    hour_text = "1 hour" if hours == 1 else f"{hours} hours"
    if minutes == 0:
        return hour_text
    return f"{hour_text} and {minutes} minutes"


class Table:
    """A two-dimensional table rendered as a GitHub-flavoured Markdown table."""

    def __init__(self, header: Iterable[str]) -> None:
        self._header = tuple(header)
        self._rows: list[tuple[str, ...]] = []

    @property
    def header(self) -> tuple[str, ...]:
        return self._header

    @property
    def rows(self) -> list[tuple[str, ...]]:
        return list(self._rows)

    def add_row(self, row: Iterable[str]) -> None:
        """Append a row; it must have as many cells as the header."""
        cells = tuple(row)
        if len(cells) != len(self._header):
            raise ValueError(
                f"row has {len(cells)} cells, table has {len(self._header)} columns"
            )
        self._rows.append(cells)

    def __str__(self) -> str:
        lines = [self._header, ("-",) * len(self._header), *self._rows]
        return "".join(
            "|" + "".join(f" {cell} |" for cell in line) + "\n" for line in lines
        )