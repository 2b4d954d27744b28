"""Book and chapter model, and splitting of YAML frontmatter from chapters."""

from __future__ import annotations

import copy
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Optional, Union

import yaml

_FRONTMATTER = re.compile(
    r"\A\s*---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)


class FrontmatterError(ValueError):
    """Raised when a chapter's frontmatter cannot be parsed."""


@dataclass(frozen=True)
class Frontmatter:
    """Course annotations found in a chapter's frontmatter."""

    minutes: Optional[int] = None
    target_minutes: Optional[int] = None
    course: Optional[str] = None
    session: Optional[str] = None


def _as_path(value: Any) -> Optional[PurePosixPath]:
    if value is None:
        return None
    return PurePosixPath(value)


@dataclass
class Chapter:
    """A chapter of a book, with its nested items."""

    name: str
    content: str = ""
    number: Optional[list[int]] = None
    sub_items: list[Any] = field(default_factory=list)
    path: Optional[PurePosixPath] = None
    source_path: Optional[PurePosixPath] = None
    parent_names: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.path = _as_path(self.path)
        self.source_path = _as_path(self.source_path)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Chapter":
        """Build a chapter from its JSON object (the value under ``Chapter``)."""
        known = {
            "name", "content", "number", "sub_items",
            "path", "source_path", "parent_names",
        }
        return cls(
            name=data["name"],
            content=data.get("content", ""),
            number=data.get("number"),
            sub_items=[_item_from_json(item) for item in data.get("sub_items", [])],
            path=data.get("path"),
            source_path=data.get("source_path"),
            parent_names=list(data.get("parent_names", [])),
            extra={k: copy.deepcopy(v) for k, v in data.items() if k not in known},
        )

    def to_json(self) -> dict[str, Any]:
        """Return the chapter as a JSON object."""
        return {
            "name": self.name,
            "content": self.content,
            "number": self.number,
            "sub_items": [_item_to_json(item) for item in self.sub_items],
            "path": None if self.path is None else str(self.path),
            "source_path": None if self.source_path is None else str(self.source_path),
            "parent_names": list(self.parent_names),
            **copy.deepcopy(self.extra),
        }


BookItem = Union[Chapter, Any]


def _item_from_json(item: Any) -> BookItem:
    if isinstance(item, dict) and set(item) == {"Chapter"}:
        return Chapter.from_json(item["Chapter"])
    return copy.deepcopy(item)


def _item_to_json(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": item.to_json()}
    return copy.deepcopy(item)


def _walk(items: Iterable[BookItem]) -> Iterator[Chapter]:
    for item in items:
        if isinstance(item, Chapter):
            yield item
            yield from _walk(item.sub_items)


@dataclass
class Book:
    """A book: a sequence of chapters, part titles and separators."""

    sections: list[BookItem] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Book":
        return cls(
            sections=[_item_from_json(item) for item in data.get("sections", [])],
            extra={k: copy.deepcopy(v) for k, v in data.items() if k != "sections"},
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "sections": [_item_to_json(item) for item in self.sections],
            **copy.deepcopy(self.extra),
        }

    def chapters(self) -> Iterator[Chapter]:
        """Yield every chapter of the book, depth first, parents before children."""
        return _walk(self.sections)


def _parse_frontmatter(text: str, source: Any) -> Frontmatter:
    where = f"error parsing frontmatter in {source}"
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"{where}: {exc}") from exc
    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise FrontmatterError(f"{where}: expected a mapping")

    values: dict[str, Any] = {}
    for key in ("minutes", "target_minutes"):
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise FrontmatterError(f"{where}: {key!r} must be a non-negative integer")
        values[key] = value
    for key in ("course", "session"):
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise FrontmatterError(f"{where}: {key!r} must be a string")
        values[key] = value
    return Frontmatter(**values)


def split_frontmatter(chapter: Chapter) -> tuple[Frontmatter, str]:
    """Split a chapter's content into its frontmatter and the remaining content."""
    match = _FRONTMATTER.match(chapter.content)
    if match is None:
        return Frontmatter(), chapter.content
    frontmatter = _parse_frontmatter(match.group(1) or "", chapter.source_path)
    return frontmatter, chapter.content[match.end():]