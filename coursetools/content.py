"""Loading a book from its summary, and dumping the course content in order."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Sequence
from os import PathLike
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from .course import Courses
from .frontmatter import Book, Chapter

_LIST_ITEM = re.compile(
    r"^(?P<indent>[ \t]*)[-*+][ \t]+\[(?P<name>[^\]]*)\]\((?P<path>[^)]*)\)\s*$"
)
_PLAIN_ITEM = re.compile(r"^\[(?P<name>[^\]]*)\]\((?P<path>[^)]*)\)\s*$")
_HEADING = re.compile(r"^#{1,6}[ \t]+(?P<title>.+?)[ \t]*#*[ \t]*$")
_SEPARATOR = re.compile(r"^[ \t]*(?:-[ \t]*){3,}$")

PathArg = Union[str, "PathLike[str]"]


def _make_chapter(
    match: re.Match, src_dir: Path, number: Optional[list[int]], parents: list[str]
) -> Chapter:
    name = match["name"].strip()
    location = match["path"].strip()
    if not location:
        return Chapter(name=name, number=number, parent_names=parents)
    relative = PurePosixPath(location)
    content = (src_dir / relative).read_text(encoding="utf-8")
    return Chapter(
        name=name,
        content=content,
        number=number,
        path=relative,
        source_path=relative,
        parent_names=parents,
    )


def _parse_summary(text: str, src_dir: Path) -> Book:
    sections: list = []
    stack: list[tuple[int, Chapter]] = []
    top_number = 0
    started = False

    for line in text.splitlines():
        if not line.strip():
            continue
        item = _LIST_ITEM.match(line)
        if item:
            indent = len(item["indent"].expandtabs(4))
            while stack and stack[-1][0] >= indent:
                stack.pop()
            if stack:
                parent = stack[-1][1]
                siblings = parent.sub_items
                position = sum(isinstance(i, Chapter) for i in siblings) + 1
                number = [*(parent.number or []), position]
                parents = [*parent.parent_names, parent.name]
            else:
                top_number += 1
                siblings = sections
                number = [top_number]
                parents = []
            chapter = _make_chapter(item, src_dir, number, parents)
            siblings.append(chapter)
            stack.append((indent, chapter))
            started = True
            continue

        plain = _PLAIN_ITEM.match(line)
        if plain:
            stack.clear()
            sections.append(_make_chapter(plain, src_dir, None, []))
            started = True
            continue

        heading = _HEADING.match(line)
        if heading:
            stack.clear()
            if started:
                sections.append({"PartTitle": heading["title"]})
            # The first heading before any item is the summary's own title.
            started = True
            continue

        if _SEPARATOR.match(line):
            stack.clear()
            sections.append("Separator")
            started = True

    return Book(sections=sections)


def load_book(root_dir: PathArg = ".") -> Book:
    """Load the book rooted at ``root_dir`` from ``src/SUMMARY.md``."""
    src_dir = Path(root_dir) / "src"
    summary = (src_dir / "SUMMARY.md").read_text(encoding="utf-8")
    return _parse_summary(summary, src_dir)


def course_content(courses: Courses, src_dir: PathArg) -> str:
    """Return the raw sources of every slide, in course order, with headings."""
    src = Path(src_dir)
    lines: list[str] = []
    for course in courses:
        lines.append(f"# COURSE: {course.name}")
        for session in course:
            lines.append(f"# SESSION: {session.name}")
            for segment in session:
                lines.append(f"# SEGMENT: {segment.name}")
                for slide in segment:
                    lines.append(f"# SLIDE: {slide.name}")
                    lines.extend(
                        (src / path).read_text(encoding="utf-8")
                        for path in slide.source_paths
                    )
    return "".join(f"{line}\n" for line in lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="course-content",
        description="Print the content of every course, slide by slide",
    )
    parser.parse_args(argv)

    try:
        book = load_book(".")
    except (OSError, ValueError) as exc:
        print(f"Unable to load the book: {exc}", file=sys.stderr)
        return 1
    try:
        courses, _ = Courses.extract_structure(book)
    except ValueError as exc:
        print(f"Unable to extract course structure: {exc}", file=sys.stderr)
        return 1
    try:
        print(course_content(courses, Path("src")), end="")
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())