"""The course hierarchy: courses, sessions, segments and slides.

The structure is read from a book. Chapters are taken in the order the book
lists them, and annotations in each chapter's frontmatter group them:

* a ``course`` property starts a new course (``none`` ends the current one),
* a ``session`` property starts a new session within the course,
* every top-level chapter inside a session is a segment, and is also the
  first slide of that segment,
* sub-chapters of a segment are further slides, and their own sub-chapters
  belong to the same slide.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Optional

from .frontmatter import Book, Chapter, Frontmatter, split_frontmatter
from .markdown import Table, duration

BREAK_DURATION = 10
"""Minutes of break between segments."""


class CourseStructureError(ValueError):
    """Raised when the book's annotations do not describe a valid course."""


def _describe(path: Any) -> str:
    return "None" if path is None else repr(str(path))


def _take_frontmatter(chapter: Chapter) -> Frontmatter:
    """Split the frontmatter off a chapter, leaving the rest as its content."""
    frontmatter, content = split_frontmatter(chapter)
    chapter.content = content
    return frontmatter


def _sub_chapters(chapter: Chapter) -> Iterator[Chapter]:
    return (item for item in chapter.sub_items if isinstance(item, Chapter))


def _duration_table(heading: str, entries: Iterable[tuple[str, int]]) -> Table:
    """Tabulate named durations, skipping entries that take no time."""
    table = Table([heading, "Duration"])
    for name, minutes in entries:
        if minutes:
            table.add_row([name, duration(minutes)])
    return table


@dataclass
class Slide:
    """A single topic, possibly made of several chapters."""

    name: str
    minutes: int = 0
    source_paths: list[PurePosixPath] = field(default_factory=list)

    @classmethod
    def _from_chapter(cls, frontmatter: Frontmatter, chapter: Chapter) -> "Slide":
        slide = cls(name=chapter.name)
        slide._add(frontmatter, chapter)
        return slide

    def _add(self, frontmatter: Frontmatter, chapter: Chapter) -> None:
        self.minutes += frontmatter.minutes or 0
        if chapter.source_path is not None:
            self.source_paths.append(chapter.source_path)

    def _add_sub_chapters(self, chapter: Chapter) -> None:
        for sub_chapter in _sub_chapters(chapter):
            frontmatter = _take_frontmatter(sub_chapter)
            if frontmatter.course is not None or frontmatter.session is not None:
                raise CourseStructureError(
                    f"{_describe(sub_chapter.path)}: "
                    "sub-slides may not have 'course' or 'session' set"
                )
            self._add(frontmatter, sub_chapter)
            self._add_sub_chapters(sub_chapter)

    def is_sub_chapter(self, chapter: Chapter) -> bool:
        """Return True unless the chapter is the slide's first (parent) chapter."""
        first = self.source_paths[0] if self.source_paths else None
        return chapter.source_path != first


@dataclass
class Segment:
    """A collection of slides with a related theme."""

    name: str
    slides: list[Slide] = field(default_factory=list)

    def __iter__(self) -> Iterator[Slide]:
        return iter(self.slides)

    def _add_slide(
        self, frontmatter: Frontmatter, chapter: Chapter, recurse: bool
    ) -> None:
        slide = Slide._from_chapter(frontmatter, chapter)
        if recurse:
            slide._add_sub_chapters(chapter)
        self.slides.append(slide)

    def minutes(self) -> int:
        """Total duration of the slides in this segment."""
        return sum(slide.minutes for slide in self)

    def outline(self) -> str:
        """A Markdown outline of the segment's slides."""
        slides = _duration_table("Slide", ((s.name, s.minutes) for s in self))
        return (
            f"This segment should take about {duration(self.minutes())}. "
            f"It contains:\n\n{slides}"
        )


@dataclass
class Session:
    """A block of instructional time made of segments."""

    name: str
    segments: list[Segment] = field(default_factory=list)
    _target_minutes: int = field(default=0, repr=False)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def _add_segment(self, frontmatter: Frontmatter, chapter: Chapter) -> None:
        segment = Segment(name=chapter.name)
        segment._add_slide(frontmatter, chapter, recurse=False)
        for sub_chapter in _sub_chapters(chapter):
            sub_frontmatter = _take_frontmatter(sub_chapter)
            segment._add_slide(sub_frontmatter, sub_chapter, recurse=True)
        self.segments.append(segment)

    def minutes(self) -> int:
        """Total duration, including breaks between segments that take time."""
        timed = [segment.minutes() for segment in self if segment.minutes() > 0]
        if not timed:
            return 0
        return sum(timed) + (len(timed) - 1) * BREAK_DURATION

    def target_minutes(self) -> int:
        """The declared target duration, or the actual duration if none is set."""
        return self._target_minutes if self._target_minutes > 0 else self.minutes()

    def outline(self) -> str:
        """A Markdown outline of the session's segments."""
        segments = _duration_table("Segment", ((s.name, s.minutes()) for s in self))
        return (
            f"Including {BREAK_DURATION} minute breaks, this session should take "
            f"about {duration(self.minutes())}. It contains:\n\n{segments}"
        )


@dataclass
class Course:
    """The level of content at which students enroll."""

    name: str
    sessions: list[Session] = field(default_factory=list)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions)

    def _session(self, name: str) -> Session:
        for session in self.sessions:
            if session.name == name:
                return session
        session = Session(name=name)
        self.sessions.append(session)
        return session

    def minutes(self) -> int:
        """Sum of the session durations (breaks between sessions not counted)."""
        return sum(session.minutes() for session in self)

    def target_minutes(self) -> int:
        """Sum of the session target durations."""
        return sum(session.target_minutes() for session in self)

    def schedule(self) -> str:
        """A Markdown schedule of the whole course."""
        parts = ["Course schedule:\n"]
        for session in self:
            parts.append(
                f" * {session.name} ({duration(session.minutes())}, including breaks)\n\n"
            )
            segments = _duration_table(
                "Segment", ((s.name, s.minutes()) for s in session)
            )
            parts.append(f"{segments}\n\n")
        return "".join(parts)


@dataclass
class Courses:
    """All courses found in a book, in order of first appearance."""

    courses: list[Course] = field(default_factory=list)

    def __iter__(self) -> Iterator[Course]:
        return iter(self.courses)

    def _course(self, name: str) -> Course:
        found = self.find_course(name)
        if found is not None:
            return found
        course = Course(name=name)
        self.courses.append(course)
        return course

    @classmethod
    def extract_structure(cls, book: Book) -> tuple["Courses", Book]:
        """Read the course structure from a book.

        The frontmatter is stripped from every chapter that is visited; the
        same (modified) book is returned alongside the structure.
        """
        courses = cls()
        course_name: Optional[str] = None
        session_name: Optional[str] = None

        for chapter in book.sections:
            if not isinstance(chapter, Chapter):
                continue
            frontmatter = _take_frontmatter(chapter)

            if frontmatter.course is not None:
                session_name = None
                course_name = None if frontmatter.course == "none" else frontmatter.course

            if frontmatter.session is not None:
                session_name = frontmatter.session

            if course_name is not None and session_name is None:
                raise CourseStructureError(
                    f"{_describe(chapter.path)}: "
                    "'session' must appear in frontmatter when 'course' appears"
                )

            if course_name is not None and session_name is not None:
                session = courses._course(course_name)._session(session_name)
                session._target_minutes += frontmatter.target_minutes or 0
                session._add_segment(frontmatter, chapter)

        return courses, book

    def find_course(self, name: str) -> Optional[Course]:
        """Return the course with this name, or None."""
        return next((course for course in self if course.name == name), None)

    def find_slide(
        self, chapter: Chapter
    ) -> Optional[tuple[Course, Session, Segment, Slide]]:
        """Return the course, session, segment and slide holding this chapter."""
        source_path = chapter.source_path
        if source_path is None:
            return None
        for course in self:
            for session in course:
                for segment in session:
                    for slide in segment:
                        if source_path in slide.source_paths:
                            return course, session, segment, slide
        return None