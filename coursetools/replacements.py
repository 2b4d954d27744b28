"""Expansion of ``{{%...}}`` directives in chapter content."""

from __future__ import annotations

import re
from typing import Optional

from .course import Course, Courses, Segment, Session
from .frontmatter import Chapter

_DIRECTIVE = re.compile(r"\{\{%([^}]*)\}\}")


def replace(
    courses: Courses,
    course: Optional[Course],
    session: Optional[Session],
    segment: Optional[Segment],
    chapter: Chapter,
) -> None:
    """Replace supported directives in the chapter with generated content.

    Supported directives are ``session outline``, ``segment outline``,
    ``course outline`` and ``course outline NAME``. Any other directive is
    replaced by its own text.
    """
    if chapter.source_path is None:
        return

    def expand(match: re.Match[str]) -> str:
        directive = match.group(1).strip()
        words = directive.split()
        if words == ["session", "outline"] and session is not None:
            return session.outline()
        if words == ["segment", "outline"] and segment is not None:
            return segment.outline()
        if words == ["course", "outline"] and course is not None:
            return course.schedule()
        if len(words) == 3 and words[:2] == ["course", "outline"]:
            found = courses.find_course(words[2])
            if found is None:
                return f"not found - {match.group(0)}"
            return found.schedule()
        return directive

    chapter.content = _DIRECTIVE.sub(expand, chapter.content)