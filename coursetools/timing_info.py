"""Timing information for speaker notes."""

from __future__ import annotations

from .course import Slide
from .frontmatter import Chapter


def insert_timing_info(slide: Slide, chapter: Chapter) -> None:
    """Add the slide's expected duration to the chapter's speaker notes.

    Only the slide's first chapter is changed, and only when the slide takes
    time and the chapter has a ``<details>`` block.
    """
    if (
        slide.minutes > 0
        and not slide.is_sub_chapter(chapter)
        and "<details>" in chapter.content
    ):
        plural = "minute" if slide.minutes == 1 else "minutes"
        subslides = "and its sub-slides " if len(slide.source_paths) > 1 else ""
        message = f"This slide {subslides}should take about {slide.minutes} {plural}. "
        chapter.content = chapter.content.replace("<details>", f"<details>\n{message}")