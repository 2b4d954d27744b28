"""A book of rendered slides, gathered from the HTML files of a directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

PathArg = Union[str, "PathLike[str]"]


@dataclass(frozen=True)
class Slide:
    """A single page of the book."""

    filename: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "filename", Path(self.filename))


@dataclass(frozen=True)
class SlideBook:
    """A collection of slides below a source directory."""

    source_dir: Path
    slides: tuple[Slide, ...] = field(default_factory=tuple)

    @classmethod
    def from_html_slides(cls, source_dir: PathArg) -> "SlideBook":
        """Collect every ``.html`` file below ``source_dir``, in sorted order."""
        root = Path(source_dir)
        slides = []
        for path in sorted(root.rglob("*.html")):
            slide = Slide(path)
            log.debug("add %r", slide)
            slides.append(slide)
        return cls(source_dir=root, slides=tuple(slides))