"""Rendering slides in a browser and checking their size against a policy."""

from __future__ import annotations

import base64
import csv
import enum
import logging
import math
import sys
import threading
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Optional, Protocol, Union
from urllib.parse import quote, urljoin

import requests

from .slides import Slide, SlideBook

log = logging.getLogger(__name__)

PathArg = Union[str, "PathLike[str]"]

ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
"""Key under which a WebDriver element reference is returned."""

_EXPORT_FIELDS = ("filename", "element_width", "element_height", "policy_violations")
_USIZE_MAX = 2**64 - 1
_TIMEOUT = 120


def _to_usize(value: float) -> int:
    """Convert to a non-negative integer the way a saturating cast does."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _USIZE_MAX if value > 0 else 0
    return min(max(0, int(value)), _USIZE_MAX)


def _round_half_away(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _display_float(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class ElementSize:
    """Width and height of a rendered element."""

    width: float
    height: float

    @classmethod
    def from_rect(cls, rect: tuple[float, float, float, float]) -> "ElementSize":
        """Build from an ``(x, y, width, height)`` rectangle."""
        _, _, width, height = rect
        return cls(width=float(width), height=float(height))


class PolicyViolation(enum.Enum):
    MAX_WIDTH = "MaxWidth"
    MAX_HEIGHT = "MaxHeight"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SlidePolicy:
    """Limits that a rendered slide must respect."""

    max_width: int
    max_height: int

    def _eval_width(self, size: ElementSize) -> Optional[PolicyViolation]:
        if _to_usize(size.width) > self.max_width:
            return PolicyViolation.MAX_WIDTH
        return None

    def _eval_height(self, size: ElementSize) -> Optional[PolicyViolation]:
        if _to_usize(size.height) > self.max_height:
            return PolicyViolation.MAX_HEIGHT
        return None

    def eval_size(self, element_size: ElementSize) -> list[PolicyViolation]:
        """Return every size violation, height first."""
        checks = (self._eval_height(element_size), self._eval_width(element_size))
        return [violation for violation in checks if violation is not None]


@dataclass
class EvaluationResult:
    slide: Slide
    element_size: ElementSize
    policy_violations: list[PolicyViolation] = field(default_factory=list)

    def violations_text(self) -> str:
        return ";".join(str(v) for v in self.policy_violations)


@dataclass
class EvaluationResults:
    book: Optional[SlideBook]
    results: list[EvaluationResult] = field(default_factory=list)

    def _selected(self, violations_only: bool) -> list[EvaluationResult]:
        return [r for r in self.results if r.policy_violations or not violations_only]

    def export_csv(self, file: PathArg, overwrite: bool, violations_only: bool) -> None:
        """Write the results to a CSV file, refusing to replace one unless allowed."""
        path = Path(file)
        if path.exists() and not overwrite:
            raise FileExistsError(
                f"Not allowed to overwrite existing evaluation results at {path}"
            )
        rows = self._selected(violations_only)
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            if rows:
                writer.writerow(_EXPORT_FIELDS)
            for result in rows:
                writer.writerow([
                    str(result.slide.filename),
                    _to_usize(_round_half_away(result.element_size.width)),
                    _to_usize(_round_half_away(result.element_size.height)),
                    result.violations_text(),
                ])

    def export_stdout(self, violations_only: bool) -> None:
        """Print one line per result to standard output."""
        for result in self._selected(violations_only):
            size = result.element_size
            print(
                f"{result.slide.filename}: "
                f"{_display_float(size.width)}x{_display_float(size.height)} "
                f"[{result.violations_text()}]",
                file=sys.stdout,
            )


class WebDriverError(Exception):
    """An error reported by the WebDriver server."""

    def __init__(self, error: str, message: str = "") -> None:
        super().__init__(f"{error}: {message}" if message else error)
        self.error = error
        self.message = message


def _request(
    http: requests.Session, method: str, url: str, payload: Optional[dict] = None
) -> Any:
    response = http.request(method, url, json=payload, timeout=_TIMEOUT)
    try:
        body = response.json()
    except ValueError:
        body = None
    value = body.get("value") if isinstance(body, dict) else None
    if isinstance(value, dict) and "error" in value:
        raise WebDriverError(str(value["error"]), str(value.get("message", "")))
    if not response.ok:
        raise WebDriverError("unknown error", f"HTTP {response.status_code}")
    return value


class WebDriverClient:
    """A minimal client for a W3C WebDriver session."""

    def __init__(
        self, base_url: str, session_id: str, http: Optional[requests.Session] = None
    ) -> None:
        self._base = base_url.rstrip("/")
        self.session_id = session_id
        self._http = http if http is not None else requests.Session()

    @classmethod
    def connect(cls, url: str) -> "WebDriverClient":
        """Open a new session on the WebDriver server at ``url``."""
        http = requests.Session()
        value = _request(
            http, "POST", f"{url.rstrip('/')}/session",
            {"capabilities": {"alwaysMatch": {}}},
        )
        session_id = value.get("sessionId") if isinstance(value, dict) else None
        if not isinstance(session_id, str):
            http.close()
            raise WebDriverError("session not created", "no session id in response")
        return cls(url, session_id, http)

    def _command(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        url = f"{self._base}/session/{self.session_id}{path}"
        return _request(self._http, method, url, payload)

    def goto(self, url: str) -> None:
        log.debug("open url in webclient: %s", url)
        self._command("POST", "/url", {"url": url})

    def find_xpath(self, xpath: str) -> Optional[str]:
        """Return the reference of the first element matching ``xpath``, or None."""
        try:
            value = self._command("POST", "/element", {"using": "xpath", "value": xpath})
        except WebDriverError as exc:
            if exc.error == "no such element":
                return None
            raise
        if not isinstance(value, dict) or ELEMENT_KEY not in value:
            raise WebDriverError("unknown error", "no element reference in response")
        return str(value[ELEMENT_KEY])

    def rectangle(self, element: str) -> ElementSize:
        value = self._command("GET", f"/element/{element}/rect")
        return ElementSize.from_rect(
            (value["x"], value["y"], value["width"], value["height"])
        )

    def screenshot(self, element: str) -> bytes:
        """Return a PNG screenshot of the element."""
        value = self._command("GET", f"/element/{element}/screenshot")
        return base64.b64decode(value)

    def set_window_size(self, width: int, height: int) -> None:
        self._command("POST", "/window/rect", {"width": width, "height": height})

    def close(self) -> None:
        """End the session so the server can reuse it."""
        try:
            self._command("DELETE", "")
        finally:
            self._http.close()

    def __enter__(self) -> "WebDriverClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class _Browser(Protocol):
    def goto(self, url: str) -> None: ...

    def find_xpath(self, xpath: str) -> Optional[Any]: ...

    def rectangle(self, element: Any) -> ElementSize: ...

    def screenshot(self, element: Any) -> bytes: ...


@dataclass
class Evaluator:
    """Renders slides, measures an element on each and checks it against a policy."""

    webclient: _Browser
    element_selector: str
    screenshot_dir: Optional[Path]
    html_base_url: str
    source_dir: Path
    cancellation_token: threading.Event = field(default_factory=threading.Event)
    slide_policy: SlidePolicy = field(default_factory=lambda: SlidePolicy(750, 1333))

    def __post_init__(self) -> None:
        self.source_dir = Path(self.source_dir)
        if self.screenshot_dir is not None:
            self.screenshot_dir = Path(self.screenshot_dir)

    def _slide_url(self, slide: Slide) -> str:
        return urljoin(self.html_base_url, quote(slide.filename.as_posix(), safe="/~"))

    def _store_screenshot(self, screenshot: bytes, filename: Path) -> Path:
        assert self.screenshot_dir is not None
        relative = Path(filename).relative_to(self.source_dir)
        output = self.screenshot_dir / relative.with_suffix(".png")
        log.debug("write screenshot to %s", output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(screenshot)
        return output

    def eval_slide(self, slide: Slide) -> Optional[EvaluationResult]:
        """Evaluate one slide; None if the page has no matching element."""
        log.debug("evaluating %r", slide)
        self.webclient.goto(self._slide_url(slide))
        element = self.webclient.find_xpath(self.element_selector)
        if element is None:
            return None
        size = self.webclient.rectangle(element)
        if self.screenshot_dir is not None:
            self._store_screenshot(self.webclient.screenshot(element), slide.filename)
        result = EvaluationResult(slide, size, self.slide_policy.eval_size(size))
        log.debug("information about element: %r", result)
        return result

    def eval_book(self, book: SlideBook) -> EvaluationResults:
        """Evaluate every slide, stopping early once cancelled."""
        results = []
        log.debug("slide count: %d", len(book.slides))
        for slide in book.slides:
            if self.cancellation_token.is_set():
                log.debug("received cancel request, return already completed results")
                break
            result = self.eval_slide(slide)
            if result is None:
                log.warning("slide with no content - ignore: %r", slide)
                continue
            results.append(result)
        return EvaluationResults(book=book, results=results)