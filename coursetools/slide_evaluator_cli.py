"""Command line for checking rendered slide sizes through a WebDriver server."""

from __future__ import annotations

import argparse
import contextlib
import logging
import signal
import sys
import threading
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from .evaluator import Evaluator, SlidePolicy, WebDriverClient, WebDriverError
from .slides import SlideBook

__version__ = "0.1.0"

log = logging.getLogger(__name__)


def _url(value: str) -> str:
    if not urlparse(value).scheme:
        raise argparse.ArgumentTypeError(f"invalid URL: {value!r}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slide-evaluator",
        description="Render every slide of a book and check its size",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--webdriver", default="http://localhost:4444",
                        help="the URI of the webdriver")
    parser.add_argument("--element", default='//*[@id="content"]/main',
                        help="the XPath to the element that is evaluated")
    parser.add_argument("-s", "--screenshot-dir", type=Path, default=None,
                        help="take screenshots of the content element")
    parser.add_argument("--base-url", type=_url, default="file:///",
                        help="base URL used to render the files")
    parser.add_argument("--export", type=Path, default=None,
                        help="export to this CSV file instead of stdout")
    parser.add_argument("--overwrite", action="store_true",
                        help="allow overwriting the export file")
    parser.add_argument("--webclient-width", type=int, default=1920)
    parser.add_argument("--webclient-height", type=int, default=1080)
    parser.add_argument("--width", type=int, default=750, help="max width of a slide")
    parser.add_argument("--height", type=int, default=1333,
                        help="max height of a slide")
    parser.add_argument("--violations-only", action="store_true",
                        help="only show violating slides")
    parser.add_argument("source_dir", type=Path,
                        help="directory of the book that is evaluated")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the command line; with no arguments, print help and exit."""
    parser = _build_parser()
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        parser.print_help(sys.stderr)
        raise SystemExit(2)
    return parser.parse_args(args)


@contextlib.contextmanager
def _cancel_on_interrupt(token: threading.Event) -> Iterator[None]:
    def handler(signum, frame):
        log.info("received CTRL+C")
        token.set()

    try:
        previous = signal.signal(signal.SIGINT, handler)
    except ValueError:
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING)
    args = parse_args(argv)

    try:
        book = SlideBook.from_html_slides(args.source_dir)
        client = WebDriverClient.connect(args.webdriver)
    except (OSError, WebDriverError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        client.set_window_size(args.webclient_width, args.webclient_height)
        token = threading.Event()
        evaluator = Evaluator(
            webclient=client,
            element_selector=args.element,
            screenshot_dir=args.screenshot_dir,
            html_base_url=args.base_url,
            source_dir=args.source_dir,
            cancellation_token=token,
            slide_policy=SlidePolicy(max_width=args.width, max_height=args.height),
        )
        with _cancel_on_interrupt(token):
            results = evaluator.eval_book(book)
        if args.export is not None:
            results.export_csv(args.export, args.overwrite, args.violations_only)
        else:
            results.export_stdout(args.violations_only)
    except (OSError, ValueError, KeyError, WebDriverError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        log.debug("closing webclient")
        try:
            client.close()
        except (requests.RequestException, WebDriverError) as exc:
            log.warning("failed to close webclient: %s", exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())