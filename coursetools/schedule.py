"""Summaries of course schedules, compared with their target durations."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Optional

from .content import load_book
from .course import Courses
from .markdown import duration


def timediff(actual: int, target: int, slop: int) -> str:
    """Describe ``actual`` minutes, noting how far it is from ``target``.

    Differences of at most ``slop`` minutes are not mentioned.
    """
    if actual > target + slop:
        return f"{duration(actual)} (\u23f0 *{duration(actual - target)} too long*)"
    if actual + slop < target:
        return f"{duration(actual)}: ({duration(target - actual)} short)"
    return duration(actual)


def session_summary(courses: Courses) -> str:
    """A Markdown summary of every session and its segments."""
    lines: list[str] = []
    for course in courses:
        if course.target_minutes() == 0:
            break
        for session in course:
            lines.append(f"### {course.name} // {session.name}")
            lines.append(
                f"_{timediff(session.minutes(), session.target_minutes(), 15)}_"
            )
            lines.append("")
            lines.extend(
                f"* {segment.name} - _{duration(segment.minutes())}_"
                for segment in session
            )
            lines.append("")
    return "".join(f"{line}\n" for line in lines)


def pr_summary(courses: Courses) -> str:
    """A Markdown course schedule suitable for a pull request description."""
    lines = [
        "## Course Schedule",
        "With this pull request applied, the course schedule is as follows:",
    ]
    for course in courses:
        if course.target_minutes() == 0:
            break
        lines.append(f"### {course.name}")
        lines.append(f"_{timediff(course.minutes(), course.target_minutes(), 15)}_")
        lines.extend(
            f"* {session.name} - "
            f"_{timediff(session.minutes(), session.target_minutes(), 5)}_"
            for session in course
        )
    return "".join(f"{line}\n" for line in lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="course-schedule", description="Summarise the course schedule"
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("sessions", help="Show session summary (default)")
    commands.add_parser("segments", help="Show segment summary")
    commands.add_parser("pr", help="Show summary for a PR")
    args = parser.parse_args(argv)

    try:
        courses, _ = Courses.extract_structure(load_book("."))
    except (OSError, ValueError) as exc:
        print(f"Unable to load the book: {exc}", file=sys.stderr)
        return 1

    if args.command == "pr":
        print(pr_summary(courses), end="")
    else:
        print(session_summary(courses), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())