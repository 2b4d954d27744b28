from pathlib import Path

from coursetools.course import Courses
from coursetools.frontmatter import Book, Chapter
from coursetools.markdown import duration
from coursetools.schedule import main, pr_summary, session_summary, timediff


def _chapter(name, frontmatter=""):
    body = f"---\n{frontmatter}---\nBody\n" if frontmatter else "Body\n"
    path = f"{name.lower()}.md"
    return Chapter(name=name, content=body, path=path, source_path=path)


def _courses(*chapters):
    courses, _ = Courses.extract_structure(Book(sections=list(chapters)))
    return courses


def _timed_courses():
    return _courses(
        _chapter(
            "A", "course: Fundamentals\nsession: Day 1\nminutes: 20\ntarget_minutes: 60\n"
        ),
        _chapter("B", "minutes: 30\n"),
    )


def test_timediff_too_long():
    assert timediff(100, 60, 15) == f"{duration(100)} (\u23f0 *{duration(40)} too long*)"


def test_timediff_short():
    assert timediff(30, 60, 15) == f"{duration(30)}: ({duration(30)} short)"


def test_timediff_within_slop():
    assert timediff(70, 60, 15) == duration(70)
    assert timediff(60, 60, 0) == "1 hour"


def test_session_summary():
    expected = (
        "### Fundamentals // Day 1\n"
        "_1 hour_\n"
        "\n"
        f"* A - _{duration(20)}_\n"
        f"* B - _{duration(30)}_\n"
        "\n"
    )
    assert session_summary(_timed_courses()) == expected


def test_pr_summary():
    expected = (
        "## Course Schedule\n"
        "With this pull request applied, the course schedule is as follows:\n"
        "### Fundamentals\n"
        "_1 hour_\n"
        "* Day 1 - _1 hour_\n"
    )
    assert pr_summary(_timed_courses()) == expected


def test_untimed_course_stops_summaries():
    courses = _courses(
        _chapter("A", "course: Untimed\nsession: S\n"),
        _chapter("B", "course: Timed\nsession: S\nminutes: 10\n"),
    )
    assert session_summary(courses) == ""
    assert pr_summary(courses).count("\n") == 2


def _write_book(root: Path) -> None:
    src = root / "src"
    src.mkdir()
    (src / "SUMMARY.md").write_text("- [A](a.md)\n- [B](b.md)\n", encoding="utf-8")
    (src / "a.md").write_text(
        "---\ncourse: Fundamentals\nsession: Day 1\nminutes: 20\ntarget_minutes: 60\n---\nA\n",
        encoding="utf-8",
    )
    (src / "b.md").write_text("---\nminutes: 30\n---\nB\n", encoding="utf-8")


def test_main_defaults_to_session_summary(tmp_path, monkeypatch, capsys):
    _write_book(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert capsys.readouterr().out == session_summary(_timed_courses())


def test_main_pr(tmp_path, monkeypatch, capsys):
    _write_book(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["pr"]) == 0
    assert capsys.readouterr().out == pr_summary(_timed_courses())


def test_main_without_book_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["sessions"]) == 1