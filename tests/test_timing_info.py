from pathlib import PurePosixPath

from coursetools.course import Slide
from coursetools.frontmatter import Chapter
from coursetools.timing_info import insert_timing_info


def _slide(minutes, *paths):
    return Slide("s", minutes=minutes, source_paths=[PurePosixPath(p) for p in paths])


def _chapter(content, source="a.md"):
    return Chapter(name="a", content=content, source_path=source)


def test_inserts_minutes():
    chapter = _chapter("Body\n<details>notes</details>")
    insert_timing_info(_slide(3, "a.md"), chapter)
    assert chapter.content == (
        "Body\n<details>\nThis slide should take about 3 minutes. notes</details>"
    )


def test_singular_minute():
    chapter = _chapter("<details>")
    insert_timing_info(_slide(1, "a.md"), chapter)
    assert chapter.content == "<details>\nThis slide should take about 1 minute. "


def test_mentions_sub_slides():
    chapter = _chapter("<details>")
    insert_timing_info(_slide(7, "a.md", "a/b.md"), chapter)
    assert chapter.content == (
        "<details>\nThis slide and its sub-slides should take about 7 minutes. "
    )


def test_replaces_every_details_block():
    chapter = _chapter("<details>x</details><details>y</details>")
    insert_timing_info(_slide(2, "a.md"), chapter)
    assert chapter.content.count("This slide should take about 2 minutes. ") == 2


def test_zero_minutes_leaves_content():
    chapter = _chapter("<details>notes</details>")
    insert_timing_info(_slide(0, "a.md"), chapter)
    assert chapter.content == "<details>notes</details>"


def test_sub_chapter_left_alone():
    chapter = _chapter("<details>notes</details>", source="a/b.md")
    insert_timing_info(_slide(5, "a.md", "a/b.md"), chapter)
    assert chapter.content == "<details>notes</details>"


def test_no_details_left_alone():
    chapter = _chapter("Plain text")
    insert_timing_info(_slide(5, "a.md"), chapter)
    assert chapter.content == "Plain text"