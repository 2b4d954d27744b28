from pathlib import Path

from coursetools.slides import Slide, SlideBook


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<html></html>", encoding="utf-8")


def test_collects_html_files_recursively_in_sorted_order(tmp_path):
    for rel in ["b.html", "a.html", "sub/c.html", "sub/deeper/d.html",
                "notes.txt", "sub/e.md"]:
        _touch(tmp_path / rel)
    book = SlideBook.from_html_slides(tmp_path)
    assert [slide.filename for slide in book.slides] == [
        tmp_path / "a.html",
        tmp_path / "b.html",
        tmp_path / "sub" / "c.html",
        tmp_path / "sub" / "deeper" / "d.html",
    ]


def test_keeps_source_dir(tmp_path):
    _touch(tmp_path / "x.html")
    book = SlideBook.from_html_slides(tmp_path)
    assert book.source_dir == tmp_path


def test_accepts_string_path(tmp_path):
    _touch(tmp_path / "x.html")
    from_str = SlideBook.from_html_slides(str(tmp_path))
    from_path = SlideBook.from_html_slides(tmp_path)
    assert from_str.slides == from_path.slides
    assert len(from_str.slides) == 1


def test_empty_directory_has_no_slides(tmp_path):
    assert SlideBook.from_html_slides(tmp_path).slides == ()


def test_missing_directory_has_no_slides(tmp_path):
    assert SlideBook.from_html_slides(tmp_path / "missing").slides == ()


def test_slides_compare_by_filename():
    assert Slide(Path("a/b.html")) == Slide("a/b.html")
    assert len({Slide(Path("a.html")), Slide("a.html"), Slide("b.html")}) == 2