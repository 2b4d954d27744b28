import pytest

from coursetools.markdown import Table, duration, relative_link


@pytest.mark.parametrize(
    ("doc", "target", "expected"),
    [
        ("welcome.md", "hello-world.md", "./hello-world.md"),
        ("hello-world.md", "hello-world/foo.md", "./hello-world/foo.md"),
        ("references/foo.md", "hello-world.md", "../hello-world.md"),
        ("references/foo/bar.md", "hello-world.md", "../../hello-world.md"),
        ("references/foo.md", "hello-world/foo.md", "../hello-world/foo.md"),
    ],
)
def test_relative_link(doc, target, expected):
    assert relative_link(doc, target) == expected


def test_relative_link_accepts_paths():
    from pathlib import PurePosixPath

    assert (
        relative_link(PurePosixPath("references/foo.md"), PurePosixPath("hello-world.md"))
        == "../hello-world.md"
    )


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [
        (0, "0 minutes"),
        (1, "1 minute"),
        (2, "2 minutes"),
        (7, "10 minutes"),
        (60, "1 hour"),
        (61, "1 hour and 5 minutes"),
        (120, "2 hours"),
        (130, "2 hours and 10 minutes"),
    ],
)
def test_duration(minutes, expected):
    assert duration(minutes) == expected


def test_duration_rejects_negative():
    with pytest.raises(ValueError):
        duration(-1)


def test_table():
    table = Table(["a", "b"])
    table.add_row(["a1", "b1"])
    table.add_row(["a2", "b2"])
    assert str(table) == "| a | b |\n| - | - |\n| a1 | b1 |\n| a2 | b2 |\n"


def test_table_rejects_wrong_row_length():
    table = Table(["a", "b"])
    with pytest.raises(ValueError):
        table.add_row(["only"])
    assert table.rows == []