import pytest

from src.storage.errors import InvalidName
from src.storage.naming import sanitize_name


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("report.pdf", "report.pdf"),
        ("../../etc/passwd", "passwd"),
        ("/abs/path/notes.txt", "notes.txt"),
        ("C:\\Users\\me\\report.pdf", "report.pdf"),
        ("..\\..\\boot.ini", "boot.ini"),
    ],
)
def test_sanitize_name_keeps_base_name(raw, expected):
    assert sanitize_name(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "..", ".", "dir/", "a/..", None, "bad\x00name"])
def test_sanitize_name_rejects_unusable_names(raw):
    with pytest.raises(InvalidName):
        sanitize_name(raw)
