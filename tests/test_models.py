from __future__ import annotations

import pytest

from branchhop.models import EMPTY_COMMIT_MESSAGE, Commit


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, EMPTY_COMMIT_MESSAGE),
        ("", EMPTY_COMMIT_MESSAGE),
        ("subject\n\nbody\n", "subject"),
        ("windows\r\nbody", "windows"),
        ("\nbody", ""),
        ("fix\x0cfoo", "fix\x0cfoo"),
        ("a\x0bb\x1cc\x85d e\nrest", "a\x0bb\x1cc\x85d e"),
        ("lone\rcarriage", "lone\rcarriage"),
    ],
)
def test_first_line_splits_only_on_newline(raw: str | None, expected: str) -> None:
    assert Commit.first_line(raw) == expected
