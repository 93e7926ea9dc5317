import os
from pathlib import Path

import pytest

from video_trim.trim.path_guard import resolve, safe_basename
from video_trim.trim.trim_errors import PathViolation


def test_relative_candidate_resolves_under_root() -> None:
    assert resolve("clip1.mp4", "/data/uploads") == Path("/data/uploads/clip1.mp4")


def test_traversal_is_rejected() -> None:
    with pytest.raises(PathViolation):
        resolve("../../etc/passwd", "/data/uploads")


def test_root_itself_is_allowed() -> None:
    assert resolve("/data/uploads", "/data/uploads") == Path("/data/uploads")
    assert resolve(".", "/data/uploads") == Path("/data/uploads")


def test_sibling_with_common_prefix_is_rejected() -> None:
    with pytest.raises(PathViolation):
        resolve("/data/uploads-evil/clip.mp4", "/data/uploads")


def test_absolute_candidate_outside_root_is_rejected() -> None:
    with pytest.raises(PathViolation):
        resolve("/etc/passwd", "/data/uploads")


def test_dot_segments_inside_root_are_normalised() -> None:
    assert resolve("a/../b/./clip.mp4", "/data/uploads") == Path("/data/uploads/b/clip.mp4")


def test_relative_root_is_made_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    resolved = resolve("clip.mp4", "uploads")

    assert resolved == tmp_path / "uploads" / "clip.mp4"
    assert resolved.is_absolute()


def test_root_trailing_separator_is_ignored() -> None:
    root = "/data/uploads" + os.sep
    assert resolve("clip.mp4", root) == Path("/data/uploads/clip.mp4")


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("clip.mp4", "clip.mp4"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\me\\clip.mov", "clip.mov"),
        ("dir/sub/", ""),
        (None, ""),
    ],
)
def test_safe_basename(filename: str | None, expected: str) -> None:
    assert safe_basename(filename) == expected
