from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from video_trim.config import MediaPaths
from video_trim.i18n.locales import reset_locales

os.environ.setdefault("VIDEOTRIM_DEFAULT_LANG", "en")


@pytest.fixture(autouse=True)
def isolated_locales(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Keep seeded catalogs out of the checkout and restore the built-ins."""
    directory = tmp_path / "locales"
    monkeypatch.setenv("VIDEOTRIM_LOCALES_DIR", str(directory))
    yield directory
    reset_locales()


@pytest.fixture()
def media_paths(tmp_path: Path) -> MediaPaths:
    paths = MediaPaths(uploads=tmp_path / "uploads", outputs=tmp_path / "outputs")
    paths.uploads.mkdir()
    paths.outputs.mkdir()
    return paths
