"""Confine filesystem paths to their designated root directories."""

from __future__ import annotations

import os
from pathlib import Path

from .trim_errors import PathViolation


def resolve(candidate: str | os.PathLike[str], required_root: str | os.PathLike[str]) -> Path:
    """Return the absolute form of ``candidate`` if it lies under ``required_root``.

    Relative candidates are interpreted relative to ``required_root``. Paths
    are normalised (``..`` collapsed) but symbolic links are not followed.
    """
    root = os.path.abspath(os.fspath(required_root))
    resolved = os.path.abspath(os.path.join(root, os.fspath(candidate)))
    if resolved != root and not resolved.startswith(root.rstrip(os.sep) + os.sep):
        raise PathViolation(f"path {os.fspath(candidate)!r} escapes {root}")
    return Path(resolved)


def safe_basename(filename: str | None) -> str:
    """Strip any directory component from a client supplied filename."""
    if not filename:
        return ""
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    return name.strip()


__all__ = ["resolve", "safe_basename"]
