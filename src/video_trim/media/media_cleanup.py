"""Helpers for clearing staged uploads and results."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..config import MediaPaths

logger = logging.getLogger(__name__)


def _remove_entry(path: Path) -> bool:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("media.cleanup.remove_failed", extra={"path": str(path), "error": str(exc)})
        return False
    return True


def clear_media(paths: MediaPaths) -> int:
    """Remove everything inside the upload and output roots, keeping the roots."""
    removed = 0
    for directory in (paths.uploads, paths.outputs):
        try:
            entries = list(directory.iterdir())
        except OSError as exc:
            logger.warning(
                "media.cleanup.read_dir_failed",
                extra={"path": str(directory), "error": str(exc)},
            )
            continue
        for entry in entries:
            if _remove_entry(entry):
                removed += 1
    logger.info("media.cleanup.cleared", extra={"removed": removed})
    return removed


__all__ = ["clear_media"]
