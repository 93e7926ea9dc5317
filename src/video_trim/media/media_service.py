"""Result storage handling."""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..config import MediaPaths
from ..trim import path_guard
from ..trim.trim_errors import IOFailure, PathViolation
from .temp_media_store import split_filename


@dataclass(slots=True)
class ResultStore:
    """Names and serves trimmed results in the output root."""

    paths: MediaPaths
    clock: Callable[[], float] = time.time
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def reserve_output(self, filename: str | None) -> Path:
        """Create and return an empty, previously unused output file for ``filename``.

        The file is created with exclusive mode, so concurrent batches that
        upload the same name never share an output path.
        """
        stem, suffix = split_filename(filename)
        for name in self._candidate_names(stem, suffix):
            candidate = path_guard.resolve(name, self.paths.outputs)
            try:
                with candidate.open("xb"):
                    pass
            except FileExistsError:
                continue
            except OSError as exc:
                raise IOFailure(f"cannot create output {candidate.name}: {exc}") from exc
            return candidate
        raise AssertionError("unreachable")  # pragma: no cover

    def _candidate_names(self, stem: str, suffix: str) -> Iterator[str]:
        yield f"{stem}-head{suffix}"
        stamp = int(self.clock())
        yield f"{stem}-head-{stamp}{suffix}"
        for counter in itertools.count(1):
            yield f"{stem}-head-{stamp}-{counter}{suffix}"

    def open_result(self, filename: str) -> Path | None:
        """Locate a finished result by basename, or ``None``."""
        name = path_guard.safe_basename(filename)
        if not name or name in {".", ".."}:
            return None
        try:
            path = path_guard.resolve(name, self.paths.outputs)
        except PathViolation:
            self.log.warning("media.result.path_violation", extra={"requested": filename})
            return None
        if not path.is_file():
            return None
        return path

    def remove(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            self.log.warning(
                "media.result.remove_failed",
                extra={"path": str(path), "error": str(exc)},
            )


__all__ = ["ResultStore"]
