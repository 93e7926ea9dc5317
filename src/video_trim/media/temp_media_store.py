"""Temporary staging of uploaded source files."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from ..config import MediaPaths
from ..trim import path_guard
from ..trim.trim_errors import IOFailure
from ..trim.trim_models import UploadHandle

CHUNK_SIZE = 1 * 1024 * 1024  # 1 MiB
DEFAULT_EXTENSION = ".mp4"


def split_filename(filename: str | None) -> tuple[str, str]:
    """Return ``(stem, extension)`` of the sanitized basename.

    Files without an extension are treated as ``.mp4``.
    """
    base = path_guard.safe_basename(filename)
    suffix = Path(base).suffix if base not in {".", ".."} else ""
    stem = base[: -len(suffix)] if suffix else base
    return (stem or "video", suffix or DEFAULT_EXTENSION)


@dataclass(slots=True)
class TempMediaStore:
    """Copies uploads into the staging root and removes them afterwards."""

    paths: MediaPaths
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def staging_path(self, filename: str | None, submitted_at_ns: int, index: int) -> Path:
        _, suffix = split_filename(filename)
        name = f"input_{submitted_at_ns}_{index}{suffix}"
        return path_guard.resolve(name, self.paths.uploads)

    def persist_upload(self, upload: UploadHandle, target: Path) -> Path:
        """Copy the upload stream to ``target`` and close the stream."""
        try:
            stream = upload.open_stream()
        except OSError as exc:
            raise IOFailure(f"cannot open upload {upload.filename!r}: {exc}") from exc

        try:
            with stream, target.open("xb") as sink:
                shutil.copyfileobj(stream, sink, CHUNK_SIZE)
        except FileExistsError as exc:
            raise IOFailure(f"staging file {target.name} already exists") from exc
        except OSError as exc:
            self.remove(target)
            raise IOFailure(f"cannot stage upload {upload.filename!r}: {exc}") from exc

        self.log.info(
            "media.temp.persisted",
            extra={"upload_name": upload.filename, "path": str(target)},
        )
        return target

    def remove(self, path: Path) -> bool:
        """Delete a staged file; failures are logged, never raised."""
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            self.log.warning(
                "media.temp.remove_failed",
                extra={"path": str(path), "error": str(exc)},
            )
            return False
        return True


__all__ = ["CHUNK_SIZE", "DEFAULT_EXTENSION", "TempMediaStore", "split_filename"]
