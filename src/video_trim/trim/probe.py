"""Media duration lookup through ffprobe."""

from __future__ import annotations

import logging
import math
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from .trim_errors import ProbeFailed, ProbeInvalid, ProbeUnavailable


def probe_args(input_path: Path) -> list[str]:
    """Arguments requesting only the container duration as a bare number."""
    return [
        "-v",
        "error",
        "-show_entries",
        "format=duration",
        "-of",
        "default=noprint_wrappers=1:nokey=1",
        str(input_path),
    ]


def parse_duration(raw: str) -> float:
    """Parse ffprobe output into a positive, finite number of seconds."""
    text = raw.strip()
    if not text:
        raise ProbeFailed("empty duration from ffprobe")
    try:
        value = float(text)
    except ValueError as exc:
        raise ProbeInvalid(f"invalid duration value: {text!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ProbeInvalid(f"invalid media duration: {text!r}")
    return value


@dataclass(slots=True)
class DurationProber:
    """Run ffprobe against staged inputs."""

    binary: str = "ffprobe"
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def locate(self) -> str:
        path = shutil.which(self.binary)
        if path is None:
            raise ProbeUnavailable(f"{self.binary} not found in PATH")
        return path

    def probe(self, input_path: Path) -> float:
        """Return the duration of ``input_path`` in seconds."""
        tool = self.locate()
        try:
            proc = subprocess.run(
                [tool, *probe_args(input_path)],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ProbeUnavailable(f"cannot execute {tool}: {exc}") from exc

        if proc.returncode != 0:
            self.log.warning(
                "trim.probe.failed",
                extra={
                    "path": str(input_path),
                    "returncode": proc.returncode,
                    "stderr": (proc.stderr or "").strip(),
                },
            )
            raise ProbeFailed(f"ffprobe exited with status {proc.returncode}")

        duration = parse_duration(proc.stdout or "")
        self.log.info(
            "trim.probe.done",
            extra={"path": str(input_path), "duration_seconds": duration},
        )
        return duration


__all__ = ["DurationProber", "parse_duration", "probe_args"]
