"""Run the external trim tool."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field

from .trim_errors import ExternalToolFailed, TrimToolUnavailable


@dataclass(slots=True)
class TrimExecutor:
    """Execute ffmpeg with a prepared argument list, never through a shell."""

    binary: str = "ffmpeg"
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def locate(self) -> str:
        path = shutil.which(self.binary)
        if path is None:
            raise TrimToolUnavailable(f"{self.binary} not found in PATH")
        return path

    def execute(self, tool_path: str, args: Sequence[str]) -> None:
        """Run ``tool_path`` with ``args`` and wait for it to finish."""
        command = [tool_path, *args]
        try:
            proc = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise TrimToolUnavailable(f"cannot execute {tool_path}: {exc}") from exc

        output = proc.stdout or ""
        if proc.returncode != 0:
            # combined output stays in the log; callers only see the exit status
            self.log.error(
                "trim.execute.failed",
                extra={
                    "command": command,
                    "returncode": proc.returncode,
                    "output": output,
                },
            )
            raise ExternalToolFailed(proc.returncode, output)

        self.log.debug(
            "trim.execute.done",
            extra={"command": command, "output": output},
        )


__all__ = ["TrimExecutor"]
