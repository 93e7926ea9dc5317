"""Test doubles for uploads and the external media tools."""

from __future__ import annotations

import io
import os
import stat
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from video_trim.trim.trim_errors import ExternalToolFailed

MP4_HEAD = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 52
MKV_HEAD = b"\x1a\x45\xdf\xa3" + b"\x00" * 60
AVI_HEAD = b"RIFF\x10\x00\x00\x00AVI LIST" + b"\x00" * 48
FLV_HEAD = b"FLV\x01\x05" + b"\x00" * 59
TS_HEAD = b"\x47\x40\x00\x10" + b"\xff" * 60
PNG_HEAD = b"\x89PNG\r\n\x1a\n" + b"\x00" * 56


@dataclass(slots=True)
class BytesUploadHandle:
    filename: str | None
    data: bytes
    streams: list[BinaryIO] = field(default_factory=list)

    @property
    def size(self) -> int | None:
        return len(self.data)

    def open_stream(self) -> BinaryIO:
        stream = io.BytesIO(self.data)
        self.streams.append(stream)
        return stream


@dataclass(slots=True)
class FakeExecutor:
    """Pretends to be ffmpeg: copies the staged input to the output path."""

    fail_for: set[bytes] = field(default_factory=set)
    calls: list[list[str]] = field(default_factory=list)

    def locate(self) -> str:
        return "/usr/bin/ffmpeg"

    def execute(self, tool_path: str, args: list[str]) -> None:
        self.calls.append([tool_path, *args])
        source = Path(args[args.index("-i") + 1])
        if any(marker in source.read_bytes() for marker in self.fail_for):
            raise ExternalToolFailed(1, "conversion failed")
        Path(args[-1]).write_bytes(source.read_bytes())


@dataclass(slots=True)
class FakeProber:
    duration: float = 20.0
    calls: list[Path] = field(default_factory=list)

    def probe(self, input_path: Path) -> float:
        self.calls.append(input_path)
        return self.duration


def write_fake_tool(directory: Path, name: str, body: str) -> Path:
    """Create an executable Python script standing in for an external tool."""
    path = directory / name
    path.write_text(f"#!{sys.executable}\nimport sys\n{body}\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


NOT_POSIX = os.name != "posix"
