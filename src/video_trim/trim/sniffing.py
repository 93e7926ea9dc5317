"""Magic-number checks for uploaded video containers.

The rules form an allow-list of common container signatures. They are a
heuristic that keeps images, archives and scripts away from ffmpeg; they do
not validate the container itself.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path
from typing import BinaryIO

from .trim_errors import IOFailure, SniffRejected

logger = logging.getLogger(__name__)

SNIFF_LENGTH = 64
TS_PACKET_SIZE = 188
TS_SYNC_BYTE = 0x47
STRICT_TS_PACKETS = 3

EBML_MAGIC = b"\x1a\x45\xdf\xa3"


class ContainerKind(StrEnum):
    MP4 = "mp4"
    MATROSKA = "matroska"
    AVI = "avi"
    FLV = "flv"
    MPEG_TS = "mpegts"


def sniff_length(strict_mpegts: bool = False) -> int:
    """Number of leading bytes to read for classification."""
    if strict_mpegts:
        return max(SNIFF_LENGTH, TS_PACKET_SIZE * (STRICT_TS_PACKETS - 1) + 1)
    return SNIFF_LENGTH


def _has_ts_sync(data: bytes) -> bool:
    offsets = range(0, len(data), TS_PACKET_SIZE)
    return len(offsets) >= STRICT_TS_PACKETS and all(
        data[offset] == TS_SYNC_BYTE for offset in offsets
    )


def detect_container(data: bytes, *, strict_mpegts: bool = False) -> ContainerKind | None:
    """Return the container family matched by ``data`` or ``None``."""
    if len(data) >= 8 and data[4:8] == b"ftyp":
        return ContainerKind.MP4
    if data[:4] == EBML_MAGIC:
        return ContainerKind.MATROSKA
    if data[:4] == b"RIFF" and data[8:12] == b"AVI ":
        return ContainerKind.AVI
    if data[:3] == b"FLV":
        return ContainerKind.FLV
    if data[:1] == bytes([TS_SYNC_BYTE]):
        if strict_mpegts and not _has_ts_sync(data):
            return None
        return ContainerKind.MPEG_TS
    return None


def classify(data: bytes, *, strict_mpegts: bool = False) -> bool:
    """Return ``True`` when ``data`` looks like the start of a video file."""
    return detect_container(data, strict_mpegts=strict_mpegts) is not None


def _check(data: bytes, label: str, strict_mpegts: bool) -> ContainerKind:
    if not data:
        raise SniffRejected(f"{label} is empty or unreadable", empty=True)
    kind = detect_container(data, strict_mpegts=strict_mpegts)
    if kind is None:
        raise SniffRejected(f"{label} is not a supported video format")
    return kind


def sniff_stream(stream: BinaryIO, *, label: str = "upload", strict_mpegts: bool = False) -> ContainerKind:
    """Classify the head of a seekable stream and rewind it."""
    try:
        position = stream.tell()
        data = stream.read(sniff_length(strict_mpegts))
        stream.seek(position)
    except OSError as exc:
        raise IOFailure(f"cannot read {label}: {exc}") from exc
    return _check(data or b"", label, strict_mpegts)


def sniff_file(path: Path, *, strict_mpegts: bool = False) -> ContainerKind:
    """Classify the head of a staged file on disk."""
    try:
        with path.open("rb") as source:
            data = source.read(sniff_length(strict_mpegts))
    except OSError as exc:
        raise IOFailure(f"cannot read {path.name}: {exc}") from exc
    kind = _check(data, path.name, strict_mpegts)
    logger.debug("trim.sniff.matched", extra={"path": str(path), "container": kind.value})
    return kind


__all__ = [
    "ContainerKind",
    "SNIFF_LENGTH",
    "classify",
    "detect_container",
    "sniff_file",
    "sniff_length",
    "sniff_stream",
]
