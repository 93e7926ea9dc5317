"""Data structures for the trim pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from starlette.datastructures import UploadFile

MAX_HEAD_SECONDS = 24 * 3600


class FailureKind(StrEnum):
    """Failure categories produced by the pipeline."""

    SNIFF_REJECTED = "sniff_rejected"
    PATH_VIOLATION = "path_violation"
    PROBE_UNAVAILABLE = "probe_unavailable"
    PROBE_FAILED = "probe_failed"
    PROBE_INVALID = "probe_invalid"
    RANGE_INVALID = "range_invalid"
    TOOL_UNAVAILABLE = "tool_unavailable"
    EXTERNAL_TOOL_FAILED = "external_tool_failed"
    IO_FAILURE = "io_failure"
    INTERNAL = "internal_error"


class TrimMode(StrEnum):
    COPY_TO_END = "copy_to_end"
    COPY_BOUNDED_DURATION = "copy_bounded_duration"


class ItemStage(StrEnum):
    """Per-item progress through the batch pipeline."""

    PENDING = "pending"
    STAGED = "staged"
    SNIFFED = "sniffed"
    PATH_VALIDATED = "path_validated"
    PROBED = "probed"
    PLAN_BUILT = "plan_built"
    EXECUTED = "executed"
    DONE = "done"


class UploadHandle(Protocol):
    """Uploaded part as seen by the batch processor."""

    @property
    def filename(self) -> str | None: ...

    @property
    def size(self) -> int | None: ...

    def open_stream(self) -> BinaryIO: ...


@dataclass(slots=True)
class StarletteUploadHandle:
    """Adapts Starlette's ``UploadFile`` to :class:`UploadHandle`."""

    upload: "UploadFile"

    @property
    def filename(self) -> str | None:
        return self.upload.filename

    @property
    def size(self) -> int | None:
        return self.upload.size

    def open_stream(self) -> BinaryIO:
        stream = self.upload.file
        stream.seek(0)
        return stream  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class TrimRequest:
    """Seconds to cut from the start and the end of every file."""

    head_seconds: int
    tail_seconds: int

    def __post_init__(self) -> None:
        if self.head_seconds < 0:
            raise ValueError("invalid head seconds")
        if self.tail_seconds < 0:
            raise ValueError("invalid tail seconds")
        if self.head_seconds > MAX_HEAD_SECONDS:
            object.__setattr__(self, "head_seconds", MAX_HEAD_SECONDS)

    @property
    def is_noop(self) -> bool:
        return self.head_seconds == 0 and self.tail_seconds == 0


@dataclass(frozen=True, slots=True)
class TrimPlan:
    """Cut decision derived from the request and the probed duration."""

    mode: TrimMode
    start_seconds: int
    duration_seconds: Decimal | None = None

    @property
    def duration_arg(self) -> str | None:
        """Duration as passed to the trim tool (three fractional digits)."""
        if self.duration_seconds is None:
            return None
        return format(self.duration_seconds, "f")


@dataclass(slots=True)
class BatchItem:
    """Mutable bookkeeping for one upload while it moves through the batch."""

    index: int
    filename: str
    stage: ItemStage = ItemStage.PENDING
    staged_path: Path | None = None
    output_path: Path | None = None


__all__ = [
    "BatchItem",
    "FailureKind",
    "ItemStage",
    "MAX_HEAD_SECONDS",
    "StarletteUploadHandle",
    "TrimMode",
    "TrimPlan",
    "TrimRequest",
    "UploadHandle",
]
