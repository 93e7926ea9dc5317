"""Domain-specific exceptions for the trim pipeline."""

from __future__ import annotations

from .trim_models import FailureKind


class TrimError(Exception):
    """Base class for trim pipeline errors."""

    kind: FailureKind = FailureKind.INTERNAL


class SniffRejected(TrimError):
    """Raised when uploaded bytes do not look like a video container."""

    kind = FailureKind.SNIFF_REJECTED

    def __init__(self, message: str, *, empty: bool = False) -> None:
        super().__init__(message)
        self.empty = empty


class PathViolation(TrimError):
    """Raised when a path escapes its required root directory."""

    kind = FailureKind.PATH_VIOLATION


class ProbeUnavailable(TrimError):
    """Raised when the duration inspection tool is not on PATH."""

    kind = FailureKind.PROBE_UNAVAILABLE


class ProbeFailed(TrimError):
    """Raised when the inspection tool exits non-zero or prints nothing."""

    kind = FailureKind.PROBE_FAILED


class ProbeInvalid(TrimError):
    """Raised when the reported duration is not a positive number."""

    kind = FailureKind.PROBE_INVALID


class RangeInvalid(TrimError):
    """Raised when head + tail consume the whole media duration."""

    kind = FailureKind.RANGE_INVALID


class TrimToolUnavailable(TrimError):
    """Raised when the trimming tool is not on PATH."""

    kind = FailureKind.TOOL_UNAVAILABLE


class ExternalToolFailed(TrimError):
    """Raised when the trimming tool exits with a non-zero status."""

    kind = FailureKind.EXTERNAL_TOOL_FAILED

    def __init__(self, returncode: int | None, output: str) -> None:
        super().__init__(f"external tool failed with exit status {returncode}")
        self.returncode = returncode
        self.output = output


class IOFailure(TrimError):
    """Raised when staging or cleanup on the filesystem fails."""

    kind = FailureKind.IO_FAILURE


__all__ = [
    "ExternalToolFailed",
    "IOFailure",
    "PathViolation",
    "ProbeFailed",
    "ProbeInvalid",
    "ProbeUnavailable",
    "RangeInvalid",
    "SniffRejected",
    "TrimError",
    "TrimToolUnavailable",
]
