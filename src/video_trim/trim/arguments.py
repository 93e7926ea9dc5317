"""Build ffmpeg argument vectors for head/tail trims.

Every function here is pure. The resulting lists are handed to
``subprocess.run`` as-is and are never joined into a shell string.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from pathlib import Path

from .trim_errors import RangeInvalid
from .trim_models import MAX_HEAD_SECONDS, TrimMode, TrimPlan

MILLISECOND = Decimal("0.001")


def clamp_head(head_seconds: int) -> int:
    if head_seconds < 0:
        raise ValueError("invalid head seconds")
    return min(head_seconds, MAX_HEAD_SECONDS)


def plan_trim(head_seconds: int, tail_seconds: int, duration: float | None) -> TrimPlan:
    """Choose between copying to the end and copying a bounded duration."""
    head = clamp_head(head_seconds)

    if tail_seconds <= 0:
        return TrimPlan(mode=TrimMode.COPY_TO_END, start_seconds=head)

    if duration is None:
        raise ValueError("tail trim requires a probed duration")

    end = duration - tail_seconds
    if end <= head:
        raise RangeInvalid(
            f"head {head}s + tail {tail_seconds}s exceeds media duration {duration}s"
        )

    # truncate so the copied span never exceeds end - head
    span = Decimal(repr(end - head)).quantize(MILLISECOND, rounding=ROUND_DOWN)
    if span <= 0:
        raise RangeInvalid(f"remaining span after trimming is below {MILLISECOND}s")
    return TrimPlan(
        mode=TrimMode.COPY_BOUNDED_DURATION,
        start_seconds=head,
        duration_seconds=span,
    )


def plan_args(input_path: Path, output_path: Path, plan: TrimPlan) -> list[str]:
    """Render a plan into ffmpeg arguments (without the executable)."""
    args = ["-y", "-ss", str(plan.start_seconds), "-i", str(input_path)]
    if plan.mode is TrimMode.COPY_BOUNDED_DURATION:
        args += ["-t", plan.duration_arg or ""]
    args += ["-c", "copy", "-avoid_negative_ts", "make_zero", str(output_path)]
    return args


def build_trim_args(
    input_path: Path,
    output_path: Path,
    head_seconds: int,
    tail_seconds: int,
    duration: float | None = None,
) -> list[str]:
    """Plan the cut and return the ffmpeg argument list."""
    plan = plan_trim(head_seconds, tail_seconds, duration)
    return plan_args(input_path, output_path, plan)


__all__ = ["build_trim_args", "clamp_head", "plan_args", "plan_trim"]
