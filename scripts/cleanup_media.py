"""Cron entry point for clearing staged uploads and trimmed results."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from video_trim.config import load_config
from video_trim.media.media_cleanup import clear_media


@dataclass(slots=True)
class CleanupSummary:
    removed: int
    dry_run: bool


def perform_cleanup(*, dry_run: bool) -> CleanupSummary:
    """Clear both media roots, or only count their entries."""
    config = load_config()
    paths = config.media_paths

    if dry_run:
        pending = sum(1 for root in (paths.uploads, paths.outputs) for _ in root.iterdir())
        return CleanupSummary(removed=pending, dry_run=True)

    return CleanupSummary(removed=clear_media(paths), dry_run=False)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove staged uploads and trimmed results.")
    parser.add_argument("--dry-run", action="store_true", help="Only report counts without deleting files.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        summary = perform_cleanup(dry_run=args.dry_run)
    except Exception as exc:
        print(f"cleanup failed: {exc}", file=sys.stderr)
        return 2

    if summary.dry_run:
        print(f"cleanup dry-run, entries={summary.removed}", file=sys.stdout)
    else:
        print(f"cleanup done, removed={summary.removed}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
