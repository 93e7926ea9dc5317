"""Drive uploaded files through sniff, guard, probe, plan and execute."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import structlog

from ..config import AppConfig, MediaPaths
from ..media.media_service import ResultStore
from ..media.temp_media_store import TempMediaStore
from . import path_guard
from .arguments import plan_args, plan_trim
from .executor import TrimExecutor
from .probe import DurationProber
from .sniffing import sniff_file
from .trim_errors import ExternalToolFailed, TrimError
from .trim_models import BatchItem, ItemStage, TrimRequest, UploadHandle

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class BatchProcessor:
    """Trims every upload of one request, isolating per-file failures."""

    paths: MediaPaths
    temp_store: TempMediaStore
    result_store: ResultStore
    prober: DurationProber
    executor: TrimExecutor
    strict_mpegts: bool = False
    clock_ns: Callable[[], int] = time.time_ns
    log: structlog.stdlib.BoundLogger = field(default_factory=lambda: logger)

    @classmethod
    def from_config(cls, config: AppConfig) -> "BatchProcessor":
        return cls(
            paths=config.media_paths,
            temp_store=TempMediaStore(config.media_paths),
            result_store=ResultStore(config.media_paths),
            prober=DurationProber(binary=config.tools.ffprobe),
            executor=TrimExecutor(binary=config.tools.ffmpeg),
            strict_mpegts=config.upload_limits.strict_mpegts,
        )

    def process_all(self, handles: Sequence[UploadHandle], request: TrimRequest) -> list[str]:
        """Return output basenames of the uploads that were trimmed, in input order."""
        submitted_at = self.clock_ns()
        processed: list[str] = []
        for index, handle in enumerate(handles):
            item = BatchItem(index=index, filename=handle.filename or "")
            log = self.log.bind(filename=item.filename, index=index)
            try:
                self._process_item(item, handle, request, submitted_at)
            except TrimError as exc:
                log.warning(
                    "trim.item.failed",
                    stage=item.stage.value,
                    failure_kind=exc.kind.value,
                    error=str(exc),
                )
                self._discard_output(item)
            except Exception:
                log.exception("trim.item.unexpected_error", stage=item.stage.value)
                self._discard_output(item)
            else:
                processed.append(item.output_path.name)  # type: ignore[union-attr]
                log.info("trim.item.done", output=item.output_path.name)  # type: ignore[union-attr]
            finally:
                if item.staged_path is not None:
                    self.temp_store.remove(item.staged_path)

        self.log.info(
            "trim.batch.completed",
            total=len(handles),
            processed=len(processed),
            head_seconds=request.head_seconds,
            tail_seconds=request.tail_seconds,
        )
        return processed

    def _process_item(
        self,
        item: BatchItem,
        handle: UploadHandle,
        request: TrimRequest,
        submitted_at: int,
    ) -> None:
        target = self.temp_store.staging_path(handle.filename, submitted_at, item.index)
        self.temp_store.persist_upload(handle, target)
        item.staged_path = target
        item.stage = ItemStage.STAGED

        sniff_file(target, strict_mpegts=self.strict_mpegts)
        item.stage = ItemStage.SNIFFED

        input_path = path_guard.resolve(target, self.paths.uploads)
        item.output_path = self.result_store.reserve_output(handle.filename)
        output_path = path_guard.resolve(item.output_path, self.paths.outputs)
        item.stage = ItemStage.PATH_VALIDATED

        tool = self.executor.locate()

        duration: float | None = None
        if request.tail_seconds > 0:
            duration = self.prober.probe(input_path)
            item.stage = ItemStage.PROBED

        plan = plan_trim(request.head_seconds, request.tail_seconds, duration)
        args = plan_args(input_path, output_path, plan)
        item.stage = ItemStage.PLAN_BUILT

        self.executor.execute(tool, args)
        item.stage = ItemStage.EXECUTED

        if not output_path.is_file() or output_path.stat().st_size == 0:
            raise ExternalToolFailed(0, f"{output_path.name} was not written")
        item.stage = ItemStage.DONE

    def _discard_output(self, item: BatchItem) -> None:
        # only ever the file this item reserved
        if item.output_path is not None:
            self.result_store.remove(item.output_path)
            item.output_path = None


__all__ = ["BatchProcessor"]
