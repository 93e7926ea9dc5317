"""Dependency wiring helpers."""

from fastapi import FastAPI

from .config import AppConfig
from .trim.batch import BatchProcessor
from .trim.trim_api import router as trim_router


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount routers and attach services."""
    batch_processor = BatchProcessor.from_config(config)

    app.state.config = config
    app.state.batch_processor = batch_processor
    app.state.result_store = batch_processor.result_store

    app.include_router(trim_router)


__all__ = ["include_routers"]
