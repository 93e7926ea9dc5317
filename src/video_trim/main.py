"""FastAPI application entry point."""

from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .i18n import load_locales
from .logging import configure_logging


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()
    if cfg.locales_dir is not None:
        load_locales(cfg.locales_dir)
    app = FastAPI(title="video-trim")
    include_routers(app, cfg)
    return app
