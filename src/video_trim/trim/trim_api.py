"""HTTP routes for uploading, trimming, downloading and clearing videos."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.responses import Response

from ..config import AppConfig
from ..i18n import (
    Message,
    MessageKind,
    available_locales,
    detect_lang,
    human_readable_bytes,
    render_message,
    translations,
)
from ..media.media_cleanup import clear_media
from ..media.media_service import ResultStore
from .batch import BatchProcessor
from .trim_models import StarletteUploadHandle, TrimRequest

router = APIRouter(tags=["trim"])
logger = logging.getLogger(__name__)

TEMPLATES = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))
UPLOAD_FIELD = "videos"
MAX_FORM_FILES = 1000
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def get_config(request: Request) -> AppConfig:
    """Fetch configuration from application state."""
    try:
        return request.app.state.config  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("AppConfig is not configured") from exc


def get_batch_processor(request: Request) -> BatchProcessor:
    try:
        return request.app.state.batch_processor  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("BatchProcessor is not configured") from exc


def get_result_store(request: Request) -> ResultStore:
    try:
        return request.app.state.result_store  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("ResultStore is not configured") from exc


def request_lang(request: Request, config: AppConfig) -> str:
    return detect_lang(
        request.query_params.get("lang"),
        request.cookies.get("lang"),
        config.default_lang,
    )


def parse_seconds(raw: object, default: int) -> int:
    """Parse a non-negative integer form value, falling back to ``default``.

    Only optionally signed ASCII digits are accepted.
    """
    if not isinstance(raw, str):
        return default
    text = raw.strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return default
    value = int(text)
    return value if value >= 0 else default


def alert_and_return(text: str, status_code: int = status.HTTP_200_OK) -> HTMLResponse:
    """Show ``text`` in a browser alert and go back to the upload page."""
    literal = json.dumps(text).replace("<", "\\u003c").replace(">", "\\u003e")
    return HTMLResponse(
        f"<script>alert({literal});location.href='/';</script>",
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
def home(request: Request, config: AppConfig = Depends(get_config)) -> Response:
    """Render the upload page."""
    lang = request_lang(request, config)
    context = {
        "head": config.trim_defaults.head_seconds,
        "tail": config.trim_defaults.tail_seconds,
        "max_upload": config.upload_limits.max_upload_size,
        "max_upload_readable": human_readable_bytes(config.upload_limits.max_upload_size),
        "i18n": translations(lang),
        "locales": available_locales(lang),
        "lang": lang,
    }
    response = TEMPLATES.TemplateResponse(request, "index.html", context)
    if request.query_params.get("lang") == lang:
        response.set_cookie("lang", lang, samesite="lax")
    return response


@router.post("/upload", response_class=HTMLResponse)
async def upload(
    request: Request,
    config: AppConfig = Depends(get_config),
    processor: BatchProcessor = Depends(get_batch_processor),
) -> Response:
    """Validate the submitted batch, trim each file and list the results."""
    lang = request_lang(request, config)
    limit = config.upload_limits.max_upload_size

    try:
        form = await request.form(max_files=MAX_FORM_FILES)
    except (MultiPartException, StarletteHTTPException) as exc:
        logger.warning("trim.upload.parse_failed", extra={"error": str(exc)})
        return PlainTextResponse(
            render_message(MessageKind.REQUEST_PARSE_ERROR, lang),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    uploads = [
        value
        for value in form.getlist(UPLOAD_FIELD)
        if isinstance(value, UploadFile) and value.filename
    ]
    if not uploads:
        logger.info("trim.upload.no_files")
        return alert_and_return(
            render_message(MessageKind.SELECT_AT_LEAST_ONE, lang),
            status.HTTP_400_BAD_REQUEST,
        )

    for item in uploads:
        if item.size is not None and item.size > limit:
            logger.warning(
                "trim.upload.payload_too_large",
                extra={"upload_name": item.filename, "size_bytes": item.size, "limit_bytes": limit},
            )
            message = Message(
                MessageKind.FILE_TOO_LARGE,
                filename=item.filename,
                size=human_readable_bytes(limit),
            )
            return PlainTextResponse(
                render_message(message, lang),
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )

    trim_request = TrimRequest(
        head_seconds=parse_seconds(form.get("head"), config.trim_defaults.head_seconds),
        tail_seconds=parse_seconds(form.get("tail"), config.trim_defaults.tail_seconds),
    )
    if trim_request.is_noop:
        return alert_and_return(render_message(MessageKind.ALERT_NO_TRIM, lang))

    handles = [StarletteUploadHandle(item) for item in uploads]
    processed = await run_in_threadpool(processor.process_all, handles, trim_request)

    context = {
        "files": processed,
        "i18n": translations(lang),
        "lang": lang,
    }
    return TEMPLATES.TemplateResponse(request, "results.html", context)


@router.get("/download/{filename}")
def download(filename: str, store: ResultStore = Depends(get_result_store)) -> Response:
    """Serve a trimmed file from the output directory."""
    path = store.open_result(filename)
    if path is None:
        return PlainTextResponse("404 page not found", status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(path=path, filename=path.name, media_type="application/octet-stream")


@router.post("/clear")
def clear(config: AppConfig = Depends(get_config)) -> Response:
    """Delete every staged upload and result, keeping the directories."""
    clear_media(config.media_paths)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
