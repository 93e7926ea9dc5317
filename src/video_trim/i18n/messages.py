"""Typed UI message kinds and their rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .locales import BUILTIN_CATALOGS, FALLBACK_LANG, get_catalog

logger = logging.getLogger(__name__)


class MessageKind(StrEnum):
    """Every user-facing string the service renders."""

    LANGUAGE_NAME = "language_name"
    TITLE = "title"
    HEADER_UPLOAD = "header_upload"
    CHOOSE_VIDEO = "choose_video"
    UPLOAD_BUTTON = "upload_button"
    UPLOADING_TEXT = "uploading_text"
    CLEAR_BUTTON = "clear_button"
    CONFIRM_CLEAR = "confirm_clear"
    SELECT_AT_LEAST_ONE = "select_at_least_one"
    FILE_TOO_LARGE = "file_too_large"
    HEAD_LABEL = "head_label"
    TAIL_LABEL = "tail_label"
    HINT = "hint"
    PROCESSED_TITLE = "processed_title"
    DOWNLOAD_ALL = "download_all"
    DOWNLOAD = "download"
    RETURN_UPLOAD = "return_upload"
    REMOVE = "remove"
    ALERT_NO_TRIM = "alert_no_trim"
    NO_PROCESSED_FILES_HINT = "no_processed_files_hint"
    REQUEST_BODY_TOO_LARGE = "request_body_too_large"
    REQUEST_PARSE_ERROR = "request_parse_error"
    CANNOT_READ_FILE = "cannot_read_file"
    FILE_EMPTY_OR_UNREADABLE = "file_empty_or_unreadable"
    NOT_SUPPORTED_VIDEO = "not_supported_video"


@dataclass(frozen=True, slots=True)
class Message:
    """A message kind plus the structured values it mentions."""

    kind: MessageKind
    filename: str | None = None
    size: str | None = None


def render_message(message: Message | MessageKind, lang: str) -> str:
    """Render ``message`` into locale text.

    Keys missing from a loaded catalog, or templates with broken placeholders,
    fall back to the built-in text.
    """
    if isinstance(message, MessageKind):
        message = Message(message)
    key = message.kind.value
    builtin = BUILTIN_CATALOGS.get(lang) or BUILTIN_CATALOGS[FALLBACK_LANG]
    template = get_catalog(lang).get(key) or builtin[key]
    values = {"filename": message.filename or "", "size": message.size or ""}
    try:
        return template.format(**values)
    except (KeyError, IndexError, ValueError):
        logger.warning("i18n.message.bad_template", extra={"lang": lang, "key": key})
        return builtin[key].format(**values)


def translations(lang: str) -> dict[str, str]:
    """All message texts for templates, keyed by message kind value."""
    return {kind.value: render_message(kind, lang) for kind in MessageKind}


__all__ = ["Message", "MessageKind", "render_message", "translations"]
