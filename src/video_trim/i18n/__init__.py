"""Localized UI text."""

from .locales import (
    LocaleMeta,
    available_locales,
    detect_lang,
    human_readable_bytes,
    load_locales,
)
from .messages import Message, MessageKind, render_message, translations

__all__ = [
    "LocaleMeta",
    "Message",
    "MessageKind",
    "available_locales",
    "detect_lang",
    "human_readable_bytes",
    "load_locales",
    "render_message",
    "translations",
]
