"""Built-in translation catalogs and language selection."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

FALLBACK_LANG = "zh"

EN: dict[str, str] = {
    "language_name": "English",
    "title": "Video Trimmer",
    "header_upload": "Upload videos (trim head/tail seconds)",
    "choose_video": "Choose videos",
    "upload_button": "Upload & Process",
    "uploading_text": "Uploading and processing...",
    "clear_button": "Clear uploaded and output files",
    "confirm_clear": "Clear all uploaded and output files? This cannot be undone.",
    "select_at_least_one": "Please select at least one video file before uploading",
    "file_too_large": 'File "{filename}" exceeds allowed size {size}, please reduce file size and retry.',
    "head_label": "Head trim seconds (editable)",
    "tail_label": "Tail trim seconds (editable, default 0)",
    "hint": (
        "After processing, you'll be redirected to the download page; "
        "ensure browser and server are on the same LAN."
    ),
    "processed_title": "Processed, click to download:",
    "download_all": "Download All",
    "download": "Download",
    "return_upload": "Return to Upload",
    "remove": "Remove",
    "alert_no_trim": "Head and tail trims are both 0, no processing needed",
    "no_processed_files_hint": (
        "No files were successfully processed, please check source files or FFmpeg logs."
    ),
    "request_body_too_large": (
        "File too large, maximum allowed upload size is {size}. "
        "Please reduce file size and retry."
    ),
    "request_parse_error": "Request body too large or unable to parse form",
    "cannot_read_file": "Unable to read file {filename}",
    "file_empty_or_unreadable": "File {filename} is empty or unreadable",
    "not_supported_video": (
        "File {filename} is not a supported video format (magic number check failed)"
    ),
}

ZH: dict[str, str] = {
    "language_name": "中文",
    "title": "视频裁剪工具",
    "header_upload": "上传视频(裁剪前/后 N 秒)",
    "choose_video": "选择视频",
    "upload_button": "上传并处理",
    "uploading_text": "正在上传并处理...",
    "clear_button": "清理已上传与输出文件",
    "confirm_clear": "确认清理所有已上传和输出文件吗？此操作不可恢复。",
    "select_at_least_one": "请选择至少一个视频文件后再上传",
    "file_too_large": '文件 "{filename}" 超过单文件允许大小 {size}, 请减少文件大小后重试。',
    "head_label": "掐头 N 秒(可修改)",
    "tail_label": "掐尾 N 秒(可修改, 默认 0)",
    "hint": "处理完成后会自动跳转到下载页面；确保浏览器和当前服务端在同一局域网。",
    "processed_title": "处理完成, 点击下载: ",
    "download_all": "下载全部",
    "download": "下载",
    "return_upload": "返回上传页面",
    "remove": "移除",
    "alert_no_trim": "裁剪开头和结尾均为 0, 无需处理",
    "no_processed_files_hint": "没有文件被成功处理, 请检查源文件或 FFmpeg 日志。",
    "request_body_too_large": "文件太大, 最大允许上传大小为 {size}。请减少文件大小后重试。",
    "request_parse_error": "请求体太大或无法解析表单",
    "cannot_read_file": "无法读取文件 {filename}",
    "file_empty_or_unreadable": "文件 {filename} 为空或无法读取",
    "not_supported_video": "文件 {filename} 不是受支持的视频格式(魔法数字校验失败)",
}

BUILTIN_CATALOGS: Mapping[str, Mapping[str, str]] = {"zh": ZH, "en": EN}

# active catalogs: built-ins overlaid with whatever load_locales found on disk
CATALOGS: dict[str, dict[str, str]] = {code: dict(catalog) for code, catalog in BUILTIN_CATALOGS.items()}

logger = logging.getLogger(__name__)


def reset_locales() -> None:
    """Drop loaded catalogs and go back to the built-in ones."""
    CATALOGS.clear()
    CATALOGS.update({code: dict(catalog) for code, catalog in BUILTIN_CATALOGS.items()})


def seed_locales(directory: Path) -> list[Path]:
    """Write the built-in catalogs as JSON when ``directory`` has none yet."""
    directory.mkdir(parents=True, exist_ok=True)
    if any(directory.glob("*.json")):
        return []
    written = []
    for code, catalog in BUILTIN_CATALOGS.items():
        path = directory / f"{code}.json"
        path.write_text(json.dumps(catalog, ensure_ascii=False, indent=2), encoding="utf-8")
        written.append(path)
    logger.info("i18n.locales.seeded", extra={"directory": str(directory), "count": len(written)})
    return written


def _read_catalog(path: Path) -> dict[str, str] | None:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("i18n.locales.unreadable", extra={"path": str(path), "error": str(exc)})
        return None
    if not isinstance(raw, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in raw.items()
    ):
        logger.warning("i18n.locales.invalid", extra={"path": str(path)})
        return None
    return raw


def load_locales(directory: Path, *, seed: bool = True) -> dict[str, dict[str, str]]:
    """Load ``<code>.json`` catalogs from ``directory`` over the built-ins.

    Keys missing from a file keep the built-in text for that language.
    Unreadable or malformed files are logged and skipped.
    """
    reset_locales()
    if seed:
        try:
            seed_locales(directory)
        except OSError as exc:
            logger.warning(
                "i18n.locales.seed_failed",
                extra={"directory": str(directory), "error": str(exc)},
            )
    if not directory.is_dir():
        return CATALOGS

    for path in sorted(directory.glob("*.json")):
        catalog = _read_catalog(path)
        if catalog is None:
            continue
        code = path.stem
        CATALOGS[code] = {**BUILTIN_CATALOGS.get(code, {}), **catalog}

    logger.info("i18n.locales.loaded", extra={"codes": sorted(CATALOGS)})
    return CATALOGS


@dataclass(frozen=True, slots=True)
class LocaleMeta:
    code: str
    name: str
    selected: bool = False


def get_catalog(lang: str | None, default_lang: str = FALLBACK_LANG) -> Mapping[str, str]:
    """Return the catalog for ``lang``, falling back to the default then Chinese."""
    for code in (lang, default_lang, FALLBACK_LANG):
        if code and code in CATALOGS:
            return CATALOGS[code]
    return ZH


def normalize_lang(lang: str | None, default_lang: str = FALLBACK_LANG) -> str:
    if lang and lang in CATALOGS:
        return lang
    if default_lang in CATALOGS:
        return default_lang
    return FALLBACK_LANG


def detect_lang(
    query_lang: str | None,
    cookie_lang: str | None,
    default_lang: str = FALLBACK_LANG,
) -> str:
    """Pick the UI language: ``?lang`` first, then the ``lang`` cookie."""
    return normalize_lang(query_lang or cookie_lang, default_lang)


def available_locales(current: str) -> list[LocaleMeta]:
    return [
        LocaleMeta(code=code, name=catalog.get("language_name") or code, selected=code == current)
        for code, catalog in CATALOGS.items()
    ]


def human_readable_bytes(size: int) -> str:
    """Format a byte count with binary units, e.g. ``8.0 MB``."""
    unit = 1024
    if size < unit:
        return f"{size} B"
    value = size / unit
    for suffix in ("KB", "MB", "GB"):
        if value < unit:
            return f"{value:.1f} {suffix}"
        value /= unit
    return f"{value:.1f} TB"


__all__ = [
    "BUILTIN_CATALOGS",
    "CATALOGS",
    "FALLBACK_LANG",
    "LocaleMeta",
    "available_locales",
    "detect_lang",
    "get_catalog",
    "human_readable_bytes",
    "load_locales",
    "normalize_lang",
    "reset_locales",
    "seed_locales",
]
