import pytest

from video_trim.i18n import (
    Message,
    MessageKind,
    available_locales,
    detect_lang,
    human_readable_bytes,
    render_message,
    translations,
)
from video_trim.i18n.locales import CATALOGS


def test_every_message_kind_exists_in_every_catalog() -> None:
    for catalog in CATALOGS.values():
        assert {kind.value for kind in MessageKind} == set(catalog)


def test_render_with_payload() -> None:
    message = Message(MessageKind.FILE_EMPTY_OR_UNREADABLE, filename="clip.mp4")

    assert render_message(message, "en") == "File clip.mp4 is empty or unreadable"
    assert render_message(message, "zh") == "文件 clip.mp4 为空或无法读取"


def test_render_payload_is_not_reinterpreted() -> None:
    message = Message(MessageKind.CANNOT_READ_FILE, filename="{size}%s.mp4")

    assert render_message(message, "en") == "Unable to read file {size}%s.mp4"


def test_unknown_language_falls_back_to_chinese() -> None:
    assert render_message(MessageKind.TITLE, "fr") == "视频裁剪工具"


@pytest.mark.parametrize(
    ("query", "cookie", "default", "expected"),
    [
        ("en", "zh", "zh", "en"),
        (None, "en", "zh", "en"),
        (None, None, "en", "en"),
        ("xx", None, "en", "en"),
        (None, None, "xx", "zh"),
    ],
)
def test_detect_lang_priority(query, cookie, default, expected) -> None:
    assert detect_lang(query, cookie, default) == expected


def test_available_locales_marks_selection() -> None:
    locales = {locale.code: locale for locale in available_locales("en")}

    assert locales["en"].selected is True
    assert locales["zh"].selected is False
    assert locales["zh"].name == "中文"


def test_translations_cover_all_kinds() -> None:
    assert translations("en")["download_all"] == "Download All"


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (512, "512 B"),
        (1024, "1.0 KB"),
        (8 * 1024 * 1024, "8.0 MB"),
        (2048 * 1024 * 1024, "2.0 GB"),
        (3 * 1024**4, "3.0 TB"),
    ],
)
def test_human_readable_bytes(size: int, expected: str) -> None:
    assert human_readable_bytes(size) == expected
