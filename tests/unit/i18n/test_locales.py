import json
from pathlib import Path

from video_trim.i18n import MessageKind, available_locales, load_locales, render_message
from video_trim.i18n.locales import BUILTIN_CATALOGS, CATALOGS, seed_locales


def write_catalog(directory: Path, code: str, values: object) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{code}.json").write_text(json.dumps(values, ensure_ascii=False), encoding="utf-8")


def test_missing_directory_is_seeded_with_builtin_catalogs(isolated_locales: Path) -> None:
    load_locales(isolated_locales)

    assert sorted(path.name for path in isolated_locales.iterdir()) == ["en.json", "zh.json"]
    seeded = json.loads((isolated_locales / "en.json").read_text(encoding="utf-8"))
    assert seeded == dict(BUILTIN_CATALOGS["en"])


def test_seeding_leaves_existing_catalogs_alone(isolated_locales: Path) -> None:
    write_catalog(isolated_locales, "en", {"title": "Clipper"})

    assert seed_locales(isolated_locales) == []
    assert [path.name for path in isolated_locales.iterdir()] == ["en.json"]


def test_edited_catalog_overrides_builtin_text(isolated_locales: Path) -> None:
    write_catalog(isolated_locales, "en", {"title": "Clipper"})

    load_locales(isolated_locales)

    assert render_message(MessageKind.TITLE, "en") == "Clipper"
    assert render_message(MessageKind.DOWNLOAD, "en") == "Download"


def test_new_language_appears_in_available_locales(isolated_locales: Path) -> None:
    write_catalog(isolated_locales, "fr", {"language_name": "Français", "title": "Découpeur"})

    load_locales(isolated_locales)

    locales = {meta.code: meta for meta in available_locales("fr")}
    assert locales["fr"].name == "Français"
    assert locales["fr"].selected is True
    assert render_message(MessageKind.TITLE, "fr") == "Découpeur"
    assert render_message(MessageKind.DOWNLOAD, "fr") == BUILTIN_CATALOGS["zh"]["download"]


def test_catalog_without_language_name_is_listed_by_code(isolated_locales: Path) -> None:
    write_catalog(isolated_locales, "de", {"title": "Schneider"})

    load_locales(isolated_locales)

    assert {meta.code: meta.name for meta in available_locales("en")}["de"] == "de"


def test_malformed_catalogs_are_skipped(isolated_locales: Path) -> None:
    isolated_locales.mkdir()
    (isolated_locales / "xx.json").write_text("{not json", encoding="utf-8")
    write_catalog(isolated_locales, "yy", ["a", "list"])
    write_catalog(isolated_locales, "en", {"title": "Clipper"})

    load_locales(isolated_locales)

    assert "xx" not in CATALOGS
    assert "yy" not in CATALOGS
    assert CATALOGS["en"]["title"] == "Clipper"


def test_broken_placeholder_falls_back_to_builtin(isolated_locales: Path) -> None:
    write_catalog(isolated_locales, "en", {"cannot_read_file": "Cannot read {name}"})

    load_locales(isolated_locales)

    assert render_message(MessageKind.CANNOT_READ_FILE, "en") == "Unable to read file "


def test_reloading_forgets_removed_catalogs(isolated_locales: Path) -> None:
    write_catalog(isolated_locales, "fr", {"title": "Découpeur"})
    load_locales(isolated_locales)
    (isolated_locales / "fr.json").unlink()

    load_locales(isolated_locales, seed=False)

    assert "fr" not in CATALOGS
