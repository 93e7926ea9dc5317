"""Application configuration builder."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_MAX_UPLOAD_SIZE = 2048 * 1024 * 1024  # 2048 MiB
DEFAULT_CONFIG_FILE = "config.yaml"


class Settings(BaseSettings):
    """Raw settings read from ``VIDEOTRIM_*`` environment variables and ``config.yaml``.

    Precedence: explicit arguments, environment, ``.env``, then ``config.yaml``
    in the working directory. The YAML file uses the plain key names
    (``upload_dir``, ``head_trim_seconds``, ``server_port`` ...).
    """

    model_config = cast(
        Any,
        SettingsConfigDict(
            env_prefix="VIDEOTRIM_",
            env_file=".env",
            yaml_file=DEFAULT_CONFIG_FILE,
            extra="ignore",
        ),
    )

    upload_dir: Path = Field(
        default=Path("./uploads"),
        description="Staging directory for uploaded source files.",
    )
    output_dir: Path = Field(
        default=Path("./outputs"),
        description="Directory holding trimmed results served for download.",
    )
    head_trim_seconds: int = Field(
        default=6,
        ge=0,
        description="Default number of seconds cut from the start of each file.",
    )
    tail_seconds: int = Field(
        default=0,
        ge=0,
        description="Default number of seconds cut from the end of each file.",
    )
    host: str = Field(default="0.0.0.0", description="Interface uvicorn binds to.")
    port: int = Field(default=7778, ge=1, le=65535, description="HTTP listen port.")
    max_upload_size: int = Field(
        default=DEFAULT_MAX_UPLOAD_SIZE,
        gt=0,
        description="Largest accepted size for a single uploaded file (bytes).",
    )
    idle_timeout_seconds: int = Field(
        default=120,
        ge=0,
        description="Keep-alive timeout for idle HTTP connections.",
    )
    ffmpeg_binary: str = Field(
        default="ffmpeg",
        min_length=1,
        description="Name of the trimming executable looked up on PATH.",
    )
    ffprobe_binary: str = Field(
        default="ffprobe",
        min_length=1,
        description="Name of the duration inspection executable looked up on PATH.",
    )
    strict_mpegts: bool = Field(
        default=False,
        description="Require repeated MPEG-TS sync bytes instead of a single one.",
    )
    default_lang: str = Field(default="zh", description="Fallback UI language code.")
    locales_dir: Path = Field(
        default=Path("./locales"),
        description="Directory of editable ``<code>.json`` translation catalogs.",
    )
    server_port: str | int | None = Field(
        default=None,
        description="Listen address as ``:7778``, ``host:7778`` or ``7778``.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @model_validator(mode="after")
    def _apply_server_port(self) -> "Settings":
        """Split ``server_port`` into host and port unless those were set directly."""
        if self.server_port is None:
            return self
        host, _, port = str(self.server_port).strip().rpartition(":")
        if not port.isascii() or not port.isdigit() or not 1 <= int(port) <= 65535:
            raise ValueError(f"invalid server_port {self.server_port!r}")
        if "port" not in self.model_fields_set:
            self.port = int(port)
        if host and "host" not in self.model_fields_set:
            self.host = host
        return self


@dataclass(frozen=True, slots=True)
class MediaPaths:
    uploads: Path
    outputs: Path


@dataclass(frozen=True, slots=True)
class TrimDefaults:
    head_seconds: int
    tail_seconds: int


@dataclass(frozen=True, slots=True)
class UploadLimits:
    max_upload_size: int
    strict_mpegts: bool = False


@dataclass(frozen=True, slots=True)
class ToolConfig:
    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str
    port: int
    idle_timeout_seconds: int


@dataclass(frozen=True, slots=True)
class AppConfig:
    media_paths: MediaPaths
    trim_defaults: TrimDefaults
    upload_limits: UploadLimits
    tools: ToolConfig
    server: ServerConfig
    default_lang: str = "zh"
    locales_dir: Path | None = None


def _ensure_media_paths(paths: MediaPaths) -> None:
    paths.uploads.mkdir(parents=True, exist_ok=True)
    paths.outputs.mkdir(parents=True, exist_ok=True)


def build_config(settings: Settings) -> AppConfig:
    """Freeze validated settings into the immutable application config."""
    return AppConfig(
        media_paths=MediaPaths(
            uploads=settings.upload_dir.absolute(),
            outputs=settings.output_dir.absolute(),
        ),
        trim_defaults=TrimDefaults(
            head_seconds=settings.head_trim_seconds,
            tail_seconds=settings.tail_seconds,
        ),
        upload_limits=UploadLimits(
            max_upload_size=settings.max_upload_size,
            strict_mpegts=settings.strict_mpegts,
        ),
        tools=ToolConfig(
            ffmpeg=settings.ffmpeg_binary,
            ffprobe=settings.ffprobe_binary,
        ),
        server=ServerConfig(
            host=settings.host,
            port=settings.port,
            idle_timeout_seconds=settings.idle_timeout_seconds,
        ),
        default_lang=settings.default_lang,
        locales_dir=settings.locales_dir.absolute(),
    )


def load_config(settings: Settings | None = None) -> AppConfig:
    """Load configuration from environment and prepare media directories."""
    config = build_config(settings or Settings())
    _ensure_media_paths(config.media_paths)
    return config


__all__ = [
    "AppConfig",
    "MediaPaths",
    "ServerConfig",
    "Settings",
    "ToolConfig",
    "TrimDefaults",
    "UploadLimits",
    "build_config",
    "load_config",
]
