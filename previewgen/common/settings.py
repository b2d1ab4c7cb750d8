# previewgen/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional
from pydantic import BaseModel, Field, field_validator, computed_field
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from previewgen.common.strings.splitters import csv_to_list
from previewgen.domain.enums.label_mode import LabelMode


DEFAULT_VIDEO_EXTS = ["asf", "avi", "flv", "mkv", "mov", "mpg", "mp4", "vob", "wmv"]


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class FFmpegConfig(BaseModel):
    bin: str = "ffmpeg"
    timeout_sec: Optional[int] = Field(default=None, ge=1, description="None waits forever")
    empty_output_marker: str = "Output file is empty, nothing was encoded"


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "previewgen"
    log_level: str = "INFO"

    # -------- Discovery --------
    video_exts: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_VIDEO_EXTS))
    glob_override: Optional[str] = Field(default=None, alias="PREVIEWGEN_GLOB")
    min_size_bytes: int = Field(1024 * 1024, ge=0, description="Files at or below this size are skipped")

    # -------- Canvas / grid --------
    width: int = Field(1920, ge=1)
    height: int = Field(1080, ge=1)
    columns: int = Field(9, ge=1)
    rows: int = Field(7, ge=1)
    border_width: int = Field(2, ge=0)
    quality: int = Field(100, ge=0, le=100, description="JPEG quality of the preview")

    # -------- Text --------
    font: str = "Arial"
    font_size: int = Field(16, ge=1)
    outline_width: int = Field(1, ge=0)
    label_mode: LabelMode = LabelMode.none

    # -------- Output / run --------
    suffix: str = ".preview.jpg"
    temp_dir: Optional[Path] = None
    overwrite: bool = False
    workers: int = Field(1, ge=1)
    max_workers: int = Field(8, ge=1, le=64, description="Upper bound for --workers")

    # -------- Sub-configs --------
    ffmpeg: FFmpegConfig = FFmpegConfig()

    model_config = SettingsConfigDict(
        env_prefix="PREVIEWGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("video_exts", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return [s.lstrip(".").lower() for s in csv_to_list(v)]

    @field_validator("overwrite", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    @field_validator("temp_dir", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    # ===== Derived =====
    @computed_field  # type: ignore[misc]
    @property
    def glob_pattern(self) -> str:
        if self.glob_override:
            return self.glob_override
        exts = self.video_exts or DEFAULT_VIDEO_EXTS
        if len(exts) == 1:
            return f"**/*.{exts[0]}"
        return "**/*.{" + ",".join(exts) + "}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from previewgen.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
