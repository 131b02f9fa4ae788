"""Validated startup configuration for the player."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .core import RenderConfig
from .core.errors import ValidationError
from .core.rasterizer import DEFAULT_RASTERIZER
from .utils import validators

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def env_rasterizer() -> str:
    return os.environ.get("TERMO_RASTERIZER", DEFAULT_RASTERIZER) or DEFAULT_RASTERIZER


def env_log_level() -> str:
    return os.environ.get("TERMO_LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL


def env_log_file() -> Optional[Path]:
    value = os.environ.get("TERMO_LOG_FILE")
    return Path(value) if value else None


class PlayerOptions(BaseModel):
    """Startup flags after parsing, before they seed the RenderConfig."""

    directory: Path
    fps: int = Field(30, ge=1)
    edges_only: bool = False
    edge_threshold: Optional[float] = Field(None, ge=0, le=1)
    invert: bool = False
    use_color: bool = False
    color_depth: Optional[int] = Field(None, ge=1)
    chars: Optional[str] = Field(None, min_length=1)
    interactive: bool = False
    extra_options: list[str] = Field(default_factory=list)
    rasterizer: str = Field(DEFAULT_RASTERIZER, min_length=1)
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None

    @field_validator("fps", "color_depth", mode="before")
    @classmethod
    def _parse_int(cls, value, info):
        if isinstance(value, str):
            return validators.parse_positive_int(value, info.field_name)
        return value

    @field_validator("edge_threshold", mode="before")
    @classmethod
    def _parse_threshold(cls, value):
        if isinstance(value, str):
            return validators.parse_unit_float(value, "edge threshold")
        return value

    @field_validator("edge_threshold")
    @classmethod
    def _round_threshold(cls, value):
        return None if value is None else round(value, 2)

    @field_validator("extra_options", mode="before")
    @classmethod
    def _split_extra(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return validators.split_raw_options(value)

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_values(cls, **values) -> "PlayerOptions":
        """Validate raw values, reporting failures as ``ValidationError``."""

        try:
            return cls.model_validate(values)
        except PydanticValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'value'}: {error['msg']}"
                for error in exc.errors()
            )
            raise ValidationError(details) from exc

    def to_render_config(self) -> RenderConfig:
        return RenderConfig(
            fps=self.fps,
            use_color=self.use_color,
            edges_only=self.edges_only,
            edge_threshold=self.edge_threshold,
            invert=self.invert,
            color_depth=self.color_depth,
            chars=self.chars,
            extra_options=tuple(self.extra_options),
        )
