"""Validation helpers for startup flags."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Iterable, Optional

from ..core.errors import ValidationError

MEDIA_EXTENSIONS = {".mp4", ".mkv", ".webm", ".avi", ".mov", ".wmv", ".flv", ".mpg", ".mpeg", ".gif"}


def is_media_file(path: Path) -> bool:
    """True for the container formats the splicer hands to the decoder."""

    return path.suffix.lower() in MEDIA_EXTENSIONS


def parse_positive_int(value: str | int | None, field: str) -> Optional[int]:
    """Parse a positive integer from a string value, if provided."""

    if value is None or value == "":
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be an integer") from exc
    if parsed <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return parsed


def parse_unit_float(value: str | float | None, field: str) -> Optional[float]:
    """Parse a float in [0, 1] rounded to two decimals, if provided."""

    if value is None or value == "":
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if parsed != parsed or parsed < 0 or parsed > 1:
        raise ValidationError(f"{field} must be between 0.00 and 1.00")
    return round(parsed, 2)


def split_raw_options(values: Iterable[str] | None) -> list[str]:
    """Split each pass-through option string into separate arguments, in order."""

    options: list[str] = []
    for value in values or ():
        try:
            options.extend(shlex.split(value))
        except ValueError as exc:
            raise ValidationError(f"Cannot parse rasterizer options {value!r}: {exc}") from exc
    return options
