"""Human-readable formatting of photo metadata."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")

_TYPE_LABELS = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPG",
    "image/png": "PNG",
    "image/webp": "WebP",
    "image/gif": "GIF",
}

UNKNOWN_TYPE_LABEL = "Unknown format"


def format_file_size(size: int) -> str:
    """Return ``size`` in the largest fitting binary unit, e.g. ``1.5 KB``."""
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(_SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = f"{size / 1024**exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[exponent]}"


def file_type_label(content_type: str) -> str:
    """Return a short label for a MIME type."""
    return _TYPE_LABELS.get(content_type, UNKNOWN_TYPE_LABEL)


def format_upload_date(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """Return ``value`` as a readable local timestamp, or in ``tz`` when given."""
    return value.astimezone(tz).strftime("%B %d, %Y %H:%M")


__all__ = ["format_file_size", "file_type_label", "format_upload_date", "UNKNOWN_TYPE_LABEL"]
