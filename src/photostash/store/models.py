"""Persisted photo record model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class PhotoRecord(BaseModel):
    """One uploaded image and its metadata.

    Serialized with the keys used by stored collections and backups:
    ``id``, ``name``, ``data``, ``type``, ``size`` and ``uploadDate``.

    Attributes:
        id: Opaque identifier, unique within a collection.
        name: Original file name, for display only.
        data: Self-contained ``data:`` URI holding the image bytes.
        content_type: MIME type of the original file.
        size: Original file size in bytes.
        upload_date: UTC creation time with millisecond precision.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    name: str
    data: str
    content_type: str = Field(alias="type")
    size: int = Field(ge=0)
    upload_date: datetime = Field(alias="uploadDate")

    @field_validator("upload_date")
    @classmethod
    def _normalize_upload_date(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.replace(microsecond=value.microsecond // 1000 * 1000)

    @field_serializer("upload_date")
    def _serialize_upload_date(self, value: datetime) -> str:
        millis = value.microsecond // 1000
        return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}Z"

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready mapping written to the store."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = ["PhotoRecord"]
