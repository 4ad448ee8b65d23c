"""Ingestion data models."""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from photostash.store.models import PhotoRecord

IngestionStatus = Literal["completed", "no_valid_files", "failed"]


class FileDescriptor(BaseModel):
    """A candidate file supplied by the file source.

    Exactly what the user picked: the name and MIME type as reported, the
    byte size, and either in-memory content or a path to read it from.

    Attributes:
        name: Original file name.
        content_type: Reported MIME type.
        size: Size in bytes.
        source: Path to read the content from when ``content`` is not given.
        content: Raw bytes of the file.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    content_type: str
    size: int = Field(ge=0)
    source: Optional[Path] = None
    content: Optional[bytes] = Field(default=None, repr=False)

    @model_validator(mode="after")
    def _require_content(self) -> "FileDescriptor":
        if self.source is None and self.content is None:
            raise ValueError("A file descriptor needs either content or a source path.")
        return self

    @classmethod
    def from_bytes(cls, name: str, content_type: str, content: bytes) -> "FileDescriptor":
        """Build a descriptor around in-memory content."""
        return cls(name=name, content_type=content_type, size=len(content), content=content)

    def read(self) -> bytes:
        """Return the binary content, reading it from ``source`` when needed.

        Raises:
            OSError: If the source file cannot be read.
        """
        if self.content is not None:
            return self.content
        if self.source is None:
            raise ValueError("A file descriptor needs either content or a source path.")
        return self.source.read_bytes()


class IngestionOutcome(BaseModel):
    """Aggregate result of one ingestion batch.

    Attributes:
        status: ``completed``, ``no_valid_files`` or ``failed``.
        accepted: Number of files that passed validation.
        rejected: Number of files that failed validation.
        ingested: Records inserted by this batch, most recent first.
        error: Failure message when the batch was aborted.
    """

    status: IngestionStatus
    accepted: int = 0
    rejected: int = 0
    ingested: List[PhotoRecord] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """Return True when every accepted file was ingested."""
        return self.status == "completed"


__all__ = ["FileDescriptor", "IngestionOutcome", "IngestionStatus"]
