"""Configuration models describing Photostash settings."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ALLOWED_TYPES = [
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/gif",
]


class PhotostashBaseModel(BaseModel):
    """Shared configuration for Photostash settings models."""

    model_config = ConfigDict(extra="forbid")


class ValidationSettings(PhotostashBaseModel):
    """Rules applied to candidate files before ingestion.

    Attributes:
        allowed_types: MIME types accepted for upload.
        max_file_size_mb: Largest accepted file size in mebibytes.
    """

    allowed_types: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_TYPES))
    max_file_size_mb: int = Field(default=10, ge=0)

    @property
    def max_file_size_bytes(self) -> int:
        """Return the size ceiling expressed in bytes."""
        return self.max_file_size_mb * 1024 * 1024


class StorageSettings(PhotostashBaseModel):
    """Location and limits of the durable photo store.

    Attributes:
        directory: Directory holding the key-value files.
        key: Key under which the photo collection is stored.
        max_bytes: Optional quota for a single stored value.
    """

    directory: str = "~/.photostash"
    key: str = "photoStorage"
    max_bytes: Optional[int] = Field(default=None, ge=0)


class LoggingSettings(PhotostashBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


class CLIOptions(PhotostashBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress success notifications by default.
    """

    quiet_default: bool = False


class PhotostashConfig(PhotostashBaseModel):
    """Top-level configuration struct for Photostash.

    Attributes:
        validation: File acceptance rules.
        storage: Durable store settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DEFAULT_ALLOWED_TYPES",
    "PhotostashBaseModel",
    "ValidationSettings",
    "StorageSettings",
    "LoggingSettings",
    "CLIOptions",
    "PhotostashConfig",
]
