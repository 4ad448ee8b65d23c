"""Acceptance rules for candidate files."""

from __future__ import annotations

from typing import Iterable, Sequence

from photostash.config.models import DEFAULT_ALLOWED_TYPES, ValidationSettings

from .models import FileDescriptor

DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024


class FileValidator:
    """Accept files by content-type whitelist and size ceiling."""

    def __init__(
        self,
        allowed_types: Iterable[str] = DEFAULT_ALLOWED_TYPES,
        max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
    ) -> None:
        self.allowed_types = frozenset(allowed_types)
        self.max_size_bytes = max_size_bytes

    @classmethod
    def from_settings(cls, settings: ValidationSettings) -> "FileValidator":
        """Build a validator from the ``validation`` config section."""
        return cls(settings.allowed_types, settings.max_file_size_bytes)

    def validate(self, descriptor: FileDescriptor) -> bool:
        """Return True when the file may be ingested."""
        return (
            descriptor.content_type in self.allowed_types
            and descriptor.size <= self.max_size_bytes
        )

    def partition(
        self, descriptors: Iterable[FileDescriptor]
    ) -> tuple[Sequence[FileDescriptor], Sequence[FileDescriptor]]:
        """Split descriptors into accepted and rejected lists, keeping input order."""
        accepted: list[FileDescriptor] = []
        rejected: list[FileDescriptor] = []
        for descriptor in descriptors:
            (accepted if self.validate(descriptor) else rejected).append(descriptor)
        return accepted, rejected


__all__ = ["FileValidator", "DEFAULT_MAX_SIZE_BYTES"]
