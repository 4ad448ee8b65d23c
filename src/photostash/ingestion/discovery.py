"""Turn filesystem paths into candidate file descriptors."""

from __future__ import annotations

import logging
import mimetypes
import os
from pathlib import Path
from typing import Iterable, Iterator

from PIL import Image

from .models import FileDescriptor

LOGGER = logging.getLogger(__name__)

UNKNOWN_CONTENT_TYPE = "application/octet-stream"


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts if part not in (".", ".."))


def _display_name(path: Path) -> str:
    # Undecodable bytes in the file name become U+FFFD so the name stays valid UTF-8.
    return os.fsencode(path.name).decode("utf-8", "replace")


class TypeDetector:
    """Identify a file's MIME type from its extension, falling back to its header."""

    def detect(self, path: Path) -> str:
        """Return the MIME type for ``path``."""
        guessed, _ = mimetypes.guess_type(path.name)
        if guessed:
            return guessed
        try:
            with Image.open(path) as img:
                sniffed = Image.MIME.get(img.format or "")
        except OSError:
            sniffed = None
        return sniffed or UNKNOWN_CONTENT_TYPE


class DirectoryScanner:
    """Expand files and directories into descriptors for the ingestion pipeline."""

    def __init__(
        self,
        *,
        recursive: bool = False,
        include_hidden: bool = False,
        detector: TypeDetector | None = None,
    ) -> None:
        self.recursive = recursive
        self.include_hidden = include_hidden
        self.detector = detector or TypeDetector()

    def scan(self, paths: Iterable[Path]) -> Iterator[FileDescriptor]:
        """Yield a descriptor for every regular file reachable from ``paths``.

        Files named explicitly are always yielded; hidden-file filtering only
        applies to directory contents.
        """
        for path in paths:
            path = path.expanduser()
            if path.is_file():
                descriptor = self._describe(path)
                if descriptor is not None:
                    yield descriptor
                continue
            if not path.is_dir():
                LOGGER.warning("Skipping %s: not a file or directory.", path)
                continue
            candidates = path.rglob("*") if self.recursive else path.iterdir()
            for candidate in sorted(candidates):
                if not candidate.is_file():
                    continue
                if not self.include_hidden and _is_hidden(candidate.relative_to(path)):
                    continue
                descriptor = self._describe(candidate)
                if descriptor is not None:
                    yield descriptor

    def _describe(self, path: Path) -> FileDescriptor | None:
        try:
            size = path.stat().st_size
        except OSError as exc:
            LOGGER.warning("Skipping %s: %s", path, exc)
            return None
        return FileDescriptor(
            name=_display_name(path),
            content_type=self.detector.detect(path),
            size=size,
            source=path,
        )


__all__ = ["DirectoryScanner", "TypeDetector", "UNKNOWN_CONTENT_TYPE"]
