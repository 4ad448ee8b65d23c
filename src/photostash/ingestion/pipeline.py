"""Batch ingestion: validate, encode, and insert uploaded files."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Iterable

from photostash.gallery.collaborators import Notifier, Renderer
from photostash.gallery.ids import IdGenerator, UuidIdGenerator
from photostash.store.models import PhotoRecord

from .encoder import PhotoEncoder
from .errors import EncodingError
from .models import FileDescriptor, IngestionOutcome
from .validator import FileValidator

if TYPE_CHECKING:
    from photostash.gallery.collection import PhotoCollection

LOGGER = logging.getLogger(__name__)

NO_VALID_FILES_MESSAGE = "Please choose valid image files"
PARTIAL_REJECTION_MESSAGE = "Some files are unsupported or exceed the size limit"
UPLOAD_FAILED_MESSAGE = "Upload failed, please try again"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IngestionPipeline:
    """Coordinate validation, encoding, and insertion for a batch of files."""

    def __init__(
        self,
        collection: "PhotoCollection",
        *,
        validator: FileValidator | None = None,
        encoder: PhotoEncoder | None = None,
        id_generator: IdGenerator | None = None,
        clock: Callable[[], datetime] = _utcnow,
        notifier: Notifier | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            collection: Collection receiving the new records.
            validator: Acceptance rules; defaults to the standard whitelist and 10 MiB.
            encoder: Converts file content to data URIs.
            id_generator: Source of record identifiers.
            clock: Returns the upload timestamp for new records.
            notifier: Message sink; defaults to the collection's notifier.
            renderer: Busy-indicator consumer; defaults to the collection's renderer.
        """
        self.collection = collection
        self.validator = validator or FileValidator()
        self.encoder = encoder or PhotoEncoder()
        self.id_generator = id_generator or UuidIdGenerator()
        self.clock = clock
        self.notifier = notifier or collection.notifier
        self.renderer = renderer or collection.renderer

    async def ingest(self, descriptors: Iterable[FileDescriptor]) -> IngestionOutcome:
        """Ingest a batch of files into the collection.

        Files are encoded and inserted one at a time in input order. An
        encoding failure aborts the rest of the batch; photos inserted before
        it are kept.

        Args:
            descriptors: Candidate files from the file source.

        Returns:
            IngestionOutcome: Counts and records produced by the batch.
        """
        accepted, rejected = self.validator.partition(descriptors)
        LOGGER.info("Ingesting batch: %d accepted, %d rejected.", len(accepted), len(rejected))

        if not accepted:
            self.notifier.notify(NO_VALID_FILES_MESSAGE, "error")
            return IngestionOutcome(status="no_valid_files", rejected=len(rejected))

        if rejected:
            self.notifier.notify(PARTIAL_REJECTION_MESSAGE, "error")

        ingested: list[PhotoRecord] = []
        self.renderer.loading(True)
        try:
            for descriptor in accepted:
                data = await self.encoder.encode(descriptor)
                record = PhotoRecord(
                    id=self._next_id(),
                    name=descriptor.name,
                    data=data,
                    content_type=descriptor.content_type,
                    size=descriptor.size,
                    upload_date=self.clock(),
                )
                self.collection.insert(record)
                ingested.insert(0, record)
        except EncodingError as exc:
            LOGGER.exception(
                "Upload aborted after %d of %d file(s).", len(ingested), len(accepted)
            )
            self.notifier.notify(UPLOAD_FAILED_MESSAGE, "error")
            return IngestionOutcome(
                status="failed",
                accepted=len(accepted),
                rejected=len(rejected),
                ingested=ingested,
                error=str(exc),
            )
        finally:
            self.renderer.loading(False)

        self.notifier.notify(f"Uploaded {len(ingested)} photo(s)")
        return IngestionOutcome(
            status="completed",
            accepted=len(accepted),
            rejected=len(rejected),
            ingested=ingested,
        )

    def _next_id(self) -> str:
        photo_id = self.id_generator.new_id()
        while photo_id in self.collection:
            photo_id = self.id_generator.new_id()
        return photo_id


__all__ = [
    "IngestionPipeline",
    "NO_VALID_FILES_MESSAGE",
    "PARTIAL_REJECTION_MESSAGE",
    "UPLOAD_FAILED_MESSAGE",
]
