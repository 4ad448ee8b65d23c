"""Gallery facade wiring the store, collection, selection, and pipeline."""

from __future__ import annotations

from datetime import tzinfo
from pathlib import Path
from typing import Iterable, Optional

from photostash.config.models import PhotostashConfig
from photostash.ingestion.models import FileDescriptor, IngestionOutcome
from photostash.ingestion.pipeline import IngestionPipeline
from photostash.ingestion.validator import FileValidator
from photostash.store import JsonFileBackend, PhotoStore

from .collaborators import Confirm, Notifier, Renderer, Viewer
from .collection import PhotoCollection
from .ids import IdGenerator
from .selection import SelectionState


class Gallery:
    """One gallery session operating on one photo store."""

    def __init__(
        self,
        store: PhotoStore,
        notifier: Notifier,
        *,
        renderer: Renderer | None = None,
        confirm: Confirm | None = None,
        viewer: Viewer | None = None,
        validator: FileValidator | None = None,
        id_generator: IdGenerator | None = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.store = store
        self.collection = PhotoCollection(store, notifier, renderer=renderer, confirm=confirm)
        self.selection = SelectionState(self.collection, viewer=viewer, tz=tz)
        self.pipeline = IngestionPipeline(
            self.collection, validator=validator, id_generator=id_generator
        )

    @classmethod
    def from_config(
        cls,
        config: PhotostashConfig,
        notifier: Notifier,
        **kwargs,
    ) -> "Gallery":
        """Open the gallery described by ``config``.

        Args:
            config: Loaded configuration.
            notifier: Sink for user-facing messages.
            **kwargs: Further collaborators forwarded to the constructor.

        Returns:
            Gallery: Session backed by the configured file store.
        """
        backend = JsonFileBackend(
            Path(config.storage.directory), max_bytes=config.storage.max_bytes
        )
        kwargs.setdefault("validator", FileValidator.from_settings(config.validation))
        return cls(PhotoStore(backend, key=config.storage.key), notifier, **kwargs)

    async def ingest(self, descriptors: Iterable[FileDescriptor]) -> IngestionOutcome:
        """Run a batch of files through the ingestion pipeline."""
        return await self.pipeline.ingest(descriptors)


__all__ = ["Gallery"]
