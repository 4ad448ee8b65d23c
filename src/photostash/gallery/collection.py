"""In-memory photo collection with write-through persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Iterator, Optional

from photostash.store import PhotoStore
from photostash.store.models import PhotoRecord

from .collaborators import Confirm, Notifier, NullRenderer, Renderer, decline

if TYPE_CHECKING:
    from .selection import SelectionState

LOGGER = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Save failed; storage space may be insufficient"
CLEAR_PROMPT = "Delete all photos? This cannot be undone."


class DuplicatePhotoError(ValueError):
    """Raised when a record with an existing id is inserted."""


@dataclass(frozen=True, slots=True)
class ExportArtifact:
    """Downloadable backup of the collection.

    Attributes:
        filename: Suggested file name, ``photos-backup-<YYYY-MM-DD>.json``.
        content: Pretty-printed JSON array of records.
    """

    filename: str
    content: str


class PhotoCollection:
    """Ordered photo records, most recent first, persisted after every mutation.

    The collection is loaded from the store once on construction. Each
    mutation replaces the record list, offers the new state to the store, and
    then refreshes the renderer, so readers only ever see settled states. A
    failed save is reported to the notifier; the in-memory records remain
    authoritative.
    """

    def __init__(
        self,
        store: PhotoStore,
        notifier: Notifier,
        *,
        renderer: Renderer | None = None,
        confirm: Confirm | None = None,
    ) -> None:
        """Initialize the collection from the store.

        Args:
            store: Durable store holding the serialized collection.
            notifier: Sink for user-facing messages.
            renderer: Consumer refreshed after every mutation.
            confirm: Yes/no gate consulted before destructive operations.
        """
        self._store = store
        self._notifier = notifier
        self._renderer = renderer or NullRenderer()
        self._confirm = confirm or decline
        self._photos: list[PhotoRecord] = store.load()
        LOGGER.debug("Loaded %d photo(s) from store key %r.", len(self._photos), store.key)

    @property
    def photos(self) -> tuple[PhotoRecord, ...]:
        """Return an immutable snapshot of the records."""
        return tuple(self._photos)

    @property
    def notifier(self) -> Notifier:
        """Return the collaborator that receives user notifications."""
        return self._notifier

    @property
    def renderer(self) -> Renderer:
        """Return the collaborator that draws the gallery."""
        return self._renderer

    @property
    def store(self) -> PhotoStore:
        """Return the durable store the collection writes through to."""
        return self._store

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self) -> Iterator[PhotoRecord]:
        return iter(self.photos)

    def __contains__(self, photo_id: object) -> bool:
        return any(record.id == photo_id for record in self._photos)

    def get(self, index: int) -> Optional[PhotoRecord]:
        """Return the record at ``index``, or None when out of range."""
        if 0 <= index < len(self._photos):
            return self._photos[index]
        return None

    def index_of(self, photo_id: str) -> Optional[int]:
        """Return the position of the record with ``photo_id``, if present."""
        for index, record in enumerate(self._photos):
            if record.id == photo_id:
                return index
        return None

    def find(self, photo_id: str) -> Optional[PhotoRecord]:
        """Return the record with ``photo_id``, if present."""
        index = self.index_of(photo_id)
        return None if index is None else self._photos[index]

    def refresh(self) -> None:
        """Push the current records to the renderer."""
        self._renderer.render(self.photos, len(self._photos))

    def insert(self, record: PhotoRecord) -> None:
        """Prepend ``record``, persist, and refresh the renderer.

        Raises:
            DuplicatePhotoError: If a record with the same id already exists.
        """
        if record.id in self:
            raise DuplicatePhotoError(f"A photo with id {record.id!r} already exists.")
        self._commit([record, *self._photos])

    def delete_at(self, index: int) -> Optional[PhotoRecord]:
        """Remove the record at ``index``.

        Out-of-range indices, including negative ones, are ignored.

        Returns:
            Optional[PhotoRecord]: The removed record, or None when nothing changed.
        """
        if not 0 <= index < len(self._photos):
            return None
        removed = self._photos[index]
        self._commit(self._photos[:index] + self._photos[index + 1 :])
        self._notifier.notify(f'Deleted photo "{removed.name}"')
        return removed

    def delete_by_id(self, photo_id: str) -> Optional[PhotoRecord]:
        """Remove the record with ``photo_id``; unknown ids are ignored."""
        index = self.index_of(photo_id)
        if index is None:
            return None
        return self.delete_at(index)

    def delete_selected(self, selection: "SelectionState") -> Optional[PhotoRecord]:
        """Delete the selected photo after confirmation, then clear the selection.

        Nothing happens when no photo is selected or the user declines.
        """
        index = selection.index
        if index is None:
            return None
        record = self._photos[index]
        if not self._confirm(f'Delete photo "{record.name}"?'):
            return None
        removed = self.delete_at(index)
        selection.clear()
        return removed

    def clear_all(self) -> bool:
        """Remove every photo after confirmation.

        Returns:
            bool: True when the collection was cleared.
        """
        if not self._confirm(CLEAR_PROMPT):
            return False
        self._commit([])
        self._notifier.notify("Cleared all photos")
        return True

    def export(self, today: date | None = None) -> ExportArtifact:
        """Return a pretty-printed JSON backup of the whole collection."""
        stamp = (today or datetime.now(timezone.utc).date()).isoformat()
        content = json.dumps(
            [record.to_payload() for record in self._photos], indent=2, ensure_ascii=False
        )
        self._notifier.notify("Backup export started")
        return ExportArtifact(filename=f"photos-backup-{stamp}.json", content=content)

    def _commit(self, photos: list[PhotoRecord]) -> None:
        self._photos = photos
        if not self._store.save(self._photos):
            self._notifier.notify(SAVE_FAILED_MESSAGE, "error")
        self.refresh()


__all__ = ["PhotoCollection", "ExportArtifact", "DuplicatePhotoError", "SAVE_FAILED_MESSAGE"]
