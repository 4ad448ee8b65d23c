"""Single-photo inspection state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from photostash.ingestion.encoder import decode_data_uri
from photostash.ingestion.errors import EncodingError
from photostash.store.models import PhotoRecord

from .collaborators import Viewer
from .collection import PhotoCollection
from .display import file_type_label, format_file_size, format_upload_date

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PhotoDetails:
    """Display-ready fields for the inspected photo."""

    index: int
    id: str
    name: str
    data: str
    size_label: str
    type_label: str
    uploaded_label: str

    @classmethod
    def from_record(
        cls, record: PhotoRecord, index: int, tz: Optional[tzinfo] = None
    ) -> "PhotoDetails":
        return cls(
            index=index,
            id=record.id,
            name=record.name,
            data=record.data,
            size_label=format_file_size(record.size),
            type_label=file_type_label(record.content_type),
            uploaded_label=format_upload_date(record.upload_date, tz),
        )


@dataclass(frozen=True, slots=True)
class PhotoDownload:
    """Decoded image bytes ready to be written under the original name."""

    filename: str
    content_type: str
    content: bytes


class SelectionState:
    """Track which photo, if any, is under inspection.

    The selection follows the record rather than the position: the index is
    resolved against the live collection on every read. Inserting or deleting
    other photos shifts the reported index, and deleting the selected photo
    resets the selection to none.
    """

    def __init__(
        self,
        collection: PhotoCollection,
        *,
        viewer: Viewer | None = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        """Initialize an empty selection.

        Args:
            collection: Collection the selected photo belongs to.
            viewer: Optional view opened on select and closed on clear.
            tz: Time zone for upload dates; local time when omitted.
        """
        self._collection = collection
        self._viewer = viewer
        self._tz = tz
        self._selected_id: Optional[str] = None

    @property
    def index(self) -> Optional[int]:
        """Return the current index of the selected photo, or None."""
        if self._selected_id is None:
            return None
        index = self._collection.index_of(self._selected_id)
        if index is None:
            LOGGER.debug("Selected photo %r is gone; clearing selection.", self._selected_id)
            self.clear()
        return index

    @property
    def current(self) -> Optional[PhotoRecord]:
        """Return the selected record, or None."""
        index = self.index
        return None if index is None else self._collection.get(index)

    def select(self, index: int) -> Optional[PhotoDetails]:
        """Select the photo at ``index`` and hand its details to the viewer.

        Out-of-range indices are ignored and leave the state unchanged.
        """
        record = self._collection.get(index)
        if record is None:
            return None
        self._selected_id = record.id
        details = PhotoDetails.from_record(record, index, self._tz)
        if self._viewer is not None:
            self._viewer.show(details)
        return details

    def details(self) -> Optional[PhotoDetails]:
        """Return display fields for the selected photo, or None."""
        index = self.index
        if index is None:
            return None
        return PhotoDetails.from_record(self._collection.photos[index], index, self._tz)

    def clear(self) -> None:
        """Reset the selection to none."""
        self._selected_id = None
        if self._viewer is not None:
            self._viewer.close()

    def download(self) -> Optional[PhotoDownload]:
        """Return the selected photo's original bytes, or None when nothing is selected."""
        record = self.current
        if record is None:
            return None
        try:
            content_type, content = decode_data_uri(record.data)
        except EncodingError as exc:
            LOGGER.error("Could not decode photo %r: %s", record.id, exc)
            self._collection.notifier.notify("Download failed", "error")
            return None
        self._collection.notifier.notify("Download started")
        return PhotoDownload(filename=record.name, content_type=content_type, content=content)


__all__ = ["SelectionState", "PhotoDetails", "PhotoDownload"]
