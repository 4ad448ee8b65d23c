"""Durable persistence for the photo collection."""

from __future__ import annotations

import json
import logging
from typing import Iterable, List

from pydantic import TypeAdapter, ValidationError

from .backends import JsonFileBackend, KeyValueBackend, MemoryBackend
from .errors import StoreCapacityError, StoreError, StoreWriteError
from .models import PhotoRecord

LOGGER = logging.getLogger(__name__)

DEFAULT_STORE_KEY = "photoStorage"

_RECORDS = TypeAdapter(List[PhotoRecord])


class PhotoStore:
    """Serialize the whole photo collection to a single durable key."""

    def __init__(self, backend: KeyValueBackend, key: str = DEFAULT_STORE_KEY) -> None:
        """Initialize the store.

        Args:
            backend: Key-value surface that holds the serialized collection.
            key: Key under which the collection is stored.
        """
        self._backend = backend
        self._key = key

    @property
    def key(self) -> str:
        """Return the key holding the serialized collection."""
        return self._key

    def load(self) -> list[PhotoRecord]:
        """Return the stored collection, most recent first.

        Absent, unreadable, or malformed data yields an empty collection; the
        problem is logged rather than raised.

        Returns:
            list[PhotoRecord]: Stored records in collection order.
        """
        try:
            raw = self._backend.get(self._key)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Could not read stored photos under %r: %s", self._key, exc)
            return []
        if raw is None:
            return []

        try:
            records = _RECORDS.validate_python(json.loads(raw))
        except json.JSONDecodeError as exc:
            LOGGER.warning("Stored photos under %r are not valid JSON: %s", self._key, exc)
            return []
        except RecursionError:
            LOGGER.warning("Stored photos under %r are nested too deeply to decode.", self._key)
            return []
        except ValidationError as exc:
            LOGGER.warning(
                "Stored photos under %r do not match the record schema: %s", self._key, exc
            )
            return []

        unique: list[PhotoRecord] = []
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                LOGGER.warning("Dropping stored photo with duplicate id %r.", record.id)
                continue
            seen.add(record.id)
            unique.append(record)
        return unique

    def save(self, records: Iterable[PhotoRecord]) -> bool:
        """Persist the full collection as one write.

        Args:
            records: Records in collection order.

        Returns:
            bool: True when the write succeeded, False when the backend refused it.
        """
        payload = json.dumps([record.to_payload() for record in records], ensure_ascii=False)
        try:
            self._backend.set(self._key, payload)
        except StoreError as exc:
            LOGGER.error("Failed to save photos under %r: %s", self._key, exc)
            return False
        return True

    def size_bytes(self) -> int:
        """Return the UTF-8 size of the stored value, or 0 when nothing is stored."""
        try:
            raw = self._backend.get(self._key)
        except (OSError, UnicodeDecodeError):
            return 0
        return len(raw.encode("utf-8")) if raw else 0


__all__ = [
    "PhotoStore",
    "DEFAULT_STORE_KEY",
    "PhotoRecord",
    "KeyValueBackend",
    "JsonFileBackend",
    "MemoryBackend",
    "StoreError",
    "StoreCapacityError",
    "StoreWriteError",
]
