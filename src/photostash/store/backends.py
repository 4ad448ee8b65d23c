"""Key-value backends used by the photo store."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from .errors import StoreCapacityError, StoreWriteError


class KeyValueBackend(Protocol):
    """Durable string storage addressed by key."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...


def _encode(key: str, value: str, max_bytes: Optional[int]) -> bytes:
    """Return ``value`` as UTF-8 after checking it against the quota.

    Args:
        key: Key the value is written under, used in error messages.
        value: Serialized value.
        max_bytes: Optional quota in bytes.

    Returns:
        bytes: Encoded value.

    Raises:
        StoreWriteError: If the value holds text that UTF-8 cannot represent.
        StoreCapacityError: If the encoded value exceeds the quota.
    """
    try:
        encoded = value.encode("utf-8")
    except UnicodeError as exc:
        raise StoreWriteError(f"Value for {key!r} cannot be encoded as UTF-8: {exc}") from exc
    if max_bytes is not None and len(encoded) > max_bytes:
        raise StoreCapacityError(
            f"Value for {key!r} is {len(encoded)} bytes; the store quota is {max_bytes} bytes."
        )
    return encoded


class JsonFileBackend:
    """Store each key as ``<directory>/<key>.json`` with atomic replacement."""

    def __init__(self, directory: Path, *, max_bytes: Optional[int] = None) -> None:
        """Initialize the backend.

        Args:
            directory: Directory holding one file per key.
            max_bytes: Optional quota applied to every written value.
        """
        self._directory = directory.expanduser()
        self._max_bytes = max_bytes

    @property
    def directory(self) -> Path:
        """Return the directory holding stored values."""
        return self._directory

    def path_for(self, key: str) -> Path:
        """Return the file path used for ``key``."""
        return self._directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        """Read the value stored under ``key``.

        Args:
            key: Storage key.

        Returns:
            Optional[str]: Stored text, or None when no file exists for the key.

        Raises:
            OSError: If the file exists but cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write ``value`` to a temporary file, then move it over the key's file.

        Args:
            key: Storage key.
            value: Serialized value.

        Raises:
            StoreCapacityError: If the value exceeds the quota.
            StoreWriteError: If the value cannot be encoded or written.
        """
        encoded = _encode(key, value, self._max_bytes)
        target = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{key}-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(encoded)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StoreWriteError(f"Could not write {target}: {exc}") from exc

    def delete(self, key: str) -> None:
        """Remove the file stored for ``key`` if present.

        Args:
            key: Storage key.

        Raises:
            StoreWriteError: If the file cannot be removed.
        """
        try:
            self.path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StoreWriteError(f"Could not delete {self.path_for(key)}: {exc}") from exc


class MemoryBackend:
    """In-process backend with the same quota semantics as the file backend."""

    def __init__(self, *, max_bytes: Optional[int] = None) -> None:
        """Initialize an empty backend.

        Args:
            max_bytes: Optional quota applied to every written value.
        """
        self._values: Dict[str, str] = {}
        self.max_bytes = max_bytes

    def get(self, key: str) -> Optional[str]:
        """Return the value held for ``key``, or None."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Hold ``value`` under ``key`` once it passes the encoding and quota checks."""
        _encode(key, value, self.max_bytes)
        self._values[key] = value

    def delete(self, key: str) -> None:
        """Forget ``key`` if present."""
        self._values.pop(key, None)


__all__ = ["KeyValueBackend", "JsonFileBackend", "MemoryBackend"]
