"""Photo identifier generators."""

from __future__ import annotations

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    """Source of photo identifiers."""

    def new_id(self) -> str:
        """Return an identifier not handed out before by this generator."""
        ...


class UuidIdGenerator:
    """Generate random UUID4 hex identifiers."""

    def new_id(self) -> str:
        """Return a fresh 32-character hex identifier.

        Returns:
            str: Random identifier.
        """
        return uuid.uuid4().hex


class SequentialIdGenerator:
    """Generate ``<prefix><n>`` identifiers from a monotonic counter."""

    def __init__(self, prefix: str = "photo-", start: int = 1) -> None:
        """Initialize the generator.

        Args:
            prefix: Text placed before every counter value.
            start: First counter value handed out.
        """
        self._prefix = prefix
        self._counter = itertools.count(start)

    def new_id(self) -> str:
        """Return the next identifier in sequence.

        Returns:
            str: Identifier such as ``photo-3``.
        """
        return f"{self._prefix}{next(self._counter)}"


__all__ = ["IdGenerator", "UuidIdGenerator", "SequentialIdGenerator"]
