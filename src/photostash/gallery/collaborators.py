"""Interfaces for the collaborators the gallery core talks to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Literal, Protocol, Sequence

from photostash.store.models import PhotoRecord

if TYPE_CHECKING:
    from .selection import PhotoDetails

Severity = Literal["success", "error"]

Confirm = Callable[[str], bool]


class Notifier(Protocol):
    """Sink for user-facing advisory messages."""

    def notify(self, message: str, severity: Severity = "success") -> None:
        """Deliver ``message``; display and dismissal are up to the implementation."""
        ...


class Renderer(Protocol):
    """Consumer that presents the collection after every mutation."""

    def render(self, photos: Sequence[PhotoRecord], count: int) -> None:
        """Present the full ordered collection."""
        ...

    def loading(self, active: bool) -> None:
        """Show or hide a busy indicator while a batch is ingested."""
        ...


class Viewer(Protocol):
    """Consumer for the single-photo inspection view."""

    def show(self, details: "PhotoDetails") -> None:
        ...

    def close(self) -> None:
        ...


class NullRenderer:
    """Renderer that discards everything."""

    def render(self, photos: Sequence[PhotoRecord], count: int) -> None:
        return None

    def loading(self, active: bool) -> None:
        return None


def decline(message: str) -> bool:
    """Confirmation gate that always answers no."""
    return False


__all__ = [
    "Severity",
    "Confirm",
    "Notifier",
    "Renderer",
    "Viewer",
    "NullRenderer",
    "decline",
]
