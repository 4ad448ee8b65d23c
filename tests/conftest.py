"""Shared fixtures and collaborator fakes for the Photostash test suite."""

from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

import pytest
from PIL import Image

from photostash.gallery.selection import PhotoDetails
from photostash.store import MemoryBackend, PhotoStore
from photostash.store.models import PhotoRecord

BASE_TIME = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


class RecordingNotifier:
    """Notifier fake that keeps every message."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, message: str, severity: str = "success") -> None:
        self.messages.append((message, severity))

    @property
    def errors(self) -> list[str]:
        return [message for message, severity in self.messages if severity == "error"]


class RecordingRenderer:
    """Renderer fake that keeps every snapshot and busy-indicator toggle."""

    def __init__(self) -> None:
        self.renders: list[tuple[tuple[PhotoRecord, ...], int]] = []
        self.loading_calls: list[bool] = []

    def render(self, photos: Sequence[PhotoRecord], count: int) -> None:
        self.renders.append((tuple(photos), count))

    def loading(self, active: bool) -> None:
        self.loading_calls.append(active)


class RecordingViewer:
    """Viewer fake that keeps shown details and close calls."""

    def __init__(self) -> None:
        self.shown: list[PhotoDetails] = []
        self.closed = 0

    def show(self, details: PhotoDetails) -> None:
        self.shown.append(details)

    def close(self) -> None:
        self.closed += 1


class ScriptedConfirm:
    """Confirmation gate returning a fixed answer and recording prompts."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.prompts: list[str] = []

    def __call__(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def viewer() -> RecordingViewer:
    return RecordingViewer()


@pytest.fixture
def scripted_confirm() -> Callable[[bool], ScriptedConfirm]:
    """Return a factory for confirmation gates with a fixed answer."""
    return ScriptedConfirm


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> PhotoStore:
    return PhotoStore(backend)


@pytest.fixture
def make_record() -> Callable[..., PhotoRecord]:
    """Return a factory for small PNG photo records."""

    def _make(
        photo_id: str,
        name: str | None = None,
        *,
        size: int = 2048,
        content_type: str = "image/png",
        minutes: int = 0,
    ) -> PhotoRecord:
        return PhotoRecord(
            id=photo_id,
            name=name or f"{photo_id}.png",
            data="data:image/png;base64,iVBORw0KGgo=",
            content_type=content_type,
            size=size,
            upload_date=BASE_TIME + timedelta(minutes=minutes),
        )

    return _make


@pytest.fixture
def png_bytes() -> bytes:
    """Return the bytes of a tiny PNG image generated with Pillow."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 4), color="blue").save(buffer, format="PNG")
    return buffer.getvalue()
