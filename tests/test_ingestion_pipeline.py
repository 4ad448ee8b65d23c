"""Tests covering the ingestion pipeline."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path

from photostash.gallery import PhotoCollection, SequentialIdGenerator
from photostash.ingestion import FileDescriptor, IngestionPipeline
from photostash.ingestion.pipeline import (
    NO_VALID_FILES_MESSAGE,
    PARTIAL_REJECTION_MESSAGE,
    UPLOAD_FAILED_MESSAGE,
)

MIB = 1024 * 1024
FIXED_TIME = datetime(2024, 6, 1, 8, 0, 0, tzinfo=timezone.utc)


def _pipeline(store, notifier, renderer, **kwargs) -> IngestionPipeline:
    collection = PhotoCollection(store, notifier, renderer=renderer)
    kwargs.setdefault("id_generator", SequentialIdGenerator())
    return IngestionPipeline(collection, clock=lambda: FIXED_TIME, **kwargs)


def _image(name: str, content_type: str, size: int, content: bytes = b"img") -> FileDescriptor:
    return FileDescriptor(name=name, content_type=content_type, size=size, content=content)


def test_only_valid_files_are_stored(store, notifier, renderer, png_bytes) -> None:
    pipeline = _pipeline(store, notifier, renderer)
    files = [
        _image("small.png", "image/png", 2 * MIB, png_bytes),
        _image("huge.jpg", "image/jpeg", 12 * MIB),
    ]

    outcome = asyncio.run(pipeline.ingest(files))

    assert outcome.status == "completed"
    assert (outcome.accepted, outcome.rejected) == (1, 1)
    stored = store.load()
    assert len(stored) == 1
    assert stored[0].name == "small.png"
    assert stored[0].size == 2 * MIB
    assert stored[0].upload_date == FIXED_TIME
    assert stored[0].data.startswith("data:image/png;base64,")
    assert notifier.errors == [PARTIAL_REJECTION_MESSAGE]
    assert notifier.messages[-1] == ("Uploaded 1 photo(s)", "success")


def test_partial_rejection_fires_one_advisory(store, notifier, renderer) -> None:
    pipeline = _pipeline(store, notifier, renderer)
    files = [
        _image("a.png", "image/png", 100),
        _image("b.bmp", "image/bmp", 100),
        _image("c.gif", "image/gif", 100),
        _image("d.webp", "image/webp", 100),
        _image("e.txt", "text/plain", 100),
    ]

    outcome = asyncio.run(pipeline.ingest(files))

    assert len(outcome.ingested) == 3
    assert len(pipeline.collection) == 3
    assert notifier.errors.count(PARTIAL_REJECTION_MESSAGE) == 1


def test_new_photos_are_prepended_in_batch_order(store, notifier, renderer) -> None:
    pipeline = _pipeline(store, notifier, renderer)

    outcome = asyncio.run(
        pipeline.ingest([_image("first.png", "image/png", 1), _image("second.png", "image/png", 1)])
    )

    names = [record.name for record in pipeline.collection]
    assert names == ["second.png", "first.png"]
    assert [record.name for record in outcome.ingested] == names
    assert [record.name for record in store.load()] == names
    assert [record.id for record in store.load()] == ["photo-2", "photo-1"]


def test_no_valid_files_changes_nothing(store, notifier, renderer, make_record) -> None:
    store.save([make_record("a")])
    pipeline = _pipeline(store, notifier, renderer)

    outcome = asyncio.run(
        pipeline.ingest([_image("doc.pdf", "application/pdf", 10), _image("big.png", "image/png", 11 * MIB)])
    )

    assert outcome.status == "no_valid_files"
    assert outcome.succeeded is False
    assert outcome.rejected == 2
    assert [record.id for record in store.load()] == ["a"]
    assert notifier.messages == [(NO_VALID_FILES_MESSAGE, "error")]
    assert renderer.loading_calls == []
    assert renderer.renders == []


def test_empty_batch_reports_no_valid_files(store, notifier, renderer) -> None:
    outcome = asyncio.run(_pipeline(store, notifier, renderer).ingest([]))

    assert outcome.status == "no_valid_files"
    assert notifier.errors == [NO_VALID_FILES_MESSAGE]


def test_encoding_failure_aborts_batch_without_rollback(
    store, notifier, renderer, tmp_path: Path
) -> None:
    pipeline = _pipeline(store, notifier, renderer)
    broken = FileDescriptor(
        name="broken.png", content_type="image/png", size=10, source=tmp_path / "missing.png"
    )
    files = [_image("ok.png", "image/png", 10), broken, _image("later.png", "image/png", 10)]

    outcome = asyncio.run(pipeline.ingest(files))

    assert outcome.status == "failed"
    assert outcome.error and "broken.png" in outcome.error
    assert [record.name for record in outcome.ingested] == ["ok.png"]
    assert [record.name for record in pipeline.collection] == ["ok.png"]
    assert [record.name for record in store.load()] == ["ok.png"]
    assert notifier.messages[-1] == (UPLOAD_FAILED_MESSAGE, "error")
    assert renderer.loading_calls == [True, False]


def test_loading_indicator_wraps_successful_batch(store, notifier, renderer) -> None:
    asyncio.run(_pipeline(store, notifier, renderer).ingest([_image("a.png", "image/png", 1)]))

    assert renderer.loading_calls == [True, False]
    assert renderer.renders[-1][1] == 1


def test_generated_ids_skip_existing_records(store, notifier, renderer, make_record) -> None:
    store.save([make_record("photo-1"), make_record("photo-2")])
    pipeline = _pipeline(store, notifier, renderer)

    asyncio.run(pipeline.ingest([_image("new.png", "image/png", 1)]))

    assert pipeline.collection.get(0).id == "photo-3"
    ids = [record.id for record in store.load()]
    assert len(ids) == len(set(ids)) == 3
