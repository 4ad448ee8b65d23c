"""Selection state tests."""

from __future__ import annotations

import base64
from datetime import timezone

from photostash.gallery import PhotoCollection, SelectionState


def _setup(store, notifier, renderer, viewer, *records, confirm=None):
    store.save(list(records))
    collection = PhotoCollection(store, notifier, renderer=renderer, confirm=confirm)
    return collection, SelectionState(collection, viewer=viewer, tz=timezone.utc)


def test_select_exposes_display_fields(store, notifier, renderer, viewer, make_record) -> None:
    record = make_record("a", "sunset.png", size=1536)
    _, selection = _setup(store, notifier, renderer, viewer, record)

    details = selection.select(0)

    assert details is not None
    assert details.name == "sunset.png"
    assert details.size_label == "1.5 KB"
    assert details.type_label == "PNG"
    assert details.uploaded_label == "May 01, 2024 12:30"
    assert viewer.shown == [details]
    assert selection.index == 0
    assert selection.current == record


def test_select_out_of_range_is_ignored(store, notifier, renderer, viewer, make_record) -> None:
    _, selection = _setup(store, notifier, renderer, viewer, make_record("a"))
    selection.select(0)

    assert selection.select(5) is None
    assert selection.select(-1) is None
    assert selection.index == 0
    assert len(viewer.shown) == 1


def test_select_and_clear_are_idempotent(store, notifier, renderer, viewer, make_record) -> None:
    _, selection = _setup(store, notifier, renderer, viewer, make_record("b"), make_record("a"))

    first = selection.select(1)
    second = selection.select(1)
    assert first == second
    assert selection.index == 1

    selection.clear()
    assert selection.index is None
    selection.clear()
    assert selection.index is None
    assert selection.current is None


def test_delete_selected_confirms_then_clears(
    store, notifier, renderer, viewer, make_record, scripted_confirm
) -> None:
    confirm = scripted_confirm(True)
    collection, selection = _setup(
        store, notifier, renderer, viewer, make_record("b"), make_record("a", "cat.png"),
        confirm=confirm,
    )
    selection.select(1)

    removed = collection.delete_selected(selection)

    assert removed is not None and removed.id == "a"
    assert confirm.prompts == ['Delete photo "cat.png"?']
    assert [record.id for record in collection] == ["b"]
    assert selection.index is None
    assert viewer.closed == 1


def test_delete_selected_declined_keeps_everything(
    store, notifier, renderer, viewer, make_record, scripted_confirm
) -> None:
    collection, selection = _setup(
        store, notifier, renderer, viewer, make_record("a"), confirm=scripted_confirm(False)
    )
    selection.select(0)

    assert collection.delete_selected(selection) is None
    assert len(collection) == 1
    assert selection.index == 0


def test_delete_selected_without_selection_is_noop(
    store, notifier, renderer, viewer, make_record, scripted_confirm
) -> None:
    confirm = scripted_confirm(True)
    collection, selection = _setup(
        store, notifier, renderer, viewer, make_record("a"), confirm=confirm
    )

    assert collection.delete_selected(selection) is None
    assert confirm.prompts == []
    assert len(collection) == 1


def test_selection_follows_record_when_indices_shift(
    store, notifier, renderer, viewer, make_record
) -> None:
    collection, selection = _setup(
        store, notifier, renderer, viewer, make_record("c"), make_record("b"), make_record("a")
    )
    selection.select(2)

    collection.delete_at(0)
    assert selection.index == 1
    assert selection.current.id == "a"

    collection.insert(make_record("d"))
    assert selection.index == 2
    assert selection.details().index == 2


def test_deleting_selected_record_resets_selection(
    store, notifier, renderer, viewer, make_record
) -> None:
    collection, selection = _setup(store, notifier, renderer, viewer, make_record("b"), make_record("a"))
    selection.select(0)

    collection.delete_at(0)

    assert selection.index is None
    assert selection.details() is None
    assert viewer.closed == 1


def test_download_decodes_selected_photo(store, notifier, renderer, viewer, make_record) -> None:
    content = b"\x89PNG fake bytes"
    record = make_record("a", "kite.png").model_copy(
        update={"data": "data:image/png;base64," + base64.b64encode(content).decode("ascii")}
    )
    _, selection = _setup(store, notifier, renderer, viewer, record)

    assert selection.download() is None

    selection.select(0)
    photo = selection.download()

    assert photo is not None
    assert photo.filename == "kite.png"
    assert photo.content_type == "image/png"
    assert photo.content == content
    assert notifier.messages == [("Download started", "success")]


def test_download_of_corrupt_payload_reports_failure(
    store, notifier, renderer, viewer, make_record
) -> None:
    record = make_record("a").model_copy(update={"data": "not a data uri"})
    _, selection = _setup(store, notifier, renderer, viewer, record)
    selection.select(0)

    assert selection.download() is None
    assert notifier.messages == [("Download failed", "error")]
