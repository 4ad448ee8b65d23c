"""Photo collection, selection, and display helpers."""

from .collaborators import Confirm, Notifier, NullRenderer, Renderer, Severity, Viewer, decline
from .collection import DuplicatePhotoError, ExportArtifact, PhotoCollection
from .display import file_type_label, format_file_size, format_upload_date
from .ids import IdGenerator, SequentialIdGenerator, UuidIdGenerator
from .selection import PhotoDetails, PhotoDownload, SelectionState

__all__ = [
    "Confirm",
    "Notifier",
    "NullRenderer",
    "Renderer",
    "Severity",
    "Viewer",
    "decline",
    "DuplicatePhotoError",
    "ExportArtifact",
    "PhotoCollection",
    "file_type_label",
    "format_file_size",
    "format_upload_date",
    "IdGenerator",
    "SequentialIdGenerator",
    "UuidIdGenerator",
    "PhotoDetails",
    "PhotoDownload",
    "SelectionState",
]
