"""Ingestion pipeline package."""

from .discovery import DirectoryScanner, TypeDetector
from .encoder import PhotoEncoder, decode_data_uri
from .errors import EncodingError, IngestionError
from .models import FileDescriptor, IngestionOutcome
from .pipeline import IngestionPipeline
from .validator import FileValidator

__all__ = [
    "DirectoryScanner",
    "TypeDetector",
    "PhotoEncoder",
    "decode_data_uri",
    "EncodingError",
    "IngestionError",
    "FileDescriptor",
    "IngestionOutcome",
    "IngestionPipeline",
    "FileValidator",
]
