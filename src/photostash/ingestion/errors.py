"""Ingestion errors."""


class IngestionError(Exception):
    """Base exception for ingestion failures."""


class EncodingError(IngestionError):
    """Raised when a file cannot be read or converted into a data URI."""
