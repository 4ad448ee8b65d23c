"""Durable store errors."""


class StoreError(Exception):
    """Base exception for durable store operations."""


class StoreCapacityError(StoreError):
    """Raised when a value does not fit within the store quota."""


class StoreWriteError(StoreError):
    """Raised when the backend cannot write a value."""
