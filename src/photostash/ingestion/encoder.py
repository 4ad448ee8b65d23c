"""Conversion between raw image bytes and ``data:`` URIs."""

from __future__ import annotations

import asyncio
import base64
import binascii

from .errors import EncodingError
from .models import FileDescriptor

_BASE64_MARKER = ";base64,"


class PhotoEncoder:
    """Encode file content as a self-contained base64 data URI."""

    async def encode(self, descriptor: FileDescriptor) -> str:
        """Read the descriptor's bytes and return ``data:<type>;base64,<payload>``.

        The read runs in a worker thread so the event loop is not blocked.

        Raises:
            EncodingError: If the content cannot be read.
        """
        try:
            content = await asyncio.to_thread(descriptor.read)
        except OSError as exc:
            raise EncodingError(f"Failed to read {descriptor.name}: {exc}") from exc
        payload = base64.b64encode(content).decode("ascii")
        return f"data:{descriptor.content_type}{_BASE64_MARKER}{payload}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into its MIME type and decoded bytes.

    Raises:
        EncodingError: If ``uri`` is not a base64 data URI.
    """
    if not uri.startswith("data:") or _BASE64_MARKER not in uri:
        raise EncodingError("Not a base64 data URI.")
    header, payload = uri[len("data:") :].split(_BASE64_MARKER, 1)
    try:
        content = base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise EncodingError(f"Invalid base64 payload: {exc}") from exc
    return header, content


__all__ = ["PhotoEncoder", "decode_data_uri"]
