"""Internal shared utilities for toutf8."""

from __future__ import annotations


def _to_bytes(content: bytes | bytearray | memoryview) -> bytes:
    """Return *content* as ``bytes``, copying only when it is not already."""
    if isinstance(content, bytes):
        return content
    if isinstance(content, (bytearray, memoryview)):
        return bytes(content)
    msg = f"expected a bytes-like object, got {type(content).__name__}"
    raise TypeError(msg)
