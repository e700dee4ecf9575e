"""Unicode scalar to UTF-8 encoding.

The encoder writes straight into a caller-owned buffer using shifts and
masks, so decoders can emit characters without building intermediate
``str`` or ``bytes`` objects.
"""

from __future__ import annotations

#: Scalar substituted for bytes a codepage leaves undefined.
REPLACEMENT_CHARACTER: int = 0xFFFD

MAX_SCALAR: int = 0x10FFFF


def _check_scalar(scalar: int) -> None:
    if scalar < 0 or scalar > MAX_SCALAR or 0xD800 <= scalar <= 0xDFFF:
        msg = f"not a Unicode scalar value: {scalar:#x}"
        raise ValueError(msg)


def utf8_len(scalar: int) -> int:
    """Return the number of bytes *scalar* occupies in UTF-8.

    :raises ValueError: If *scalar* is negative, a surrogate, or above
        U+10FFFF.
    """
    _check_scalar(scalar)
    if scalar <= 0x7F:
        return 1
    if scalar <= 0x7FF:
        return 2
    if scalar <= 0xFFFF:
        return 3
    return 4


def encode_utf8_into(dst: bytearray | memoryview, pos: int, scalar: int) -> int:
    """Write the UTF-8 form of *scalar* into *dst* starting at *pos*.

    The caller guarantees there is room (see :func:`utf8_len`).

    :param dst: A writable byte buffer.
    :param pos: Index of the first byte to write.
    :param scalar: A Unicode scalar value.
    :returns: The number of bytes written (1-4).
    :raises ValueError: If *scalar* is not a Unicode scalar value.
    """
    _check_scalar(scalar)
    if scalar <= 0x7F:
        dst[pos] = scalar
        return 1
    if scalar <= 0x7FF:
        dst[pos] = 0xC0 | (scalar >> 6)
        dst[pos + 1] = 0x80 | (scalar & 0x3F)
        return 2
    if scalar <= 0xFFFF:
        dst[pos] = 0xE0 | (scalar >> 12)
        dst[pos + 1] = 0x80 | ((scalar >> 6) & 0x3F)
        dst[pos + 2] = 0x80 | (scalar & 0x3F)
        return 3
    dst[pos] = 0xF0 | (scalar >> 18)
    dst[pos + 1] = 0x80 | ((scalar >> 12) & 0x3F)
    dst[pos + 2] = 0x80 | ((scalar >> 6) & 0x3F)
    dst[pos + 3] = 0x80 | (scalar & 0x3F)
    return 4


def encode_utf8(scalar: int) -> bytes:
    """Return the UTF-8 encoding of *scalar*."""
    buf = bytearray(utf8_len(scalar))
    encode_utf8_into(buf, 0, scalar)
    return bytes(buf)
