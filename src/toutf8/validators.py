"""Byte-sequence validators for the principal multi-byte encodings.

Each validator walks the input once, tracking how far into the current
character it is in a small integer (``n_byte``).  A buffer is well formed
only if every byte is accepted and the scan ends on a character boundary.
"""

from __future__ import annotations

_UTF16_BOM = 0xFEFF


def is_valid_gbk(data: bytes) -> bool:
    """Check whether *data* is well formed under the GBK byte rules.

    GBK characters are either a single ASCII byte or a lead byte in
    0x81-0xFE followed by a trail byte in 0x40-0xFE other than 0x7F.

    :param data: The raw bytes to check.
    :returns: ``True`` if the whole buffer is valid GBK.
    """
    n_byte = 1
    for byte in data:
        if n_byte == 1:
            if byte <= 0x7F:
                continue
            if 0x81 <= byte <= 0xFE:
                n_byte = 2
            else:
                return False
        else:
            n_byte = 1
            if byte < 0x40 or byte > 0xFE or byte == 0x7F:
                return False
    return n_byte == 1


def is_valid_gb18030(data: bytes) -> bool:
    """Check whether *data* is well formed under the GB18030 byte rules.

    On top of the GBK two-byte form, GB18030 has four-byte sequences
    ``[81-FE][30-39][81-FE][30-39]``.
    """
    n_byte = 1
    for byte in data:
        if n_byte == 1:
            if byte <= 0x7F:
                continue
            if 0x81 <= byte <= 0xFE:
                n_byte = 2
            else:
                return False
        elif n_byte == 2:
            if 0x40 <= byte <= 0xFE and byte != 0x7F:
                n_byte = 1
            elif 0x30 <= byte <= 0x39:
                n_byte = 3
            else:
                return False
        elif n_byte == 3:
            if 0x81 <= byte <= 0xFE:
                n_byte = 4
            else:
                return False
        else:
            if 0x30 <= byte <= 0x39:
                n_byte = 1
            else:
                return False
    return n_byte == 1


def is_valid_big5(data: bytes) -> bool:
    """Check whether *data* is well formed under the Big5 byte rules."""
    n_byte = 1
    for byte in data:
        if n_byte == 1:
            if byte <= 0x7F:
                continue
            if 0x81 <= byte <= 0xFE:
                n_byte = 2
            else:
                return False
        else:
            n_byte = 1
            if not (0x40 <= byte <= 0x7E or 0xA1 <= byte <= 0xFE):
                return False
    return n_byte == 1


def _is_valid_utf16(data: bytes, big_endian: bool) -> bool:
    if not data or len(data) % 2:
        return False

    if big_endian:
        hi, lo = 0, 1
    else:
        hi, lo = 1, 0

    if (data[hi] << 8) | data[lo] == _UTF16_BOM:
        return True

    expecting_low = False
    for i in range(0, len(data), 2):
        unit = (data[i + hi] << 8) | data[i + lo]
        if expecting_low:
            if not 0xDC00 <= unit <= 0xDFFF:
                return False
            expecting_low = False
        elif 0xD800 <= unit <= 0xDBFF:
            expecting_low = True
        elif 0xDC00 <= unit <= 0xDFFF:
            # Low surrogate without a preceding high surrogate.
            return False
    return not expecting_low


def is_valid_utf16be(data: bytes) -> bool:
    """Check whether *data* is valid UTF-16 in big-endian byte order.

    Empty and odd-length input is rejected.  A leading ``FE FF`` byte order
    mark accepts the buffer outright; otherwise every surrogate must be part
    of a well-formed high/low pair.
    """
    return _is_valid_utf16(data, big_endian=True)


def is_valid_utf16le(data: bytes) -> bool:
    """Check whether *data* is valid UTF-16 in little-endian byte order.

    Same rules as :func:`is_valid_utf16be` with the code unit assembled as
    ``(data[i + 1] << 8) | data[i]``.
    """
    return _is_valid_utf16(data, big_endian=False)


def is_valid_utf16(data: bytes) -> bool:
    """Check whether *data* is valid UTF-16 in either byte order."""
    return is_valid_utf16be(data) or is_valid_utf16le(data)


def is_valid_utf8(data: bytes) -> bool:
    """Check whether *data* is strict UTF-8.

    Overlong forms, encoded surrogates (CESU-8) and code points above
    U+10FFFF are all rejected.
    """
    try:
        bytes(data).decode("utf-8", errors="strict")
    except UnicodeDecodeError:
        return False
    return True
