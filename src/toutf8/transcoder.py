"""Pump input bytes through a decoder into a UTF-8 buffer."""

from __future__ import annotations

import logging

from toutf8._utils import _to_bytes
from toutf8.enums import TransformStatus
from toutf8.errors import TransformError, WrongDecoderError
from toutf8.registry import get_decoder_from_charset_name
from toutf8.transform import Encoding, Transformer, is_nop

logger = logging.getLogger(__name__)

#: Input is fed to the decoder in slices of this many bytes.
CHUNK_SIZE: int = 4096

#: Size of the first output slice; doubled whenever the decoder runs short.
INITIAL_DST_SIZE: int = 3 * CHUNK_SIZE


def transcode(content: bytes, decoder: Transformer) -> bytes:
    """Decode all of *content* with *decoder* and return UTF-8 bytes.

    The decoder is reset, then fed :data:`CHUNK_SIZE` slices with
    ``at_eof`` set on the last one.  A ``SHORT_DST`` result doubles the
    output slice and repeats the call; a ``SHORT_SRC`` result re-offers
    the unconsumed tail together with more input.

    :raises ~toutf8.errors.TransformError: If the decoder fails, reports a
        truncated sequence at end of input, or stops making progress.
    """
    decoder.reset()
    src = memoryview(content)
    total = len(content)
    out = bytearray()
    dst = bytearray(INITIAL_DST_SIZE)
    start = 0
    window = CHUNK_SIZE

    while True:
        end = min(start + window, total)
        at_eof = end == total
        n_src, n_dst, status = decoder.transform(src[start:end], dst, at_eof)
        out += dst[:n_dst]
        start += n_src

        if status is TransformStatus.SHORT_DST:
            dst = bytearray(2 * len(dst))
            continue
        if status is TransformStatus.SHORT_SRC:
            if at_eof:
                msg = "input ends inside a multi-byte sequence"
                raise TransformError(msg)
            window = window * 2 if n_src == 0 else CHUNK_SIZE
            continue

        window = CHUNK_SIZE
        if start >= total and at_eof:
            return bytes(out)
        if n_src == 0:
            msg = f"{decoder!r} made no progress at offset {start}"
            raise TransformError(msg)


def to_utf8_with_decoder(
    content: bytes | bytearray | memoryview, decoder: Transformer
) -> bytes:
    """Convert *content* to UTF-8 with *decoder*.

    The identity decoder returns *content* unchanged.

    :raises ~toutf8.errors.WrongDecoderError: If *decoder* cannot decode
        *content*.
    """
    data = _to_bytes(content)
    if is_nop(decoder):
        return data
    try:
        return transcode(data, decoder)
    except TransformError as e:
        logger.debug("conversion with %r failed: %s", decoder, e)
        raise WrongDecoderError(data) from e


def to_utf8_with_encoding(
    content: bytes | bytearray | memoryview, encoding: Encoding
) -> bytes:
    """Convert *content* to UTF-8 with a fresh decoder for *encoding*."""
    return to_utf8_with_decoder(content, encoding.new_decoder())


def to_utf8_with_charset_name(
    content: bytes | bytearray | memoryview, charset_name: str
) -> bytes:
    """Convert *content* to UTF-8, resolving the decoder from *charset_name*.

    Charset names follow https://encoding.spec.whatwg.org/#names-and-labels
    and http://www.iana.org/assignments/character-sets/character-sets.xhtml.

    :raises ~toutf8.errors.InvalidNameError: If *charset_name* is unknown.
    :raises ~toutf8.errors.WrongDecoderError: If *content* cannot be decoded.
    """
    decoder = get_decoder_from_charset_name(charset_name)
    return to_utf8_with_decoder(content, decoder)
