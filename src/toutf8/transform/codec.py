"""Transformer backed by a Python incremental decoder.

Every encoding the name registries resolve is decoded this way; the codec
registry holds the actual mapping data.
"""

from __future__ import annotations

import codecs
import logging

from toutf8.enums import TransformStatus
from toutf8.errors import TransformError
from toutf8.transform import TransformResult

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


class CodecDecoder:
    """Adapt ``codecs.getincrementaldecoder(codec)`` to the transformer API.

    Decoded output that does not fit in the destination slice is held back
    and written first on the next call, so a ``SHORT_DST`` result always
    consumes its whole source slice.

    :param codec: Any name :func:`codecs.lookup` accepts.
    :param errors: Codec error handler.  The default ``"replace"`` turns
        malformed input into U+FFFD; with ``"strict"`` it raises
        :class:`~toutf8.errors.TransformError`.
    :param strip_bom: Drop a U+FEFF that starts the decoded stream.
    :raises LookupError: If Python has no codec called *codec*.
    """

    def __init__(
        self, codec: str, errors: str = "replace", strip_bom: bool = False
    ) -> None:
        info = codecs.lookup(codec)
        self.codec = info.name
        self.errors = errors
        self.strip_bom = strip_bom
        self._factory = info.incrementaldecoder
        self.reset()

    def reset(self) -> None:
        self._decoder = self._factory(errors=self.errors)
        self._pending = b""
        self._at_start = self.strip_bom

    def _flush(self, out: memoryview) -> int:
        n = min(len(self._pending), len(out))
        out[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def _holds_partial_sequence(self) -> bool:
        buffered, _ = self._decoder.getstate()
        return bool(buffered)

    def transform(
        self,
        src: bytes | bytearray | memoryview,
        dst: bytearray | memoryview,
        at_eof: bool = False,
    ) -> TransformResult:
        out = memoryview(dst)
        n_dst = self._flush(out)
        if self._pending:
            return TransformResult(0, n_dst, TransformStatus.SHORT_DST)

        try:
            text = self._decoder.decode(bytes(src), final=at_eof)
        except UnicodeDecodeError as e:
            logger.debug("%s decoder rejected input: %s", self.codec, e)
            msg = f"invalid {self.codec} input: {e.reason}"
            raise TransformError(msg) from e

        if self._at_start and text:
            self._at_start = False
            if text[0] == _BOM:
                text = text[1:]

        self._pending = text.encode("utf-8")
        n_dst += self._flush(out[n_dst:])

        if self._pending:
            status = TransformStatus.SHORT_DST
        elif not at_eof and self._holds_partial_sequence():
            status = TransformStatus.SHORT_SRC
        else:
            status = TransformStatus.OK
        return TransformResult(len(src), n_dst, status)

    def __repr__(self) -> str:
        return f"CodecDecoder({self.codec!r}, errors={self.errors!r})"
