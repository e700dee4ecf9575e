"""Enumerations for toutf8."""

import enum


class ErrorKind(enum.Enum):
    """Value tags attached to every :class:`~toutf8.errors.CharsetError`."""

    INVALID_NAME = "invalid-name"
    UNKNOWN = "unknown"
    UNSUPPORTED = "unsupported"
    WRONG_DECODER = "wrong-decoder"


class TransformStatus(enum.Enum):
    """Outcome of a single :meth:`Transformer.transform` call."""

    OK = "ok"
    # The destination slice filled up; call again with more room.
    SHORT_DST = "short-dst"
    # The source ended inside a multi-byte sequence and more input may follow.
    SHORT_SRC = "short-src"
