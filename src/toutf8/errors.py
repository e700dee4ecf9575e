"""Exceptions raised by toutf8.

Every public failure derives from :class:`CharsetError` and carries one of
the :class:`~toutf8.enums.ErrorKind` tags in its ``kind`` attribute.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from toutf8.enums import ErrorKind

if TYPE_CHECKING:
    from toutf8.arbiter import DetectionResult


class CharsetError(Exception):
    """Base class for all toutf8 errors."""

    kind: ClassVar[ErrorKind]


class InvalidNameError(CharsetError, LookupError):
    """No registry knows the given charset label."""

    kind = ErrorKind.INVALID_NAME

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"invalid encoding name: {name!r}")


class UnknownEncodingError(CharsetError):
    """The encoding is not associated with a known encoding scheme."""

    kind = ErrorKind.UNKNOWN


class UnsupportedEncodingError(CharsetError):
    """The encoding exists but neither registry lists it."""

    kind = ErrorKind.UNSUPPORTED


class WrongDecoderError(CharsetError, ValueError):
    """The content could not be decoded by the chosen decoder.

    :attr:`content` is the input exactly as the caller passed it.  When
    raised by :func:`~toutf8.detect_and_convert_to_utf8`, :attr:`result`
    holds the verdict that selected the decoder.
    """

    kind = ErrorKind.WRONG_DECODER

    def __init__(
        self, content: bytes, result: DetectionResult | None = None
    ) -> None:
        self.content = content
        self.result = result
        super().__init__("wrong decoder for content")


class TransformError(ValueError):
    """A byte transformer hit input it cannot decode."""
