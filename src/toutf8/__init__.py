"""Detect the charset of a byte buffer and convert it to UTF-8."""

from __future__ import annotations

from toutf8.arbiter import (
    LOW_CONFIDENCE,
    DetectionResult,
    detect_all,
    detect_and_convert_to_utf8,
    detect_encoding,
)
from toutf8.detector import Candidate, ChardetDetector, Detector
from toutf8.enums import ErrorKind, TransformStatus
from toutf8.errors import (
    CharsetError,
    InvalidNameError,
    UnknownEncodingError,
    UnsupportedEncodingError,
    WrongDecoderError,
)
from toutf8.registry import (
    get_charset_name_from_encoding,
    get_decoder_from_charset_name,
    get_encoding_from_charset_name,
)
from toutf8.transcoder import (
    to_utf8_with_charset_name,
    to_utf8_with_decoder,
    to_utf8_with_encoding,
)
from toutf8.transform import Encoding, Nop, Transformer

__version__ = "1.0.0"
__all__ = [
    "LOW_CONFIDENCE",
    "Candidate",
    "ChardetDetector",
    "CharsetError",
    "DetectionResult",
    "Detector",
    "Encoding",
    "ErrorKind",
    "InvalidNameError",
    "Nop",
    "TransformStatus",
    "Transformer",
    "UnknownEncodingError",
    "UnsupportedEncodingError",
    "WrongDecoderError",
    "detect_all",
    "detect_and_convert_to_utf8",
    "detect_encoding",
    "get_charset_name_from_encoding",
    "get_decoder_from_charset_name",
    "get_encoding_from_charset_name",
    "to_utf8_with_charset_name",
    "to_utf8_with_decoder",
    "to_utf8_with_encoding",
]
