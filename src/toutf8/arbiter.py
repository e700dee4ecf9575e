"""Detection arbitration: pick a decoder from the detector's guesses.

The statistical detector often mistakes UTF-16 text for one of the GB
encodings.  Before converting, a GB-family verdict is checked against the
GBK byte rules; if the content breaks them the verdict's confidence drops
to :data:`LOW_CONFIDENCE`.  Conversion still uses the detector's choice;
callers are expected to look at the returned confidence.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import field

from toutf8._utils import _to_bytes
from toutf8.detector import UNKNOWN_CHARSET, Detector, get_default_detector
from toutf8.errors import InvalidNameError, WrongDecoderError
from toutf8.registry import get_decoder_from_charset_name
from toutf8.transcoder import to_utf8_with_decoder
from toutf8.transform import Nop, Transformer
from toutf8.validators import is_valid_gbk

logger = logging.getLogger(__name__)

#: Confidence given to a GB-family verdict whose bytes are not valid GBK.
LOW_CONFIDENCE: int = 20

# Labels the content already satisfies; conversion is skipped.
_PASSTHROUGH_CHARSETS: frozenset[str] = frozenset(
    {"", UNKNOWN_CHARSET, "utf-8", "utf8", "utf-8-sig"}
)

_GB_CHARSETS: frozenset[str] = frozenset(
    {"gb18030", "gb-18030", "gb 18030", "gbk", "gb2312"}
)


@dataclasses.dataclass(frozen=True, slots=True)
class DetectionResult:
    """One candidate verdict, with a decoder bound to its charset.

    When no decoder could be resolved, *convertible* is ``False`` and
    *decoder* is the identity transformer.
    """

    charset: str
    language: str
    confidence: int
    decoder: Transformer = field(default_factory=Nop, compare=False)
    convertible: bool = False

    def to_dict(self) -> dict[str, str | int | bool]:
        """Convert this result to a plain dict (without the decoder).

        :returns: A dict with ``'charset'``, ``'language'``,
            ``'confidence'`` and ``'convertible'`` keys.
        """
        return {
            "charset": self.charset,
            "language": self.language,
            "confidence": self.confidence,
            "convertible": self.convertible,
        }


def detect_all(
    content: bytes | bytearray | memoryview, detector: Detector | None = None
) -> list[DetectionResult]:
    """Return every verdict the detector offers, best first.

    Each verdict carries a decoder for its charset when one can be
    resolved; otherwise it is kept with ``convertible=False``.

    :param content: The bytes to examine.
    :param detector: Detector to consult; defaults to
        :func:`~toutf8.detector.get_default_detector`.
    """
    data = _to_bytes(content)
    if detector is None:
        detector = get_default_detector()

    results = []
    for candidate in detector.detect_all(data):
        result = DetectionResult(
            charset=candidate.charset,
            language=candidate.language,
            confidence=candidate.confidence,
        )
        try:
            decoder = get_decoder_from_charset_name(candidate.charset)
        except InvalidNameError:
            logger.debug("no decoder for detected charset %r", candidate.charset)
        else:
            result = dataclasses.replace(result, decoder=decoder, convertible=True)
        results.append(result)
    return sorted(results, key=lambda r: -r.confidence)


def detect_encoding(
    content: bytes | bytearray | memoryview, detector: Detector | None = None
) -> DetectionResult | None:
    """Return the verdict with the highest confidence, or ``None``."""
    results = detect_all(content, detector)
    return results[0] if results else None


def detect_and_convert_to_utf8(
    content: bytes | bytearray | memoryview, detector: Detector | None = None
) -> tuple[bytes, DetectionResult | None]:
    """Detect the charset of *content* and convert it to UTF-8.

    Content that is already UTF-8, or whose charset is unknown or has no
    decoder, comes back unchanged.

    :returns: The UTF-8 bytes and the verdict used (``None`` if the detector
        had nothing to say).
    :raises ~toutf8.errors.WrongDecoderError: If the chosen decoder fails;
        the error's ``result`` attribute holds the verdict.
    """
    data = _to_bytes(content)
    result = detect_encoding(data, detector)
    if result is None:
        return data, None

    charset = result.charset.lower()
    if charset in _PASSTHROUGH_CHARSETS:
        return data, result

    if charset in _GB_CHARSETS and not is_valid_gbk(data):
        logger.debug(
            "%s verdict (confidence %d) fails GBK validation; lowering to %d",
            result.charset,
            result.confidence,
            LOW_CONFIDENCE,
        )
        result = dataclasses.replace(result, confidence=LOW_CONFIDENCE)

    if not result.convertible:
        return data, result

    try:
        return to_utf8_with_decoder(data, result.decoder), result
    except WrongDecoderError as e:
        e.result = result
        raise
