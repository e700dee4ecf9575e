"""The statistical detector collaborator.

The arbiter only needs something that turns bytes into a ranked list of
:class:`Candidate` verdicts.  :class:`ChardetDetector`, backed by the
``chardet`` package, is the default; anything implementing
:class:`Detector` can be passed in its place.
"""

from __future__ import annotations

import dataclasses
import threading
from typing import Protocol, runtime_checkable

import chardet

#: Charset reported when the detector has no answer.
UNKNOWN_CHARSET: str = "unknown"

_DEFAULT_DETECTOR: Detector | None = None
_DEFAULT_DETECTOR_LOCK = threading.Lock()


@dataclasses.dataclass(frozen=True, slots=True)
class Candidate:
    """One ranked guess from a statistical detector.

    *confidence* is an integer percentage in [0, 100].
    """

    charset: str
    language: str
    confidence: int


@runtime_checkable
class Detector(Protocol):
    """Anything that can rank candidate charsets for a byte buffer."""

    def detect_all(self, data: bytes) -> list[Candidate]:
        """Return candidates for *data*, best first."""
        ...


def _to_percent(confidence: float) -> int:
    return max(0, min(100, round(confidence * 100)))


class ChardetDetector:
    """:class:`Detector` backed by :func:`chardet.detect_all`.

    :param ignore_threshold: Passed through to chardet; when ``True`` every
        prober's guess is reported, not only those above its minimum
        confidence.
    """

    def __init__(self, ignore_threshold: bool = False) -> None:
        self.ignore_threshold = ignore_threshold

    def detect_all(self, data: bytes) -> list[Candidate]:
        candidates = []
        for guess in chardet.detect_all(data, ignore_threshold=self.ignore_threshold):
            confidence = _to_percent(guess["confidence"] or 0.0)
            if confidence == 0:
                continue
            candidates.append(
                Candidate(
                    charset=guess["encoding"] or UNKNOWN_CHARSET,
                    language=guess["language"] or "",
                    confidence=confidence,
                )
            )
        return sorted(candidates, key=lambda c: -c.confidence)

    def __repr__(self) -> str:
        return f"ChardetDetector(ignore_threshold={self.ignore_threshold})"


def get_default_detector() -> Detector:
    """Return the shared default :class:`ChardetDetector`."""
    global _DEFAULT_DETECTOR  # noqa: PLW0603
    if _DEFAULT_DETECTOR is not None:
        return _DEFAULT_DETECTOR
    with _DEFAULT_DETECTOR_LOCK:
        if _DEFAULT_DETECTOR is None:
            _DEFAULT_DETECTOR = ChardetDetector()
    return _DEFAULT_DETECTOR
