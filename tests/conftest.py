"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from toutf8.detector import Candidate


class StubDetector:
    """Detector returning a fixed list of candidates."""

    def __init__(self, candidates: list[Candidate]) -> None:
        self.candidates = candidates
        self.calls: list[bytes] = []

    def detect_all(self, data: bytes) -> list[Candidate]:
        self.calls.append(data)
        return list(self.candidates)


@pytest.fixture
def stub_detector() -> Callable[..., StubDetector]:
    """Build a :class:`StubDetector` from ``(charset, language, confidence)`` triples."""

    def make(*guesses: tuple[str, str, int]) -> StubDetector:
        return StubDetector([Candidate(*guess) for guess in guesses])

    return make
