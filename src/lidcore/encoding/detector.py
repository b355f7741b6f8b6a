"""Byte-level charset detectors producing ranked encoding candidates."""

from __future__ import annotations

from typing import Protocol, Sequence

from charset_normalizer import from_bytes

Candidate = tuple[str, int]


class EncodingDetector(Protocol):
    """Return ``(name, confidence 0-100)`` candidates, best first."""

    def detect(self, data: bytes) -> Sequence[Candidate]: ...


class CharsetNormalizerDetector:
    """charset-normalizer backed detector.

    Confidence is derived from the match's chaos ratio; candidates keep the
    order charset-normalizer ranks them in.
    """

    def __init__(self, cp_isolation: Sequence[str] | None = None) -> None:
        self.cp_isolation = list(cp_isolation) if cp_isolation else None

    def detect(self, data: bytes) -> list[Candidate]:
        matches = from_bytes(data, cp_isolation=self.cp_isolation)
        candidates: list[Candidate] = []
        for match in matches:
            if not match.encoding:
                continue
            confidence = max(0, min(100, round(100 - match.percent_chaos)))
            candidates.append((match.encoding, confidence))
        return candidates
