"""Resolve the character encoding of raw content from detector clues."""

from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .detector import CharsetNormalizerDetector, EncodingDetector

logger = logging.getLogger("lidcore.encoding.analyzer")

NO_THRESHOLD = -1

# The detector is unreliable without a minimum amount of data.
MIN_LENGTH = 4

# Not a true alias table: maps encodings commonly used to mislabel documents
# to the superset encoding that covers their content (e.g. windows-1252
# characters in documents labelled ISO-8859-1).
ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "ISO-8859-1": "windows-1252",
        "EUC-KR": "cp949",
        "GB2312": "GB18030",
        "GBK": "GB18030",
    }
)

# Python codec name -> preferred charset name. Every preferred name is also
# accepted by codecs.lookup.
_PREFERRED_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "ascii": "US-ASCII",
        "utf-8": "UTF-8",
        "utf-8-sig": "UTF-8",
        "utf-16": "UTF-16",
        "utf-16-le": "UTF-16LE",
        "utf-16-be": "UTF-16BE",
        "utf-32": "UTF-32",
        "utf-32-le": "UTF-32LE",
        "utf-32-be": "UTF-32BE",
        "big5": "Big5",
        "big5hkscs": "Big5-HKSCS",
        "cp437": "IBM437",
        "cp866": "IBM866",
        "cp874": "cp874",
        "cp932": "cp932",
        "cp949": "cp949",
        "euc_jp": "EUC-JP",
        "euc_kr": "EUC-KR",
        "gb2312": "GB2312",
        "gbk": "GBK",
        "gb18030": "GB18030",
        "hz": "HZ-GB-2312",
        "iso2022_jp": "ISO-2022-JP",
        "iso2022_kr": "ISO-2022-KR",
        "koi8-r": "KOI8-R",
        "koi8-u": "KOI8-U",
        "mac-roman": "mac-roman",
        "shift_jis": "Shift_JIS",
        "tis-620": "TIS-620",
    }
)

# Charset labels found in documents that Python's codec registry does not know.
_LABEL_CODECS: Mapping[str, str] = MappingProxyType(
    {
        "x-euc-cn": "gb2312",
        "x-macroman": "mac-roman",
        "x-windows-874": "cp874",
        "x-windows-949": "cp949",
        "windows-31j": "cp932",
        "windows-874": "cp874",
        "windows-949": "cp949",
    }
)

_ISO_8859 = re.compile(r"^iso8859-(\d+)$")
_WINDOWS = re.compile(r"^cp(125\d)$")


def canonical_charset_name(name: str | None) -> str | None:
    """Return the preferred name of a text encoding, or ``None`` if unknown."""
    if not name or not name.strip():
        return None
    key = name.strip()
    codec_name = _LABEL_CODECS.get(key.lower(), key)
    try:
        info = codecs.lookup(codec_name)
        # Rejects bytes-to-bytes codecs such as base64 or zlib.
        "".encode(info.name)
    except LookupError:
        return None
    preferred = _PREFERRED_NAMES.get(info.name)
    if preferred:
        return preferred
    match = _ISO_8859.match(info.name)
    if match:
        return f"ISO-8859-{match.group(1)}"
    match = _WINDOWS.match(info.name)
    if match:
        return f"windows-{match.group(1)}"
    return info.name


def resolve_encoding_alias(name: str | None) -> str | None:
    """Canonicalize ``name`` and map mislabelled encodings to their superset."""
    canonical = canonical_charset_name(name)
    if canonical is None:
        return None
    return ALIASES.get(canonical, canonical)


@dataclass(frozen=True)
class EncodingClue:
    """A candidate encoding proposed by some source."""

    value: str
    source: str
    confidence: int = NO_THRESHOLD

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self) -> str:
        suffix = f", {self.confidence}% confidence" if self.confidence >= 0 else ""
        return f"{self.value} ({self.source}{suffix})"

    def is_empty(self) -> bool:
        return not self.value


class EncodingAnalyzer:
    """Guess the encoding of content from ranked detector clues.

    With a confidence threshold (``min_confidence >= 0``) the first clue
    meeting it wins. Otherwise, or when none meets it, the first clue the
    detector produced is the best try. Without any clue the default
    encoding is returned. Results are always lower-case.
    """

    def __init__(
        self,
        default_encoding: str = "utf-8",
        min_confidence: int = NO_THRESHOLD,
        detector: EncodingDetector | None = None,
    ) -> None:
        self.default_encoding = default_encoding
        self.min_confidence = min_confidence
        self.detector = detector if detector is not None else CharsetNormalizerDetector()

    def guess_encoding(self, data: bytes | str, default_encoding: str | None = None) -> str:
        if isinstance(data, str):
            data = data.encode("utf-8")
        clues = self.detect_clues(data)
        return self._determine(clues, default_encoding or self.default_encoding)

    def detect_clues(self, data: bytes) -> list[EncodingClue]:
        """Collect normalized clues from the detector, best ranked first."""
        clues: list[EncodingClue] = []
        if len(data) <= MIN_LENGTH:
            return clues
        try:
            candidates = self.detector.detect(data)
        except Exception:
            logger.exception("Encoding detector failed (ignoring)")
            return clues
        for name, confidence in candidates or ():
            resolved = resolve_encoding_alias(name)
            if resolved is None:
                logger.debug("Dropping unsupported encoding candidate %r", name)
                continue
            clues.append(EncodingClue(resolved, "detect", int(confidence)))
        return clues

    def _determine(self, clues: list[EncodingClue], default_encoding: str) -> str:
        default_clue = EncodingClue(normalize_encoding(default_encoding), "default")
        best = default_clue
        for clue in clues:
            if self.min_confidence >= 0 and clue.confidence >= self.min_confidence:
                return clue.value
            if best is default_clue:
                best = clue
        logger.debug("Encoding guessed as %s", best)
        return best.value


def normalize_encoding(name: str) -> str:
    """Lower-case preferred name of ``name``; unknown names are only lower-cased."""
    resolved = resolve_encoding_alias(name)
    return (resolved or name).lower()
