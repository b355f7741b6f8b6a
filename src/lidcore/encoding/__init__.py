"""Character encoding resolution."""

from .analyzer import (
    ALIASES,
    MIN_LENGTH,
    NO_THRESHOLD,
    EncodingAnalyzer,
    EncodingClue,
    canonical_charset_name,
    normalize_encoding,
    resolve_encoding_alias,
)
from .detector import CharsetNormalizerDetector, EncodingDetector

__all__ = [
    "ALIASES",
    "MIN_LENGTH",
    "NO_THRESHOLD",
    "CharsetNormalizerDetector",
    "EncodingAnalyzer",
    "EncodingClue",
    "EncodingDetector",
    "canonical_charset_name",
    "normalize_encoding",
    "resolve_encoding_alias",
]
