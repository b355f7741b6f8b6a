"""lidcore: n-gram language identification and encoding detection."""

from .errors import LidError, PoolExhaustedError, ProfileLoadError
from .service import UNABLE_TO_DEFINE, LanguageIdentifierService

__all__ = [
    "LanguageIdentifierService",
    "LidError",
    "PoolExhaustedError",
    "ProfileLoadError",
    "UNABLE_TO_DEFINE",
]
