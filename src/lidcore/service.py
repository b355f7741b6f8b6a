"""Caller-facing language and encoding identification service."""

from __future__ import annotations

import logging

from .config import Settings, get_settings
from .encoding import EncodingAnalyzer, EncodingDetector
from .language import LanguageIdentifierPool, ProfileIndex, default_index

logger = logging.getLogger("lidcore.service")

UNABLE_TO_DEFINE = "und"

_PREVIEW_LENGTH = 100


class LanguageIdentifierService:
    """Identify languages through a pool of identifiers and guess encodings.

    Content shorter than ``short_text_threshold`` characters is reported as
    ``short_text_language`` without running the identifier, which is error
    prone on very little text. Failures are logged and reported as
    :data:`UNABLE_TO_DEFINE` rather than raised.
    """

    def __init__(
        self,
        pool: LanguageIdentifierPool | None = None,
        index: ProfileIndex | None = None,
        settings: Settings | None = None,
        encoding_detector: EncodingDetector | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        if pool is None:
            pool = LanguageIdentifierPool(
                index or default_index(),
                max_size=self.settings.pool_max_size,
                timeout=self.settings.pool_timeout,
                analyze_length=self.settings.analyze_length,
            )
        self.pool = pool
        self.short_text_threshold = self.settings.short_text_threshold
        self.short_text_language = self.settings.short_text_language
        self.encoding_detector = encoding_detector

    @property
    def supported_languages(self) -> list[str]:
        return self.pool.index.languages

    def language(self, content: str | None) -> str:
        if content is None:
            logger.error("Content could not be None")
            return UNABLE_TO_DEFINE

        if len(content) < self.short_text_threshold:
            return self.short_text_language

        try:
            identifier = self.pool.borrow()
        except Exception:
            logger.exception("Cannot obtain a language identifier from the pool")
            return UNABLE_TO_DEFINE

        try:
            code = identifier.identify(content)
        except Exception:
            logger.exception("Internal error while identifying language")
            return UNABLE_TO_DEFINE
        finally:
            self.pool.release(identifier)

        preview = content if len(content) < _PREVIEW_LENGTH else content[:_PREVIEW_LENGTH] + " ... "
        logger.info("Identified language as %s for %s", code or "(none)", preview)
        return code or UNABLE_TO_DEFINE

    def encoding(self, document: bytes | str, default_encoding: str | None = None) -> str:
        analyzer = EncodingAnalyzer(
            default_encoding=self.settings.default_encoding,
            min_confidence=self.settings.min_confidence,
            detector=self.encoding_detector,
        )
        return analyzer.guess_encoding(document, default_encoding)
