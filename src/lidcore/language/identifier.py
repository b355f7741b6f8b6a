"""Identify the language of a text by n-gram profile matching."""

from __future__ import annotations

import codecs
from typing import BinaryIO, TextIO

from .index import ProfileIndex
from .profile import SUSPECT_NAME, NGramProfile

_CHUNK_SIZE = 2048


class LanguageIdentifier:
    """Score a suspect text against every profile of a :class:`ProfileIndex`.

    The identifier re-analyzes a single private suspect profile on every
    call. One instance must therefore never serve two calls at the same
    time; share instances through :class:`LanguageIdentifierPool` or give
    each caller its own.
    """

    def __init__(self, index: ProfileIndex, analyze_length: int = 0) -> None:
        if analyze_length < 0:
            raise ValueError("analyze_length must be >= 0")
        self.index = index
        self.analyze_length = analyze_length
        self._suspect = NGramProfile(
            SUSPECT_NAME,
            index.min_length,
            index.max_length,
            max_size=index.max_size,
        )

    @property
    def supported_languages(self) -> list[str]:
        return self.index.languages

    def identify(self, text: str) -> str:
        """Return the ISO 639 code of the best matching language.

        An empty string means no n-gram of ``text`` matched any known
        language (empty input, unknown script, ...).
        """
        language, _ = self._score(text)
        return language

    def scores(self, text: str) -> dict[str, float]:
        """Return the accumulated score of every language matched by ``text``."""
        _, totals = self._score(text)
        return totals

    def identify_stream(self, stream: BinaryIO | TextIO, encoding: str | None = None) -> str:
        """Identify the language of the content of ``stream``.

        Binary streams are decoded with ``encoding`` (UTF-8 when omitted).
        At most ``analyze_length`` characters are read when it is set.
        """
        decoder = codecs.getincrementaldecoder(encoding or "utf-8")(errors="replace")
        parts: list[str] = []
        collected = 0
        while not self.analyze_length or collected < self.analyze_length:
            chunk = stream.read(_CHUNK_SIZE)
            if not chunk:
                break
            text = chunk if isinstance(chunk, str) else decoder.decode(chunk)
            parts.append(text)
            collected += len(text)
        parts.append(decoder.decode(b"", final=True))
        return self.identify("".join(parts))

    def _score(self, text: str) -> tuple[str, dict[str, float]]:
        content = text or ""
        if self.analyze_length and len(content) > self.analyze_length:
            content = content[: self.analyze_length]
        self._suspect.analyze(content)

        totals: dict[str, float] = {}
        top_score = 0.0
        language = ""
        for searched in self._suspect.get_sorted():
            for match in self.index.lookup(searched.seq):
                name = match.profile.name
                score = totals.get(name, 0.0) + match.frequency + searched.frequency
                totals[name] = score
                # Strictly greater: on a tie the earlier leader keeps the lead.
                if score > top_score:
                    top_score = score
                    language = name
        return language, totals
