"""Global n-gram index across every supported language profile."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Protocol

from ..config import get_settings
from ..errors import ProfileLoadError
from .profile import (
    DEFAULT_MAX_NGRAM_LENGTH,
    DEFAULT_MIN_NGRAM_LENGTH,
    MAX_SIZE,
    NGramEntry,
    NGramProfile,
    clamp_lengths,
)

logger = logging.getLogger("lidcore.language.index")

SAMPLE_EXTENSION = "txt"
_DATA_PACKAGE = "lidcore.language.data"


class ProfileSource(Protocol):
    """Provides the reference text sample of a language by its code."""

    def load_sample(self, language: str) -> str: ...


class PackageProfileSource:
    """Reads the reference samples bundled with the package."""

    def __init__(self, package: str = _DATA_PACKAGE) -> None:
        self.package = package

    def load_sample(self, language: str) -> str:
        resource = resources.files(self.package) / f"{language}.{SAMPLE_EXTENSION}"
        try:
            return resource.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ProfileLoadError(language, str(exc)) from exc


class DirectoryProfileSource:
    """Reads ``<code>.txt`` reference samples from a directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def load_sample(self, language: str) -> str:
        path = self.directory / f"{language}.{SAMPLE_EXTENSION}"
        try:
            with path.open("r", encoding="utf-8") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ProfileLoadError(language, str(exc)) from exc


class MappingProfileSource:
    """Serves reference samples held in memory."""

    def __init__(self, samples: Mapping[str, str]) -> None:
        self._samples = dict(samples)

    def load_sample(self, language: str) -> str:
        try:
            return self._samples[language]
        except KeyError as exc:
            raise ProfileLoadError(language, "no sample registered") from exc


class ProfileIndex:
    """Read-only mapping from n-gram to the language entries that contain it.

    Built once from one profile per language and then shared by every
    identifier; it is never mutated after construction, so concurrent reads
    need no locking.
    """

    def __init__(
        self,
        profiles: Iterable[NGramProfile],
        min_length: int = DEFAULT_MIN_NGRAM_LENGTH,
        max_length: int = DEFAULT_MAX_NGRAM_LENGTH,
        max_size: int = MAX_SIZE,
    ) -> None:
        self.min_length, self.max_length = clamp_lengths(min_length, max_length)
        self.max_size = max_size
        registered: dict[str, list[NGramEntry]] = {}
        loaded: dict[str, NGramProfile] = {}
        for profile in profiles:
            if profile.name in loaded:
                raise ValueError(f"Duplicate profile for language '{profile.name}'")
            loaded[profile.name] = profile
            for entry in profile.get_sorted():
                entry.profile = profile
                registered.setdefault(entry.seq, []).append(entry)
        # Freeze the per n-gram lists for lookups.
        self._ngrams: Mapping[str, tuple[NGramEntry, ...]] = MappingProxyType(
            {seq: tuple(entries) for seq, entries in registered.items()}
        )
        self._profiles: Mapping[str, NGramProfile] = MappingProxyType(loaded)

    @classmethod
    def build(
        cls,
        languages: Iterable[str],
        source: ProfileSource,
        min_length: int = DEFAULT_MIN_NGRAM_LENGTH,
        max_length: int = DEFAULT_MAX_NGRAM_LENGTH,
        max_size: int = MAX_SIZE,
    ) -> "ProfileIndex":
        """Load a profile for every language ``source`` can provide.

        Languages whose sample cannot be loaded are logged and skipped; the
        index is still built from every language that did load.
        """
        min_length, max_length = clamp_lengths(min_length, max_length)
        logger.info("Language identifier configuration [%d-%d/%d]", min_length, max_length, max_size)
        profiles: list[NGramProfile] = []
        seen = set()
        for language in languages:
            if language in seen:
                continue
            seen.add(language)
            try:
                sample = source.load_sample(language)
            except (ProfileLoadError, OSError, LookupError) as exc:
                logger.error("Skipping language %s: %s", language, exc)
                continue
            profile = NGramProfile(language, min_length, max_length, max_size=max_size)
            profile.load(sample)
            profiles.append(profile)
        index = cls(profiles, min_length=min_length, max_length=max_length, max_size=max_size)
        logger.info(
            "Language identifier supports: %s",
            " ".join(f"{profile.name}({len(profile)})" for profile in profiles) or "(none)",
        )
        return index

    def __len__(self) -> int:
        return len(self._ngrams)

    def __contains__(self, seq: object) -> bool:
        return seq in self._ngrams

    def lookup(self, seq: str) -> tuple[NGramEntry, ...]:
        return self._ngrams.get(seq, ())

    @property
    def languages(self) -> list[str]:
        """Codes of the languages that were actually loaded, in load order."""
        return list(self._profiles)

    @property
    def profiles(self) -> Mapping[str, NGramProfile]:
        return self._profiles

    def profile(self, language: str) -> NGramProfile | None:
        return self._profiles.get(language)


def _source_for(profile_directory: str | None) -> ProfileSource:
    if profile_directory:
        return DirectoryProfileSource(profile_directory)
    return PackageProfileSource()


@lru_cache(maxsize=None)
def _cached_index(
    languages: tuple[str, ...],
    profile_directory: str | None,
    min_length: int,
    max_length: int,
) -> ProfileIndex:
    return ProfileIndex.build(
        languages,
        _source_for(profile_directory),
        min_length=min_length,
        max_length=max_length,
    )


def default_index() -> ProfileIndex:
    """Return the process-wide index for the configured languages.

    The index is built on first use and reused afterwards; build it before
    serving concurrent callers.
    """
    settings = get_settings()
    return _cached_index(
        tuple(settings.language_list),
        settings.profile_directory,
        settings.min_ngram_length,
        settings.max_ngram_length,
    )
