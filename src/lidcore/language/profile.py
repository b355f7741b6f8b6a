"""Character n-gram frequency profiles.

A profile counts every character n-gram of the configured sizes found in a
text, keeps the most frequent ``max_size`` of them and scores each retained
entry from its rank. Rank scores keep profiles built from samples of very
different sizes comparable with each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field

ABSOLUTE_MIN_NGRAM_LENGTH = 1
ABSOLUTE_MAX_NGRAM_LENGTH = 4
DEFAULT_MIN_NGRAM_LENGTH = 1
DEFAULT_MAX_NGRAM_LENGTH = 4

# Only the top entries carry enough signal to be worth keeping.
MAX_SIZE = 1000

# Pads every word so short words still produce grams touching their edges.
SEPARATOR = "_"

SUSPECT_NAME = "suspect"


def clamp_lengths(min_length: int, max_length: int) -> tuple[int, int]:
    """Clamp n-gram bounds into the supported range, keeping ``min <= max``."""
    max_length = min(max_length, ABSOLUTE_MAX_NGRAM_LENGTH)
    max_length = max(max_length, ABSOLUTE_MIN_NGRAM_LENGTH)
    min_length = max(min_length, ABSOLUTE_MIN_NGRAM_LENGTH)
    min_length = min(min_length, max_length)
    return min_length, max_length


@dataclass(slots=True)
class NGramEntry:
    """A single n-gram with its count and rank-based frequency score."""

    seq: str
    count: int = 0
    frequency: float = 0.0
    profile: NGramProfile | None = field(default=None, repr=False, compare=False)

    @property
    def size(self) -> int:
        return len(self.seq)

    def to_dict(self) -> dict[str, object]:
        return {"seq": self.seq, "count": self.count, "frequency": self.frequency}


class NGramProfile:
    """Ranked, bounded table of the character n-grams of a text."""

    def __init__(
        self,
        name: str,
        min_length: int = DEFAULT_MIN_NGRAM_LENGTH,
        max_length: int = DEFAULT_MAX_NGRAM_LENGTH,
        max_size: int = MAX_SIZE,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be positive")
        self.name = name
        self.min_length, self.max_length = clamp_lengths(min_length, max_length)
        self.max_size = max_size
        self._ngrams: dict[str, NGramEntry] = {}
        self._sorted: list[NGramEntry] = []
        self._read_only = False

    def __len__(self) -> int:
        return len(self._sorted)

    def __contains__(self, seq: object) -> bool:
        return seq in self._ngrams

    def __repr__(self) -> str:
        return (
            f"NGramProfile(name={self.name!r}, "
            f"lengths={self.min_length}-{self.max_length}, entries={len(self)})"
        )

    @property
    def read_only(self) -> bool:
        return self._read_only

    def get(self, seq: str) -> NGramEntry | None:
        return self._ngrams.get(seq)

    def load(self, sample: str) -> None:
        """Build the profile from a reference sample and make it read-only."""
        self.analyze(sample)
        self._read_only = True

    def analyze(self, text: str) -> None:
        """Replace the profile contents with the n-grams of ``text``."""
        if self._read_only:
            raise RuntimeError(f"Profile '{self.name}' is read-only")
        self._ngrams = {}
        word = SEPARATOR
        for char in (text or "").lower():
            if char.isalpha():
                word += char
                self._add(word)
            elif len(word) > 1:
                self._add(word + SEPARATOR)
                word = SEPARATOR
        if len(word) > 1:
            self._add(word + SEPARATOR)
        self._rank()

    def get_sorted(self) -> list[NGramEntry]:
        """Return the retained entries, best ranked first."""
        return list(self._sorted)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "min_length": self.min_length,
            "max_length": self.max_length,
            "ngrams": [entry.to_dict() for entry in self._sorted],
        }

    def _add(self, word: str) -> None:
        # Count every suffix of the word buffer within the size bounds.
        length = len(word)
        if length < self.min_length:
            return
        for size in range(self.min_length, min(self.max_length, length) + 1):
            seq = word[length - size:]
            entry = self._ngrams.get(seq)
            if entry is None:
                entry = NGramEntry(seq)
                self._ngrams[seq] = entry
            entry.count += 1

    def _rank(self) -> None:
        ranked = sorted(self._ngrams.values(), key=lambda entry: (-entry.count, entry.seq))
        del ranked[self.max_size:]
        for rank, entry in enumerate(ranked):
            entry.frequency = (self.max_size - rank) / self.max_size
        self._sorted = ranked
        self._ngrams = {entry.seq: entry for entry in ranked}
