"""N-gram based language identification."""

from .identifier import LanguageIdentifier
from .index import (
    DirectoryProfileSource,
    MappingProfileSource,
    PackageProfileSource,
    ProfileIndex,
    ProfileSource,
    default_index,
)
from .pool import LanguageIdentifierPool
from .profile import NGramEntry, NGramProfile

__all__ = [
    "DirectoryProfileSource",
    "LanguageIdentifier",
    "LanguageIdentifierPool",
    "MappingProfileSource",
    "NGramEntry",
    "NGramProfile",
    "PackageProfileSource",
    "ProfileIndex",
    "ProfileSource",
    "default_index",
]
