from __future__ import annotations

from typing import Callable

import pytest

from lidcore.config import DEFAULT_LANGUAGES
from lidcore.language.index import MappingProfileSource, PackageProfileSource, ProfileIndex

BUNDLED_LANGUAGES = DEFAULT_LANGUAGES.split(",")


@pytest.fixture(scope="session")
def bundled_index() -> ProfileIndex:
    return ProfileIndex.build(BUNDLED_LANGUAGES, PackageProfileSource())


@pytest.fixture
def small_index() -> ProfileIndex:
    source = MappingProfileSource({"aa": "kkkk kkk", "bb": "mmmm mmm"})
    return ProfileIndex.build(["aa", "bb"], source)


@pytest.fixture(scope="session")
def read_sample() -> Callable[[str], str]:
    return PackageProfileSource().load_sample
