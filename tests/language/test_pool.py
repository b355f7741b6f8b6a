import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from lidcore.errors import PoolExhaustedError
from lidcore.language.identifier import LanguageIdentifier
from lidcore.language.index import ProfileIndex
from lidcore.language.pool import LanguageIdentifierPool


def test_concurrent_borrowers_get_distinct_identifiers(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index, max_size=2)
    first = pool.borrow()
    second = pool.borrow()
    assert first is not second
    assert first.index is second.index is small_index
    assert pool.size == 2
    assert pool.active == 2


def test_released_identifier_is_reused(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index, max_size=2)
    engine = pool.borrow()
    pool.release(engine)
    assert pool.idle == 1
    assert pool.borrow() is engine
    assert pool.size == 1


def test_identifiers_are_created_lazily(small_index: ProfileIndex) -> None:
    created = []

    def factory() -> LanguageIdentifier:
        engine = LanguageIdentifier(small_index)
        created.append(engine)
        return engine

    pool = LanguageIdentifierPool(small_index, max_size=4, factory=factory)
    assert created == []
    with pool.engine() as engine:
        assert created == [engine]
    assert pool.size == 1


def test_pool_passes_analyze_length(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index, analyze_length=50)
    with pool.engine() as engine:
        assert engine.analyze_length == 50


def test_exhausted_pool_fails_fast_with_zero_timeout(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index, max_size=1)
    pool.borrow()
    with pytest.raises(PoolExhaustedError):
        pool.borrow(timeout=0)


def test_exhausted_pool_times_out(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index, max_size=1, timeout=0.05)
    pool.borrow()
    started = time.monotonic()
    with pytest.raises(PoolExhaustedError):
        pool.borrow()
    assert time.monotonic() - started >= 0.04


def test_blocked_borrow_resumes_after_release(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index, max_size=1)
    engine = pool.borrow()
    timer = threading.Timer(0.05, pool.release, args=(engine,))
    timer.start()
    try:
        assert pool.borrow(timeout=2) is engine
    finally:
        timer.cancel()


def test_release_of_foreign_identifier_rejected(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index)
    with pytest.raises(ValueError):
        pool.release(LanguageIdentifier(small_index))
    engine = pool.borrow()
    pool.release(engine)
    with pytest.raises(ValueError):
        pool.release(engine)


def test_context_manager_releases_on_error(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index, max_size=1)
    with pytest.raises(RuntimeError):
        with pool.engine():
            raise RuntimeError("boom")
    assert pool.active == 0
    assert pool.idle == 1


def test_factory_failure_frees_the_slot(small_index: ProfileIndex) -> None:
    calls = {"count": 0}

    def flaky() -> LanguageIdentifier:
        calls["count"] += 1
        if calls["count"] == 1:
            raise RuntimeError("cannot build")
        return LanguageIdentifier(small_index)

    pool = LanguageIdentifierPool(small_index, max_size=1, factory=flaky)
    with pytest.raises(RuntimeError):
        pool.borrow()
    assert pool.size == 0
    assert isinstance(pool.borrow(timeout=0), LanguageIdentifier)


def test_invalid_max_size_rejected(small_index: ProfileIndex) -> None:
    with pytest.raises(ValueError):
        LanguageIdentifierPool(small_index, max_size=0)


def test_single_owner_under_contention(small_index: ProfileIndex) -> None:
    pool = LanguageIdentifierPool(small_index, max_size=3, timeout=5)
    in_use: set[int] = set()
    guard = threading.Lock()
    violations: list[int] = []

    def work(i: int) -> str:
        with pool.engine() as engine:
            with guard:
                if id(engine) in in_use:
                    violations.append(i)
                in_use.add(id(engine))
            result = engine.identify("kkk kkk" if i % 2 else "mmm mmm")
            time.sleep(0.001)
            with guard:
                in_use.discard(id(engine))
            return result

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(work, range(64)))

    assert violations == []
    assert results == ["aa" if i % 2 else "bb" for i in range(64)]
    assert pool.size <= 3
    assert pool.active == 0
