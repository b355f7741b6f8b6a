"""Bounded pool of :class:`LanguageIdentifier` instances."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator

from ..errors import PoolExhaustedError
from .identifier import LanguageIdentifier
from .index import ProfileIndex

logger = logging.getLogger("lidcore.language.pool")


class LanguageIdentifierPool:
    """Hand out identifiers to one owner at a time.

    Identifiers are created lazily up to ``max_size`` and all share the same
    :class:`ProfileIndex`. When every identifier is borrowed, :meth:`borrow`
    waits up to ``timeout`` seconds for one to be released and then raises
    :class:`PoolExhaustedError`.
    """

    def __init__(
        self,
        index: ProfileIndex,
        max_size: int = 8,
        timeout: float | None = 5.0,
        analyze_length: int = 0,
        factory: Callable[[], LanguageIdentifier] | None = None,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.index = index
        self.max_size = max_size
        self.timeout = timeout
        self._factory = factory or (lambda: LanguageIdentifier(index, analyze_length=analyze_length))
        self._idle: list[LanguageIdentifier] = []
        self._borrowed: set[int] = set()
        self._created = 0
        self._condition = threading.Condition()

    @property
    def size(self) -> int:
        """Number of identifiers created so far."""
        with self._condition:
            return self._created

    @property
    def idle(self) -> int:
        with self._condition:
            return len(self._idle)

    @property
    def active(self) -> int:
        with self._condition:
            return len(self._borrowed)

    def borrow(self, timeout: float | None = None) -> LanguageIdentifier:
        """Take exclusive ownership of an identifier.

        ``timeout`` overrides the pool default; ``0`` fails immediately when
        the pool is exhausted and ``None`` on the pool means wait forever.
        """
        wait = self.timeout if timeout is None else timeout
        deadline = None if wait is None else time.monotonic() + wait
        with self._condition:
            while True:
                if self._idle:
                    engine = self._idle.pop()
                    break
                if self._created < self.max_size:
                    # Reserve the slot before building outside of the lock.
                    self._created += 1
                    engine = None
                    break
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    raise PoolExhaustedError(
                        f"No language identifier available (pool size {self.max_size})"
                    )
                self._condition.wait(remaining)
            if engine is not None:
                self._borrowed.add(id(engine))
                return engine

        try:
            engine = self._factory()
        except Exception:
            with self._condition:
                self._created -= 1
                self._condition.notify()
            raise
        logger.debug("Created language identifier %d/%d", self.size, self.max_size)
        with self._condition:
            self._borrowed.add(id(engine))
        return engine

    def release(self, engine: LanguageIdentifier) -> None:
        """Return a borrowed identifier to the pool."""
        with self._condition:
            if id(engine) not in self._borrowed:
                raise ValueError("Identifier was not borrowed from this pool")
            self._borrowed.discard(id(engine))
            self._idle.append(engine)
            self._condition.notify()

    @contextmanager
    def engine(self, timeout: float | None = None) -> Iterator[LanguageIdentifier]:
        """Borrow an identifier for the duration of a ``with`` block."""
        borrowed = self.borrow(timeout)
        try:
            yield borrowed
        finally:
            self.release(borrowed)
