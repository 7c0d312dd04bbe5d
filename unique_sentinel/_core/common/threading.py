from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from threading import RLock

__all__ = ("synchronized",)

__lock = RLock()


@contextmanager
def synchronized(lock: RLock | None = None) -> Iterator[RLock]:
    lock = __lock if lock is None else lock

    with lock:
        yield lock
