"""Process-wide guard serializing online tokenizer loads.

Two threads fetching the same not-yet-cached vocabulary at once would
both download it and race to write the cache file.  Every online load
therefore runs its resolve + fetch + construct steps inside
:func:`acquire`.  The lock is created on first use and lives until the
interpreter exits; callers only ever see the scoped context manager.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

_lock: threading.Lock | None = None
_init_lock = threading.Lock()


def _get_lock() -> threading.Lock:
    global _lock
    if _lock is None:
        with _init_lock:
            if _lock is None:
                _lock = threading.Lock()
    return _lock


@contextmanager
def acquire() -> Iterator[None]:
    """Hold the load guard for the duration of the ``with`` block.

    Blocks until the guard is free.  Released on every exit path,
    including exceptions raised inside the block.
    """
    lock = _get_lock()
    with lock:
        yield


def locked() -> bool:
    """Whether some thread currently holds the guard."""
    return _lock is not None and _lock.locked()
