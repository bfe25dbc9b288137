"""In-process advisory locks keyed by account id."""

from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator

_registry_lock = threading.Lock()
# Entries disappear once no caller holds or waits on the lock.
_locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()


def _lock_for(key: str) -> threading.Lock:
    with _registry_lock:
        lock = _locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _locks[key] = lock
        return lock


@contextmanager
def account_lock(key: str) -> Iterator[None]:
    """Serialize read-modify-write sequences on one existing account within this process.

    Callers resolve the account first and pass its id, so lookups for unknown
    emails never create an entry.
    """

    lock = _lock_for(key)
    with lock:
        yield
