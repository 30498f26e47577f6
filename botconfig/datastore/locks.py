"""
Per-file mutual exclusion for load-mutate-save sequences.

All repository writes against one data file run inside the same lock so a
second writer always loads the first writer's result.
"""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Union

_registry_lock = threading.Lock()
_file_locks: Dict[str, threading.RLock] = {}


def _lock_key(path: Union[str, Path]) -> str:
    return str(Path(path).expanduser().resolve())


def get_file_lock(path: Union[str, Path]) -> threading.RLock:
    """Return the lock guarding a data file, creating it on first use."""
    key = _lock_key(path)
    with _registry_lock:
        lock = _file_locks.get(key)
        if lock is None:
            lock = threading.RLock()
            _file_locks[key] = lock
        return lock


@contextmanager
def file_lock(path: Union[str, Path]) -> Iterator[None]:
    """Hold the lock for a data file for the duration of the block."""
    lock = get_file_lock(path)
    with lock:
        yield
