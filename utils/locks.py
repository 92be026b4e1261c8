"""
Keyed mutexes serializing recompute sequences per aggregate key
"""

import threading
from contextlib import contextmanager, ExitStack

class KeyedLock:
    """A registry of re-entrant locks, one per hashable key.

    Entries are reference counted and dropped once no thread holds or waits
    on them, so the registry only ever contains keys that are in use.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}

    def _acquire_entry(self, key):
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = [threading.RLock(), 0]
                self._locks[key] = entry
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key):
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, key):
        lock = self._acquire_entry(key)
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            self._release_entry(key)

    @contextmanager
    def hold_all(self, keys):
        """Hold several keys, always acquired in sorted order"""
        with ExitStack() as stack:
            for key in sorted(set(keys), key=repr):
                stack.enter_context(self.hold(key))
            yield

    def __len__(self):
        with self._guard:
            return len(self._locks)
