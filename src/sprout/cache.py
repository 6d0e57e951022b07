"""Keyed cache for documents and fetched content.

Entries live as long as the cache does: there is no eviction, expiry,
or capacity bound. A resolution context owns one cache for the document
registry and a separate one for raw content, so a document path and an
asset path can never collide.
"""

import threading
from collections.abc import Callable


class KeyedCache[T]:
    """String-keyed cache with an atomic get-or-create.

    Templates render on a worker thread and may look up documents while
    the event loop is resolving others, so insertion is guarded by a lock.
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[str, T] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: T) -> None:
        with self._lock:
            self._entries[key] = value

    def has(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> T | None:
        return self._entries.get(key)

    def get_or_create(self, key: str, factory: Callable[[str], T]) -> T:
        """Return the entry for *key*, creating it with *factory* if absent.

        Check and insert happen under one lock, so two simultaneous
        first-time lookups produce exactly one value.
        """
        with self._lock:
            if key not in self._entries:
                self._entries[key] = factory(key)
            return self._entries[key]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
