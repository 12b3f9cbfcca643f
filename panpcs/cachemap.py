"""Thread-safe caches of expiring values, grouped by operation."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Callable, Hashable, Iterator

from panpcs.expires import DataExpires


class CacheUnit:
    """A cache of expiring values; expired entries are dropped on access."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[Hashable, DataExpires] = {}
        self._key_locks: dict[Hashable, threading.Lock] = {}

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._data.pop(key, None)
            self._key_locks.pop(key, None)

    def load(self, key: Hashable) -> DataExpires | None:
        """Return the live value for ``key`` or None."""
        with self._lock:
            value = self._data.get(key)
            if value is None:
                return None
            if value.is_expired():
                del self._data[key]
                return None
            return value

    def load_or_store(self, key: Hashable, value: DataExpires) -> tuple[DataExpires | None, bool]:
        """Return ``(actual, loaded)``; ``(None, False)`` when the result has expired."""
        with self._lock:
            actual = self._data.get(key)
            loaded = actual is not None
            if not loaded:
                self._data[key] = value
                actual = value
            if actual.is_expired():
                del self._data[key]
                return None, False
            return actual, loaded

    def items(self) -> Iterator[tuple[Hashable, DataExpires]]:
        """Yield live entries, discarding expired ones along the way."""
        with self._lock:
            snapshot = list(self._data.items())
        for key, value in snapshot:
            if value.is_expired():
                with self._lock:
                    if self._data.get(key) is value:
                        del self._data[key]
                continue
            yield key, value

    def store(self, key: Hashable, value: DataExpires) -> None:
        """Store ``value`` unless it has already expired."""
        if value.is_expired():
            return
        with self._lock:
            self._data[key] = value

    @contextmanager
    def lock_key(self, key: Hashable) -> Iterator[None]:
        """Hold the per-key lock for the duration of the block."""
        with self._lock:
            mutex = self._key_locks.setdefault(key, threading.Lock())
        with mutex:
            yield


class CacheOpMap:
    """One :class:`CacheUnit` per operation name."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pool: dict[str, CacheUnit] = {}

    def lazy_init_cache_pool_op(self, op: str) -> CacheUnit:
        with self._lock:
            return self._pool.setdefault(op, CacheUnit())

    def remove_cache_pool_op(self, op: str) -> None:
        with self._lock:
            self._pool.pop(op, None)

    def clear_invalidate(self) -> None:
        """Drop every expired entry in every unit."""
        with self._lock:
            units = list(self._pool.values())
        for unit in units:
            for _ in unit.items():
                pass

    def _cached(self, op: str, key: Hashable, op_func: Callable[[], Any]) -> Any:
        cache = self.lazy_init_cache_pool_op(op)
        with cache.lock_key(key):
            data = cache.load(key)
            if data is None:
                data = op_func()
                if data is not None:
                    cache.store(key, data)
            return data

    def cache_operation(self, op: str, key: Hashable,
                        op_func: Callable[[], DataExpires | None]) -> DataExpires | None:
        """Return the cached value for ``key``, computing it once with ``op_func``.

        A ``None`` result is returned but not cached.
        """
        return self._cached(op, key, op_func)

    def cache_operation_with_error(self, op: str, key: Hashable,
                                   op_func: Callable[[], DataExpires | None]) -> DataExpires | None:
        """Like :meth:`cache_operation`; exceptions from ``op_func`` propagate and nothing is cached."""
        return self._cached(op, key, op_func)


GLOBAL_CACHE_OP_MAP = CacheOpMap()