from __future__ import annotations

import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Any, Callable, Dict, Hashable, Iterator, Optional

from ..core.constants import DEFAULT_QUERY_CACHE_SIZE


class QueryCache:
    """Bounded memo for read queries keyed by ``(query, date, filters)``.

    ``invalidate()`` must be called whenever entries, timeslots or terms
    change. A value computed while an invalidation happened is returned to
    its caller but never stored.
    """

    def __init__(self, max_entries: int = DEFAULT_QUERY_CACHE_SIZE):
        self._max_entries = max(1, int(max_entries))
        self._values: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._revision = 0
        self._lock = threading.Lock()

    @property
    def revision(self) -> int:
        return self._revision

    def __len__(self) -> int:
        return len(self._values)

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._values:
                self._values.move_to_end(key)
                return self._values[key]
            revision = self._revision

        value = compute()

        with self._lock:
            if revision == self._revision:
                self._values[key] = value
                self._values.move_to_end(key)
                while len(self._values) > self._max_entries:
                    self._values.popitem(last=False)
        return value

    def invalidate(self) -> None:
        with self._lock:
            self._revision += 1
            self._values.clear()


class CacheScope:
    """One ``QueryCache`` per refresh cycle (an HTTP request, a UI redraw).

    Outside a cycle nothing is memoized, so a reader never sees data older
    than the cycle it runs in, whoever wrote it.
    """

    def __init__(self, max_entries: int = DEFAULT_QUERY_CACHE_SIZE):
        self._max_entries = max_entries
        self._local = threading.local()

    @property
    def current(self) -> Optional[QueryCache]:
        return getattr(self._local, "cache", None)

    def begin(self) -> QueryCache:
        self._local.cache = QueryCache(max_entries=self._max_entries)
        return self._local.cache

    def end(self) -> None:
        self._local.cache = None

    @contextmanager
    def cycle(self) -> Iterator[QueryCache]:
        cache = self.begin()
        try:
            yield cache
        finally:
            self.end()

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        cache = self.current
        if cache is None:
            return compute()
        return cache.get_or_compute(key, compute)

    def invalidate(self) -> None:
        cache = self.current
        if cache is not None:
            cache.invalidate()


class RequestGenerations:
    """Newest request generation per view.

    A client numbers its requests for one view; ``begin`` records the number
    (or allocates the next one) and a result is kept only while no newer
    generation of the same view has started, so a slow answer for old
    filters can never overwrite a newer one.
    """

    def __init__(self):
        self._newest: Dict[Hashable, int] = {}
        self._lock = threading.Lock()

    def current(self, view: Hashable = None) -> int:
        return self._newest.get(view, 0)

    def begin(self, view: Hashable = None, generation: Optional[int] = None) -> int:
        with self._lock:
            newest = self._newest.get(view, 0)
            token = newest + 1 if generation is None else int(generation)
            if token > newest:
                self._newest[view] = token
            return token

    def is_current(self, token: int, view: Hashable = None) -> bool:
        return token >= self._newest.get(view, 0)

    def apply(self, token: int, result: Any, apply_fn: Callable[[Any], None], view: Hashable = None) -> bool:
        """Call ``apply_fn(result)`` if ``token`` is still current; report whether it ran."""

        with self._lock:
            if token < self._newest.get(view, 0):
                return False
            apply_fn(result)
            return True
