"""
Route cache - memoizes page data per admin route until it is revalidated.

One instance is shared by every Streamlit session (see services/catalog.py),
so a mutation made in one browser tab is visible to the next render in any
other tab.
"""

from __future__ import annotations
import logging
import threading
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

MEASURES_ROUTE = "/admin/measures"
PRODUCTS_ROUTE = "/admin/products"


class RouteCache:
    """Per-route memo of rendered page data."""

    def __init__(self):
        self._entries: Dict[str, Any] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def get_or_load(
        self,
        route: str,
        loader: Callable[[], Any],
        cacheable: Optional[Callable[[Any], bool]] = None,
    ) -> Any:
        """
        Return cached data for route, loading it on a miss.

        The loader runs outside the lock so a slow API call does not block
        other routes. Its result is always returned, but it is stored only
        when cacheable(result) holds and the route was not revalidated while
        the loader ran.
        """
        with self._lock:
            if route in self._entries:
                return self._entries[route]
            generation = self._generations.get(route, 0)

        value = loader()
        if cacheable is not None and not cacheable(value):
            return value
        with self._lock:
            if self._generations.get(route, 0) == generation:
                self._entries[route] = value
            else:
                logger.debug("Discarded stale load of %s", route)
        return value

    def peek(self, route: str) -> Optional[Any]:
        """Return cached data for route without loading."""
        with self._lock:
            return self._entries.get(route)

    def revalidate(self, route: str) -> None:
        """Drop cached data so the next render reloads it."""
        with self._lock:
            self._entries.pop(route, None)
            self._generations[route] = self._generations.get(route, 0) + 1
        logger.debug("Revalidated %s", route)

    def clear(self) -> None:
        with self._lock:
            for route in set(self._entries) | set(self._generations):
                self._generations[route] = self._generations.get(route, 0) + 1
            self._entries.clear()
