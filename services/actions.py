"""
Mutation actions.

Each action calls one repository method and converts the outcome into an
ActionResult. Actions never raise: API errors surface their message, any
other failure a generic message. On success the owning route is revalidated
so the next render reloads it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from services.api import ApiError
from services.models import Author
from services.repositories import MeasureRepository, ProductRepository
from services.revalidation import MEASURES_ROUTE, PRODUCTS_ROUTE, RouteCache

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)


def _run(
    call: Callable[[], Any],
    cache: RouteCache,
    routes: Iterable[str],
    fallback: str,
) -> ActionResult:
    try:
        data = call()
    except ApiError as e:
        return ActionResult.fail(e.message)
    except Exception:
        logger.exception(fallback)
        return ActionResult.fail(fallback)

    for route in routes:
        cache.revalidate(route)
    return ActionResult.ok(data)


class MeasureActions:
    """Create/update/delete measures."""

    # The products page embeds the measure list for its selectors
    routes = (MEASURES_ROUTE, PRODUCTS_ROUTE)

    def __init__(self, repository: MeasureRepository, cache: RouteCache):
        self.repository = repository
        self.cache = cache

    def create(self, data: Dict[str, Any]) -> ActionResult:
        return _run(
            lambda: self.repository.create(data),
            self.cache,
            self.routes,
            "Failed to create measure. Please try again.",
        )

    def update(self, measure_id: str, data: Dict[str, Any]) -> ActionResult:
        return _run(
            lambda: self.repository.update(measure_id, data),
            self.cache,
            self.routes,
            "Failed to update measure. Please try again.",
        )

    def delete(self, measure_id: str) -> ActionResult:
        return _run(
            lambda: self.repository.delete(measure_id),
            self.cache,
            self.routes,
            "Failed to delete measure. Please try again.",
        )


class ProductActions:
    """Create/update/delete products."""

    routes = (PRODUCTS_ROUTE,)

    def __init__(
        self,
        repository: ProductRepository,
        cache: RouteCache,
        author: Optional[Author] = None,
    ):
        self.repository = repository
        self.cache = cache
        self.author = author

    def create(self, data: Dict[str, Any]) -> ActionResult:
        """Create a product, stamping the configured author when none is given."""
        payload = dict(data)
        if not payload.get("author") and self.author:
            payload["author"] = dict(self.author)
        return _run(
            lambda: self.repository.create(payload),
            self.cache,
            self.routes,
            "Failed to create product. Please try again.",
        )

    def update(self, product_id: str, data: Dict[str, Any]) -> ActionResult:
        return _run(
            lambda: self.repository.update(product_id, data),
            self.cache,
            self.routes,
            "Failed to update product. Please try again.",
        )

    def delete(self, product_id: str) -> ActionResult:
        return _run(
            lambda: self.repository.delete(product_id),
            self.cache,
            self.routes,
            "Failed to delete product. Please try again.",
        )
