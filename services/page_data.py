"""
Initial data for the admin list pages.

Loaders never raise: a failed fetch becomes an error message next to an
empty dataset so the page stays usable.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from services.api import ApiError
from services.models import MeasureDetail, Product
from services.repositories import MeasureRepository, ProductRepository

logger = logging.getLogger(__name__)


@dataclass
class MeasuresPageData:
    measures: List[MeasureDetail] = field(default_factory=list)
    error: Optional[str] = None
    available_locales: List[str] = field(default_factory=list)
    default_locale: str = "en"


@dataclass
class ProductsPageData:
    products: List[Product] = field(default_factory=list)
    measures: List[MeasureDetail] = field(default_factory=list)
    error: Optional[str] = None


def available_locales(measures: List[MeasureDetail]) -> List[str]:
    """Unique locales across all translations, in first-seen order."""
    seen: List[str] = []
    for m in measures:
        for t in m.get("translations") or []:
            loc = t.get("locale")
            if loc and loc not in seen:
                seen.append(loc)
    return seen


def pick_default_locale(locales: List[str], preferred: str = "en") -> str:
    """Preferred locale if available, else the first available one."""
    if preferred in locales:
        return preferred
    return locales[0] if locales else preferred


def _error_message(exc: Exception, entity: str) -> str:
    if isinstance(exc, ApiError):
        return exc.message
    return f"Failed to load {entity}. Please check your North API connection."


def load_measures_page(repository: MeasureRepository, preferred_locale: str = "en") -> MeasuresPageData:
    """Fetch measures and derive the locale selector state."""
    error = None
    try:
        measures = repository.list() or []
    except Exception as e:
        logger.warning("Loading measures failed: %s", e)
        error = _error_message(e, "measures")
        measures = []

    locales = available_locales(measures)
    return MeasuresPageData(
        measures=measures,
        error=error,
        available_locales=locales,
        default_locale=pick_default_locale(locales, preferred_locale),
    )


def load_products_page(
    products_repository: ProductRepository,
    measures_repository: MeasureRepository,
) -> ProductsPageData:
    """Fetch products together with the measures used by the product dialog."""
    try:
        products = products_repository.list() or []
        measures = measures_repository.list() or []
    except Exception as e:
        logger.warning("Loading products failed: %s", e)
        return ProductsPageData(error=_error_message(e, "products"))

    return ProductsPageData(products=products, measures=measures)
