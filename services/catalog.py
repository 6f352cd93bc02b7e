# services/catalog.py
"""
Wiring for the admin console.

build_catalog() creates the API client, repositories, the shared route
cache and the actions from one NorthConfig.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import requests

from services.actions import MeasureActions, ProductActions
from services.api import ApiClient
from services.config_manager import NorthConfig
from services.page_data import (
    MeasuresPageData,
    ProductsPageData,
    load_measures_page,
    load_products_page,
)
from services.repositories import MeasureRepository, ProductRepository
from services.revalidation import MEASURES_ROUTE, PRODUCTS_ROUTE, RouteCache


def _loaded(data) -> bool:
    # failed loads are shown once and retried on the next render
    return data.error is None


@dataclass
class Catalog:
    config: NorthConfig
    client: ApiClient
    measures: MeasureRepository
    products: ProductRepository
    cache: RouteCache
    measure_actions: MeasureActions
    product_actions: ProductActions

    def measures_page(self) -> MeasuresPageData:
        """Cached data for the measures page."""
        return self.cache.get_or_load(
            MEASURES_ROUTE,
            lambda: load_measures_page(self.measures, self.config.default_locale),
            cacheable=_loaded,
        )

    def products_page(self) -> ProductsPageData:
        """Cached data for the products page."""
        return self.cache.get_or_load(
            PRODUCTS_ROUTE,
            lambda: load_products_page(self.products, self.measures),
            cacheable=_loaded,
        )

    def refresh(self, route: str) -> None:
        """Force the next render of route to refetch."""
        self.cache.revalidate(route)


def build_catalog(config: NorthConfig, session: Optional[requests.Session] = None) -> Catalog:
    client = ApiClient(config, session=session)
    measures = MeasureRepository(client)
    products = ProductRepository(client)
    cache = RouteCache()
    return Catalog(
        config=config,
        client=client,
        measures=measures,
        products=products,
        cache=cache,
        measure_actions=MeasureActions(measures, cache),
        product_actions=ProductActions(products, cache, author=config.author),
    )
