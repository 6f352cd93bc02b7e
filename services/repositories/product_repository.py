"""Product repository - maps product operations onto North API calls."""

from __future__ import annotations
from typing import List
from urllib.parse import quote

from services.api import ApiClient
from services.models import Product, ProductCreateRequest, ProductSearchRequest


class ProductRepository:
    """Manages product data operations."""

    def __init__(self, client: ApiClient):
        self.client = client

    @staticmethod
    def _path(product_id: str) -> str:
        return f"/products/{quote(str(product_id), safe='')}"

    def list(self) -> List[Product]:
        """Get all products."""
        return self.client.get("/products")

    def get_by_id(self, product_id: str) -> Product:
        """Get a single product by ID."""
        return self.client.get(self._path(product_id))

    def create(self, payload: ProductCreateRequest) -> Product:
        """Create a product."""
        return self.client.post("/products", payload)

    def update(self, product_id: str, payload: Product) -> Product:
        """Replace a product with the full product payload."""
        return self.client.put(self._path(product_id), payload)

    def delete(self, product_id: str) -> None:
        """Delete product by ID."""
        self.client.delete(self._path(product_id))

    def search(self, query: str) -> List[Product]:
        """Search products by free-text query."""
        body: ProductSearchRequest = {"query": query}
        return self.client.post("/products/search", body)
