"""Repository layer for North API entities."""

from .measure_repository import MeasureRepository
from .product_repository import ProductRepository

__all__ = ["MeasureRepository", "ProductRepository"]
