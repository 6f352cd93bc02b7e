"""HTTP access to the North catalog API."""

from .client import ApiClient, ApiError

__all__ = ["ApiClient", "ApiError"]
