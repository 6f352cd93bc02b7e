"""Measure repository - maps measure operations onto North API calls."""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from services.api import ApiClient
from services.models import MeasureDetail


class MeasureRepository:
    """Manages measure data operations."""

    def __init__(self, client: ApiClient):
        self.client = client

    @staticmethod
    def _path(measure_id: str) -> str:
        return f"/measures/{quote(str(measure_id), safe='')}"

    def list(self, locale: Optional[str] = None, search: Optional[str] = None) -> List[MeasureDetail]:
        """
        Get all measures.

        Args:
            locale: Optional locale filter applied by the API
            search: Optional search string applied by the API
        """
        params = {}
        if locale:
            params["locale"] = locale
        if search:
            params["search"] = search

        endpoint = "/measures"
        if params:
            endpoint += f"?{urlencode(params)}"
        return self.client.get(endpoint)

    def get_by_id(self, measure_id: str) -> MeasureDetail:
        """Get a single measure by ID."""
        return self.client.get(self._path(measure_id))

    def get_by_code(self, code: str) -> MeasureDetail:
        """Get a single measure by code (e.g. 'GRAM')."""
        return self.client.get(f"/measures/by-code/{quote(str(code), safe='')}")

    def create(self, payload: Dict[str, Any]) -> MeasureDetail:
        """Create a measure from {code, translations}."""
        return self.client.post("/measures", payload)

    def update(self, measure_id: str, payload: Dict[str, Any]) -> MeasureDetail:
        """Update a measure with {code?, translations?}."""
        return self.client.put(self._path(measure_id), payload)

    def delete(self, measure_id: str) -> None:
        """Delete measure by ID."""
        self.client.delete(self._path(measure_id))
