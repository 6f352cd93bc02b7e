"""
North API client.
Handles all HTTP requests to the catalog microservice.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional

import requests

from services.config_manager import NorthConfig

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when a North API request fails.

    status is the HTTP status code, or 0 for network and parse failures.
    data is the parsed response body when one was available.
    """

    def __init__(self, message: str, status: int, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data


class ApiClient:
    """Thin JSON-over-HTTP wrapper around the North API."""

    def __init__(self, config: NorthConfig, session: Optional[requests.Session] = None):
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout
        self.session = session or requests.Session()

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Build headers for API requests."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            # Admin screens must always see fresh data
            "Cache-Control": "no-store",
        }
        if extra:
            headers.update(extra)
        return headers

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Path relative to the configured base URL
            body: Optional JSON-serializable request body
            headers: Optional extra headers

        Returns:
            Decoded JSON body, or None for 204 No Content

        Raises:
            ApiError: On non-2xx responses (with status) and on network or
                decoding failures (status 0)
        """
        url = self._url(path)
        data = json.dumps(body) if body is not None else None
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(headers),
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"Failed to connect to North API: {e}", 0)

        if response.status_code == 204:
            return None

        if not 200 <= response.status_code < 300:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            message = None
            if isinstance(payload, dict) and payload.get("message"):
                message = str(payload["message"])
            logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
            raise ApiError(
                message or f"HTTP error! status: {response.status_code}",
                response.status_code,
                payload,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.warning("%s %s returned an undecodable body: %s", method, url, e)
            raise ApiError(f"Failed to connect to North API: {e}", 0)

    def get(self, path: str, headers: Optional[Dict[str, str]] = None) -> Any:
        return self.request("GET", path, headers=headers)

    def post(self, path: str, body: Any, headers: Optional[Dict[str, str]] = None) -> Any:
        return self.request("POST", path, body=body, headers=headers)

    def put(self, path: str, body: Any, headers: Optional[Dict[str, str]] = None) -> Any:
        return self.request("PUT", path, body=body, headers=headers)

    def delete(self, path: str, headers: Optional[Dict[str, str]] = None) -> Any:
        return self.request("DELETE", path, headers=headers)
