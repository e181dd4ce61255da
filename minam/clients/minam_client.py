"""Thin HTTP client for the Minam registry API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urljoin

import requests

DEFAULT_TIMEOUT = 30.0


class MinamClientError(RuntimeError):
    """Raised when the API answers with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class MinamClient:
    """Call every registry route over HTTP and return decoded JSON."""

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        self._session = session or requests.Session()
        self._timeout = timeout
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    def _request(
        self, method: str, path: str, body: Optional[Mapping[str, Any]] = None
    ) -> Any:
        url = urljoin(self._base_url, path.lstrip("/"))
        self._logger.debug("%s %s", method, url)
        response = self._session.request(
            method,
            url,
            json=body,
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
        )
        if not response.ok:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            raise MinamClientError(response.status_code, str(message))
        return response.json()

    # Providers
    def create_provider(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/providers", body)

    def list_providers(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/providers")

    # Model profiles
    def create_model(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/models", body)

    def list_models(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/models")

    # Datasets
    def create_dataset(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/datasets", body)

    def list_datasets(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/datasets")

    def preview_dataset(self, dataset_id: str) -> List[Any]:
        return self._request("GET", f"/api/datasets/{dataset_id}/preview")

    # Pipeline
    def run_pipeline(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/pipelines", body)

    def get_proposal(self, proposal_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/proposals/{proposal_id}")

    # Published products
    def create_api(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/apis", body)

    def list_apis(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/apis")

    def query_api(self, api_id: str, body: Optional[Mapping[str, Any]] = None) -> List[Any]:
        return self._request("POST", f"/v1/data/{api_id}/query", body or {})
