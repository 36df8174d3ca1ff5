"""Thin synchronous client for the Launchpad HTTP API.

Wraps an ``httpx.Client`` (a ``fastapi.testclient.TestClient`` works too)
and turns non-2xx responses into ApiClientError with the server's
``error`` message.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx


class ApiClientError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return fallback


class LaunchpadApiClient:
    def __init__(self, http: httpx.Client, timeout: Optional[float] = 120.0) -> None:
        self.http = http
        self.timeout = timeout

    def _check(self, response: httpx.Response, fallback: str) -> Any:
        if not response.is_success:
            raise ApiClientError(response.status_code, _error_message(response, fallback))
        return response.json()

    def login(self, key: str) -> Dict[str, Any]:
        """Return the login body as-is, including ``{valid: false, error}`` on 4xx."""
        response = self.http.post("/login", json={"key": key}, timeout=self.timeout)
        if response.status_code >= 500:
            raise ApiClientError(response.status_code, _error_message(response, "Server error"))
        return response.json()

    def analyze(self, key: str, idea: str) -> Dict[str, Any]:
        response = self.http.post("/analyze", json={"key": key, "idea": idea}, timeout=self.timeout)
        return self._check(response, "Failed to generate analysis")

    def get_analyses(self, key: str) -> List[Dict[str, Any]]:
        response = self.http.get("/analyses", params={"key": key}, timeout=self.timeout)
        return self._check(response, "Failed to fetch analyses")

    def delete_analysis(self, key: str, record_id: str) -> Dict[str, Any]:
        response = self.http.delete(
            "/analyses", params={"key": key, "id": record_id}, timeout=self.timeout
        )
        return self._check(response, "Failed to delete analysis")

    def mockup(
        self,
        key: str,
        idea: str,
        startup_name: Optional[str] = None,
        app_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {
            "key": key,
            "idea": idea,
            "startupName": startup_name,
            "appDescription": app_description,
        }
        response = self.http.post("/mockup", json=payload, timeout=self.timeout)
        return self._check(response, "Failed to generate mockup")
