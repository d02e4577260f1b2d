"""REST client for the Render API."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

import requests

from ..config import ApiConfig
from ..exceptions import (
    RenderAPIError,
    RequestSetupError,
    UnexpectedShapeError,
    UpstreamHttpError,
    UpstreamUnreachableError,
)
from .models import EnvVar, Page

logger = logging.getLogger(__name__)


class RenderClient:
    """Thin wrapper around the Render REST API v1.

    Each method is one stateless request. Failures surface as RenderAPIError
    subclasses; nothing is retried.
    """

    def __init__(self, api_key: str, config: ApiConfig | None = None):
        config = config or ApiConfig()
        self._base = config.base_url.rstrip("/")
        self._timeout = config.timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"Bearer {api_key}"
        self._session.headers["Content-Type"] = "application/json"
        self._session.headers["Accept"] = "application/json"

    def close(self) -> None:
        self._session.close()

    # ── Services ────────────────────────────────────────────────────

    def list_services(self, limit: int | None = None, cursor: str | None = None) -> Page:
        resp = self._get("/services", params=self._page_params(limit, cursor))
        return self._page(resp)

    def get_service(self, service_id: str) -> dict[str, Any]:
        resp = self._get(f"/services/{service_id}")
        return self._data(resp, dict)

    def create_service(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a service; `data` is the camelCase request body (type, name, ownerId, repo, ...)."""
        resp = self._post("/services", json=data)
        return self._data(resp, dict)

    def delete_service(self, service_id: str) -> bool:
        self._delete(f"/services/{service_id}")
        return True

    # ── Deploys ─────────────────────────────────────────────────────

    def deploy_service(self, service_id: str, clear_cache: bool = False) -> dict[str, Any]:
        """Trigger a new deploy and return the created deploy record."""
        body = {"clearCache": True} if clear_cache else {}
        resp = self._post(f"/services/{service_id}/deploys", json=body)
        return self._data(resp, dict)

    def get_deploys(self, service_id: str, limit: int | None = None, cursor: str | None = None) -> Page:
        resp = self._get(f"/services/{service_id}/deploys", params=self._page_params(limit, cursor))
        return self._page(resp)

    # ── Environment variables ───────────────────────────────────────

    def update_env_vars(self, service_id: str, env_vars: Iterable[EnvVar | dict[str, str]]) -> dict[str, Any]:
        """Replace the service's whole environment with `env_vars`."""
        payload = [ev.to_dict() if isinstance(ev, EnvVar) else dict(ev) for ev in env_vars]
        resp = self._put(f"/services/{service_id}/env-vars", json={"envVars": payload})
        return self._data(resp, dict)

    # ── Custom domains ──────────────────────────────────────────────

    def list_custom_domains(self, service_id: str) -> list[dict[str, Any]]:
        resp = self._get(f"/services/{service_id}/custom-domains")
        return self._data(resp, list)

    def add_custom_domain(self, service_id: str, name: str) -> dict[str, Any]:
        resp = self._post(f"/services/{service_id}/custom-domains", json={"name": name})
        return self._data(resp, dict)

    def remove_custom_domain(self, service_id: str, domain_id: str) -> bool:
        self._delete(f"/services/{service_id}/custom-domains/{domain_id}")
        return True

    # ── Connectivity ────────────────────────────────────────────────

    def test_connection(self) -> bool:
        """True when a one-item list request comes back 2xx; never raises."""
        try:
            self._get("/services", params={"limit": 1})
        except RenderAPIError as exc:
            logger.debug("Connection test failed: %s", exc)
            return False
        return True

    # ── Response parsing ────────────────────────────────────────────

    def _json(self, resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise UnexpectedShapeError(
                f"Invalid response from Render API: body is not JSON ({exc})",
                status_code=resp.status_code,
                response_body=resp.text,
            ) from exc

    def _data(self, resp: requests.Response, expected: type) -> Any:
        """Unwrap the `data` member of a `{"data": ...}` envelope, checking its type."""
        body = self._json(resp)
        if not isinstance(body, dict) or "data" not in body:
            raise UnexpectedShapeError(
                "Invalid response from Render API: missing data",
                status_code=resp.status_code,
                response_body=resp.text,
            )
        data = body["data"]
        if not isinstance(data, expected):
            raise UnexpectedShapeError(
                f"Invalid response from Render API: expected {expected.__name__}, "
                f"got {type(data).__name__}",
                status_code=resp.status_code,
                response_body=resp.text,
            )
        return data

    def _page(self, resp: requests.Response) -> Page:
        items = self._data(resp, list)
        if not all(isinstance(item, dict) for item in items):
            raise UnexpectedShapeError(
                "Invalid response from Render API: list items must be objects",
                status_code=resp.status_code,
                response_body=resp.text,
            )
        cursor = resp.json().get("cursor")
        if cursor is not None and not isinstance(cursor, str):
            raise UnexpectedShapeError(
                "Invalid response from Render API: cursor must be a string",
                status_code=resp.status_code,
                response_body=resp.text,
            )
        return Page(items=items, cursor=cursor)

    # ── Internal HTTP helpers ───────────────────────────────────────

    def _page_params(self, limit: int | None, cursor: str | None) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if cursor is not None:
            params["cursor"] = cursor
        return params

    def _get(self, path: str, params: dict | None = None) -> requests.Response:
        return self._request("GET", path, params=params)

    def _post(self, path: str, json: Any = None, params: dict | None = None) -> requests.Response:
        return self._request("POST", path, json=json, params=params)

    def _put(self, path: str, json: Any = None, params: dict | None = None) -> requests.Response:
        return self._request("PUT", path, json=json, params=params)

    def _delete(self, path: str, params: dict | None = None) -> requests.Response:
        return self._request("DELETE", path, params=params)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self._base}{path}"
        kwargs.setdefault("timeout", self._timeout)
        logger.debug("%s %s params=%s", method, path, kwargs.get("params"),
                     extra={"method": method, "path": path})

        start = time.monotonic()
        try:
            resp = self._session.request(method, url, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.debug("No response for %s %s: %s", method, path, exc)
            raise UpstreamUnreachableError() from exc
        except requests.RequestException as exc:
            raise RequestSetupError(f"Error setting up request: {exc}") from exc
        except ValueError as exc:
            # UnicodeEncodeError from header values http.client cannot encode
            raise RequestSetupError(f"Error setting up request: {exc}") from exc

        elapsed = round(time.monotonic() - start, 3)
        logger.debug(
            "%s %s -> %d", method, path, resp.status_code,
            extra={"method": method, "path": path, "status_code": resp.status_code,
                   "elapsed_seconds": elapsed},
        )

        if not 200 <= resp.status_code < 300:
            raise UpstreamHttpError(
                f"Render API error ({resp.status_code}): {self._error_message(resp)}",
                status_code=resp.status_code,
                response_body=resp.text,
            )

        return resp

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return "Unknown error"
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return "Unknown error"
