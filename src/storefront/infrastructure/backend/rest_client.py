"""HTTP client for the hosted backend.

Tables are exposed PostgREST-style under ``/rest/v1/<table>``: filters are
query parameters such as ``id=eq.<value>``, ordering is
``order=<column>.desc`` and inserts/updates return the written rows when
asked with ``Prefer: return=representation``.  The auth and storage
services live under ``/auth/v1`` and ``/storage/v1`` on the same host.

Every failure (transport error or HTTP status >= 400) is raised as
HostedBackendError; nothing is retried.
"""

import logging
from typing import Any

import httpx

from storefront.domain.exceptions import BackendError

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"
RETURN_ROWS = {"Prefer": "return=representation"}


class HostedBackendError(BackendError):
    """Error response (or no response) from the hosted backend."""

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None):
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


def eq(value: Any) -> str:
    return f"eq.{value}"


def gte(value: Any) -> str:
    return f"gte.{value}"


def ilike_contains(text: str) -> str:
    # '*' is the URL-safe wildcard for ilike filters
    cleaned = text.replace("*", "").replace(",", " ")
    return f"ilike.*{cleaned}*"


def in_list(values: list[str]) -> str:
    return f"in.({','.join(values)})"


def _error_message(response: httpx.Response) -> tuple[str, dict]:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase, {}
    if not isinstance(body, dict):
        return str(body), {}
    message = (
        body.get("message")
        or body.get("msg")
        or body.get("error_description")
        or body.get("error")
        or response.reason_phrase
    )
    return str(message), body


class BackendClient:

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._access_token: str | None = None
        self._http = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            headers={"apikey": api_key},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_access_token(self, token: str | None) -> None:
        """Send requests on behalf of a signed-in user (None = anonymous)."""
        self._access_token = token

    def close(self) -> None:
        self._http.close()

    # --- Raw requests ---------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        merged = {"Authorization": f"Bearer {token or self._access_token or self._api_key}"}
        merged.update(headers or {})
        logger.debug("%s %s", method, path)
        try:
            response = self._http.request(method, path, headers=merged, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Backend request %s %s failed: %s", method, path, exc)
            raise HostedBackendError(f"Backend unreachable: {exc}") from exc

        if response.status_code >= 400:
            message, details = _error_message(response)
            logger.error(
                "Backend request %s %s returned %s: %s",
                method, path, response.status_code, message,
            )
            raise HostedBackendError(message, status_code=response.status_code, details=details)
        return response

    # --- Table helpers --------------------------------------------------------

    def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: dict[str, str] | None = None,
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        params: dict[str, Any] = {"select": columns, **(filters or {})}
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit
        response = self.request("GET", f"{REST_PREFIX}/{table}", params=params)
        return self._rows(response)

    def insert(self, table: str, rows: list[dict]) -> list[dict]:
        response = self.request(
            "POST", f"{REST_PREFIX}/{table}", json=rows, headers=RETURN_ROWS,
        )
        return self._rows(response)

    def update(self, table: str, values: dict, filters: dict[str, str]) -> list[dict]:
        response = self.request(
            "PATCH", f"{REST_PREFIX}/{table}", json=values, params=filters, headers=RETURN_ROWS,
        )
        return self._rows(response)

    def delete(self, table: str, filters: dict[str, str]) -> None:
        self.request("DELETE", f"{REST_PREFIX}/{table}", params=filters)

    @staticmethod
    def _rows(response: httpx.Response) -> list[dict]:
        if not response.content:
            return []
        try:
            body = response.json()
        except ValueError as exc:
            raise HostedBackendError("Backend returned a non-JSON body") from exc
        if isinstance(body, dict):
            return [body]
        return list(body)
