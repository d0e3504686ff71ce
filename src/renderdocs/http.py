"""Async HTTP transport for the RenderDocs API.

Wraps ``httpx.AsyncClient`` with the SDK's headers and maps failures onto
the exception hierarchy:

- network problems (DNS, refused connections, timeouts) -> TransportError
- 401 -> AuthenticationError, 403 -> AuthorizationError, 404 -> NotFoundError
- any other non-2xx status -> APIError

Nothing is retried here. Callers see every failure.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from renderdocs import __version__
from renderdocs.exceptions import (
    APIError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    TransportError,
)

logger = logging.getLogger(__name__)

_STATUS_ERRORS: dict[int, type[APIError]] = {
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
}


def _encode_param(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop unset query parameters and encode the rest for the query string."""
    if not params:
        return {}
    return {key: _encode_param(value) for key, value in params.items() if value is not None}


def error_from_response(response: httpx.Response) -> APIError:
    """Build the exception for a non-success response.

    The service answers errors with
    ``{"success": false, "error": ..., "message": ..., "statusCode": ...}``;
    bodies that do not follow that shape fall back to the reason phrase.
    """
    message = response.reason_phrase or f"HTTP {response.status_code}"
    error_code: str | None = None
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = str(body.get("message") or body.get("error") or message)
        raw_code = body.get("error")
        error_code = str(raw_code) if raw_code is not None else None

    error_cls = _STATUS_ERRORS.get(response.status_code, APIError)
    return error_cls(message, status_code=response.status_code, error_code=error_code)


class HttpClient:
    """Sends authenticated JSON requests to the RenderDocs API.

    Args:
        api_key: API key sent as a bearer token.
        base_url: API root, without trailing slash.
        timeout: Request timeout in seconds.
        headers: Extra headers added to every request.
        client: Existing ``httpx.AsyncClient`` to reuse. It is not closed
            by :meth:`aclose`.
        transport: Custom httpx transport for a client created here.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Accept": "application/json",
            "User-Agent": f"renderdocs-python/{__version__}",
            **(headers or {}),
            "Authorization": f"Bearer {api_key}",
        }
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Returns:
            The parsed body, or an empty dict for empty responses.

        Raises:
            TransportError: The request could not be completed.
            APIError: The API answered with a non-success status.
        """
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(
                method,
                url,
                params=clean_params(params),
                json=json,
                headers=self._headers,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {path} timed out") from e
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        logger.debug("%s %s -> %d", method, path, response.status_code)

        if not response.is_success:
            raise error_from_response(response)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"{method} {path} returned invalid JSON") from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, json=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request("PUT", path, json=body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
