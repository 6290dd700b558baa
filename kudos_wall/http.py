"""Async JSON client for the kudos wall REST API.

Wraps ``httpx.AsyncClient``: paths are relative to a configured base URL,
the bearer token is attached when one is available, and any non-2xx
response is raised as :class:`HttpError` so callers can branch on status.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
import structlog

logger = structlog.get_logger()

TokenProvider = Callable[[], Optional[str]]


class HttpError(Exception):
    """A non-2xx response from the backend.

    Attributes
    ----------
    status_code:
        HTTP status of the response.
    data:
        Parsed JSON body, or ``{"message": "Unknown error occurred"}`` when
        the body is not JSON.
    response:
        The raw ``httpx.Response``.
    """

    def __init__(self, response: httpx.Response, data: dict[str, Any]) -> None:
        super().__init__(data.get("message") or "API error")
        self.response = response
        self.data = data

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "HttpError":
        try:
            body = response.json()
        except ValueError:
            body = {"message": "Unknown error occurred"}
        if not isinstance(body, dict):
            body = {"message": str(body)}
        return cls(response, body)


class HttpClient:
    """One method per verb, each returning the decoded JSON body.

    Parameters
    ----------
    base_url:
        Prefix for every request path.
    token_provider:
        Called before each request; a returned token is sent as
        ``Authorization: Bearer <token>``.
    transport:
        Optional ``httpx`` transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        default_headers: Optional[dict[str, str]] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._transport = transport
        self._default_headers = dict(default_headers or {})

    def _headers(self, overrides: Optional[dict[str, str]]) -> dict[str, str]:
        headers = {"Content-Type": "application/json", **self._default_headers}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if overrides:
            headers.update(overrides)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        kwargs: dict[str, Any] = {"headers": self._headers(headers)}
        if body is not None:
            kwargs["json"] = body

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.RequestError as exc:
                logger.warning("http_request_failed", method=method, path=path, error=str(exc))
                raise

        if not response.is_success:
            logger.info("http_error_response", method=method, path=path, status=response.status_code)
            raise HttpError.from_response(response)

        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, headers: Optional[dict[str, str]] = None) -> Any:
        return await self._request("GET", path, headers=headers)

    async def post(self, path: str, body: Any = None, headers: Optional[dict[str, str]] = None) -> Any:
        return await self._request("POST", path, body, headers)

    async def put(self, path: str, body: Any = None, headers: Optional[dict[str, str]] = None) -> Any:
        return await self._request("PUT", path, body, headers)

    async def patch(self, path: str, body: Any = None, headers: Optional[dict[str, str]] = None) -> Any:
        return await self._request("PATCH", path, body, headers)

    async def delete(self, path: str, headers: Optional[dict[str, str]] = None) -> Any:
        return await self._request("DELETE", path, headers=headers)
