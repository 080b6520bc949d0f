"""httpx implementation of the HTTP client port."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..ports.http import IHttpClient, IHttpResponse

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


def _import_httpx() -> Any:
    # Lazy import of httpx
    try:
        import httpx
    except ImportError as e:
        raise ImportError(
            "httpx is required for HttpxClient. Install with: pip install 'kapow-sms[http]'"
        ) from e
    return httpx


class HttpxResponse(IHttpResponse):
    """Adapts an ``httpx.Response`` to the driver's response port."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def is_success(self) -> bool:
        return bool(self._response.is_success)

    @property
    def content(self) -> str:
        return str(self._response.text)

    @property
    def status_line(self) -> str:
        return f"{self._response.status_code} {self._response.reason_phrase}".strip()


class HttpxClient(IHttpClient):
    """
    Async HTTP client for the Kapow gateway using httpx.

    Pass ``client`` to reuse a long-lived ``httpx.AsyncClient``; otherwise a
    short-lived client is opened for every request. Network failures surface
    as ``httpx.HTTPError``.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.timeout = timeout
        self._client = client

    async def get(self, url: str) -> IHttpResponse | None:
        return await self._request("GET", url)

    async def post(self, url: str, data: Mapping[str, str]) -> IHttpResponse | None:
        return await self._request("POST", url, data=dict(data))

    async def _request(
        self, method: str, url: str, data: dict[str, str] | None = None
    ) -> IHttpResponse:
        if self._client is not None:
            response = await self._client.request(method, url, data=data)
        else:
            httpx = _import_httpx()
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, data=data)

        logger.debug(f"{method} {response.request.url.host} -> {response.status_code}")
        return HttpxResponse(response)
