"""HTTP client port."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class IHttpResponse(Protocol):
    """The parts of an HTTP response the driver inspects."""

    @property
    def is_success(self) -> bool: ...

    @property
    def content(self) -> str: ...

    @property
    def status_line(self) -> str: ...


@runtime_checkable
class IHttpClient(Protocol):
    """
    Protocol for issuing requests to the Kapow gateway.

    Implementations: HttpxClient, FakeHttpClient.
    """

    async def get(self, url: str) -> IHttpResponse | None:
        """Issue a GET for a fully built URL."""
        ...

    async def post(self, url: str, data: Mapping[str, str]) -> IHttpResponse | None:
        """Issue a POST with ``data`` as an urlencoded form body."""
        ...
