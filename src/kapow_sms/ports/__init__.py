"""Port definitions for the Kapow driver."""

from __future__ import annotations

from .email import IEmailTransport
from .http import IHttpClient, IHttpResponse
from .sender import ISMSSender

__all__ = [
    "IEmailTransport",
    "IHttpClient",
    "IHttpResponse",
    "ISMSSender",
]
