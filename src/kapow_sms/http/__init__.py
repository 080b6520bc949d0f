"""HTTP adapters."""

from __future__ import annotations

from .httpx_client import HttpxClient, HttpxResponse

__all__ = ["HttpxClient", "HttpxResponse"]
