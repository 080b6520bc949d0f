"""Memory adapters for testing and development."""

from __future__ import annotations

from .fake import FakeHttpClient, FakeResponse, InMemoryEmailTransport

__all__ = ["FakeHttpClient", "FakeResponse", "InMemoryEmailTransport"]
