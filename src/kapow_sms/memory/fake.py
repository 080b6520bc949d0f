"""In-memory transports for test assertions."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kapow_sms.ports.email import IEmailTransport
from kapow_sms.ports.http import IHttpClient, IHttpResponse

if TYPE_CHECKING:
    from email.message import EmailMessage

    from kapow_sms.config import EmailVia

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FakeResponse:
    """Canned HTTP response."""

    content: str = ""
    is_success: bool = True
    status_line: str = "200 OK"

    @classmethod
    def error(cls, status_line: str = "500 Internal Server Error") -> FakeResponse:
        return cls(content="", is_success=False, status_line=status_line)


@dataclass
class RecordedRequest:
    """Record of an issued request for test assertions."""

    method: str
    url: str
    data: dict[str, str] | None


class FakeHttpClient(IHttpClient):
    """
    Test double (Fake) that replays queued responses and records requests.

    When the queue is empty ``default`` is returned.
    """

    def __init__(
        self,
        responses: Iterable[IHttpResponse | None] = (),
        default: IHttpResponse | None = None,
    ) -> None:
        self.responses: deque[IHttpResponse | None] = deque(responses)
        self.default = default if default is not None else FakeResponse()
        self.requests: list[RecordedRequest] = []

    def queue(self, *responses: IHttpResponse | None) -> None:
        self.responses.extend(responses)

    async def get(self, url: str) -> IHttpResponse | None:
        self.requests.append(RecordedRequest("GET", url, None))
        return self._next()

    async def post(self, url: str, data: Mapping[str, str]) -> IHttpResponse | None:
        self.requests.append(RecordedRequest("POST", url, dict(data)))
        return self._next()

    def _next(self) -> IHttpResponse | None:
        if self.responses:
            return self.responses.popleft()
        return self.default

    @property
    def last_request(self) -> RecordedRequest:
        if not self.requests:
            raise AssertionError("No HTTP request was issued.")
        return self.requests[-1]

    def assert_called(self, method: str, count: int = 1) -> None:
        """Helper for test assertions."""
        matches = [r for r in self.requests if r.method == method.upper()]
        if len(matches) != count:
            raise AssertionError(
                f"Expected {count} {method.upper()} requests, but found {len(matches)}."
            )

    def clear(self) -> None:
        """Clear all recorded requests."""
        self.requests.clear()


@dataclass
class SentEmail:
    """Record of a sent email for test assertions."""

    message: EmailMessage
    method: EmailVia


class InMemoryEmailTransport(IEmailTransport):
    """
    Test double (Fake) that stores emails in a list for assertions.

    Set ``fail_with`` to make every send raise that exception.
    """

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.sent_emails: list[SentEmail] = []
        self.fail_with = fail_with

    async def send(self, message: EmailMessage, method: EmailVia) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent_emails.append(SentEmail(message, method))
        logger.debug(f"Captured email to {message['To']} via {method.value}")

    @property
    def last_email(self) -> EmailMessage:
        if not self.sent_emails:
            raise AssertionError("No email was sent.")
        return self.sent_emails[-1].message

    def clear(self) -> None:
        """Clear all sent emails."""
        self.sent_emails.clear()
