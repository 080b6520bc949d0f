"""Kapow SMS sender: http(s) and email transports plus delivery status checks."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from urllib.parse import quote

from .config import HttpMethod, SendVia, SenderConfig
from .delivery import SendRequest, SendResult
from .email.composer import compose_email
from .exceptions import ConfigurationError, CredentialError, StateError, TransportError
from .normalization import normalize
from .ports.sender import ISMSSender
from .sanitization import default_sanitizer

if TYPE_CHECKING:
    from .ports.email import IEmailTransport
    from .ports.http import IHttpClient, IHttpResponse

logger = logging.getLogger(__name__)

SEND_PATH = "/scripts/sendsms.php"
STATUS_PATH = "/scripts/chk_status.php"


def _encode_query(params: dict[str, str]) -> str:
    return "&".join(f"{key}={quote(value, safe='')}" for key, value in params.items())


def _parse_credits(token: str | None) -> int | str | None:
    if token is not None and token.isdigit():
        return int(token)
    return token


class KapowSender(ISMSSender):
    """
    SMS sender for the kapow.co.uk gateway.

    Capabilities are injected: ``http_client`` is required for the http and
    https transports (and for status checks), ``email_transport`` for the
    email transport. Construction fails with :class:`ConfigurationError` when
    the configured transport has no capability to run on.

    The sender remembers the outcome of its last send (``raw_response``,
    ``credit_balance``, ``message_id``, ``sent_at``) so :meth:`check_status`
    can be called without arguments. Use one instance per sending session
    when sending concurrently.
    """

    def __init__(
        self,
        config: SenderConfig,
        *,
        http_client: IHttpClient | None = None,
        email_transport: IEmailTransport | None = None,
    ):
        if config.send_via.is_http and http_client is None:
            raise ConfigurationError(
                "An HTTP client is required to send SMS messages by http or https"
            )
        if config.send_via is SendVia.EMAIL and email_transport is None:
            raise ConfigurationError(
                "An email transport is required to send SMS messages by email"
            )

        self.config = config
        self.http_client = http_client
        self.email_transport = email_transport

        self.raw_response: str | None = None
        self.credit_balance: int | str | None = None
        self.message_id: str | None = None
        self.sent_at: datetime | None = None

    async def send(
        self,
        to: str,
        text: str,
        *,
        callback_url: str | None = None,
        from_address: str | None = None,
    ) -> SendResult:
        """Send ``text`` to the phone number ``to``.

        Returns an ``ACCEPTED`` result carrying Kapow's message id for the
        http(s) transports, a ``SUBMITTED`` result for email, or a ``FAILED``
        result when Kapow (or the mail system) refused the message.
        """
        return await self.send_request(
            SendRequest(to=to, text=text, callback_url=callback_url, from_address=from_address)
        )

    async def send_request(self, request: SendRequest) -> SendResult:
        to, text = normalize(request.to, request.text)

        if self.config.send_via.is_http:
            return await self._send_http(to, text, request)
        return await self._send_email(to, text, request)

    async def _send_http(self, to: str, text: str, request: SendRequest) -> SendResult:
        config = self.config
        if not config.has_credentials:
            raise CredentialError(
                "To send messages using http/s you must provide a Kapow username and password"
            )
        assert self.http_client is not None

        params = {
            "username": config.username or "",
            "password": config.password or "",
            "mobile": to,
            "sms": text,
        }
        optional = {
            "from_id": config.from_id,
            "route": config.route,
            "url": request.callback_url or config.callback_url,
        }
        params.update({key: value for key, value in optional.items() if value})
        params["returnid"] = "TRUE"

        url = f"{config.protocol}://{config.host}{SEND_PATH}"
        response = await self._request(url, params)

        if response is None:
            raise TransportError(
                "No HTTP request issued -- please ensure 'http_method' is set to "
                "either 'get' or 'post'"
            )
        if not response.is_success:
            raise TransportError(
                f"Failed to issue HTTP request: {response.status_line}",
                status_line=response.status_line,
            )

        reply = response.content
        self.raw_response = reply

        tokens = reply.split()
        word = tokens[0] if tokens else ""
        num_credits = tokens[1] if len(tokens) > 1 else None
        unique_id = tokens[2] if len(tokens) > 2 else None

        if word != "OK":
            logger.warning(f"SMS message not sent -- Kapow returned '{word}'")
            return SendResult.failed(to, config.send_via, error=word or "empty response")

        sent_at = datetime.now(timezone.utc)
        self.credit_balance = _parse_credits(num_credits)
        self.message_id = unique_id
        self.sent_at = sent_at

        logger.info(
            f"SMS sent via Kapow to {to} (ID: {unique_id}, credits: {self.credit_balance})"
        )
        return SendResult.accepted(
            to, config.send_via, unique_id, credits=self.credit_balance, sent_at=sent_at
        )

    async def _send_email(self, to: str, text: str, request: SendRequest) -> SendResult:
        config = self.config
        if self.email_transport is None:
            raise ConfigurationError("Cannot send SMS messages by email without an email transport")

        method = config.email_via

        try:
            message = compose_email(
                to,
                text,
                username=config.username,
                password=config.password,
                from_address=request.from_address or config.from_address,
            )
            await self.email_transport.send(message, method)
        except Exception as e:
            logger.warning(f"Failed to send SMS to {to} by email: {str(e)}")
            return SendResult.failed(to, config.send_via, error=str(e))

        sent_at = datetime.now(timezone.utc)
        self.sent_at = sent_at

        logger.info(f"SMS to {to} emailed to Kapow via {method.value}")
        return SendResult.submitted(to, config.send_via, sent_at=sent_at)

    async def check_status(self, message_id: str | None = None) -> str | None:
        """Return Kapow's raw delivery status text for a message.

        Defaults to the message sent last by this sender. Uses the same
        protocol and http method as sending. Returns ``None`` when the status
        request fails. Messages sent by email cannot be checked.
        """
        unique_id = message_id or self.message_id
        if not unique_id:
            raise StateError("No message available for checking send status")
        if self.http_client is None:
            raise ConfigurationError("No HTTP client available for checking send status")

        config = self.config
        params = {"username": config.username or "", "returnid": unique_id}
        url = f"{config.protocol}://{config.host}{STATUS_PATH}"

        try:
            response = await self._request(url, params)
        except TransportError as e:
            logger.warning(f"Status check for message {unique_id} failed: {str(e)}")
            return None

        if response is not None and response.is_success:
            return response.content

        logger.warning(
            f"Status check for message {unique_id} failed: "
            f"{response.status_line if response is not None else 'no response'}"
        )
        return None

    async def _request(self, url: str, params: dict[str, str]) -> IHttpResponse | None:
        assert self.http_client is not None
        method = self.config.http_method

        try:
            if method is HttpMethod.GET:
                target = f"{url}?{_encode_query(params)}"
                logger.debug(f"GET {default_sanitizer.sanitize_url(target)}")
                return await self.http_client.get(target)
            if method is HttpMethod.POST:
                logger.debug(f"POST {url} {default_sanitizer.sanitize(params)}")
                return await self.http_client.post(url, params)
        except Exception as e:
            raise TransportError(f"Failed to issue HTTP request: {str(e)}") from e

        raise ConfigurationError(f"Unknown http_method {method!r}")
