"""SMTP mail submission."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config import EmailVia
from ..exceptions import EmailTransportError
from ..ports.email import IEmailTransport

if TYPE_CHECKING:
    from email.message import EmailMessage

logger = logging.getLogger(__name__)


class SmtpTransport(IEmailTransport):
    """
    Async SMTP submission using aiosmtplib.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 25,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = False,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    async def send(self, message: EmailMessage, method: EmailVia = EmailVia.SMTP) -> None:
        # Lazy import of aiosmtplib
        try:
            import aiosmtplib
        except ImportError as e:
            raise ImportError(
                "aiosmtplib is required for SmtpTransport. "
                "Install with: pip install 'kapow-sms[smtp]'"
            ) from e

        try:
            async with aiosmtplib.SMTP(
                hostname=self.host,
                port=self.port,
                timeout=self.timeout,
            ) as smtp:
                if self.use_tls:
                    await smtp.starttls()
                if self.username and self.password:
                    await smtp.login(self.username, self.password)

                await smtp.send_message(message)
        except aiosmtplib.SMTPException as e:
            raise EmailTransportError("smtp", str(e)) from e

        logger.info(f"Email to {message['To']} handed to {self.host}:{self.port}")
