"""Routes composed messages to the configured submission method."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import EmailVia
from ..ports.email import IEmailTransport
from .sendmail import SendmailTransport
from .smtp import SmtpTransport

if TYPE_CHECKING:
    from email.message import EmailMessage


class MailTransport(IEmailTransport):
    """Sends through sendmail or SMTP depending on the requested method."""

    def __init__(
        self,
        smtp: IEmailTransport | None = None,
        sendmail: IEmailTransport | None = None,
    ):
        self.smtp = smtp or SmtpTransport()
        self.sendmail = sendmail or SendmailTransport()

    async def send(self, message: EmailMessage, method: EmailVia) -> None:
        if method is EmailVia.SMTP:
            await self.smtp.send(message, method)
        elif method is EmailVia.SENDMAIL:
            await self.sendmail.send(message, method)
        else:
            raise ValueError(f"MailTransport does not support {method}")
