"""Email transport adapters."""

from __future__ import annotations

from .composer import KAPOW_EMAIL_DOMAIN, compose_email
from .sendmail import SendmailTransport
from .smtp import SmtpTransport
from .transport import MailTransport

__all__ = [
    "KAPOW_EMAIL_DOMAIN",
    "MailTransport",
    "SendmailTransport",
    "SmtpTransport",
    "compose_email",
]
