"""Email transport port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from email.message import EmailMessage

    from ..config import EmailVia


@runtime_checkable
class IEmailTransport(Protocol):
    """
    Protocol for handing a composed message to the mail system.

    Implementations: MailTransport, SmtpTransport, SendmailTransport,
    InMemoryEmailTransport. Raise on failure; the return value is ignored.
    """

    async def send(self, message: EmailMessage, method: EmailVia) -> None:
        """Deliver ``message`` using ``method``."""
        ...
