"""SMS sender port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..delivery import SendResult


@runtime_checkable
class ISMSSender(Protocol):
    """
    Framework-agnostic port for sending SMS messages through a gateway.

    Adapters must explicitly declare: class KapowSender(ISMSSender):
    """

    async def send(
        self,
        to: str,
        text: str,
        *,
        callback_url: str | None = None,
        from_address: str | None = None,
    ) -> SendResult:
        """Send a message and return the result of the attempt."""
        ...

    async def check_status(self, message_id: str | None = None) -> str | None:
        """Return the gateway's raw delivery status text for a message."""
        ...
