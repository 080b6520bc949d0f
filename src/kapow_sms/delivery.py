"""Send request and result types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from .config import SendVia


class DeliveryStatus(Enum):
    """Outcome of handing a message to Kapow."""

    ACCEPTED = "accepted"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass(frozen=True)
class SendRequest:
    """A single outbound message."""

    to: str
    text: str
    callback_url: str | None = None
    from_address: str | None = None


@dataclass(frozen=True)
class SendResult:
    """Immutable record of one send attempt.

    ``ACCEPTED`` results came back from the http(s) gateway with an
    identifier usable for status checks. ``SUBMITTED`` results were handed
    to the mail system and cannot be tracked. ``FAILED`` results were
    rejected by Kapow or the mail system.
    """

    recipient: str
    send_via: SendVia
    status: DeliveryStatus
    message_id: str | None = None
    credits: int | str | None = None
    sent_at: datetime | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.sent_at is None and self.status is not DeliveryStatus.FAILED:
            object.__setattr__(self, "sent_at", datetime.now(timezone.utc))

    def __bool__(self) -> bool:
        return self.status is not DeliveryStatus.FAILED

    @property
    def tracked(self) -> bool:
        return self.status is DeliveryStatus.ACCEPTED

    @classmethod
    def accepted(
        cls,
        recipient: str,
        send_via: SendVia,
        message_id: str | None,
        credits: int | str | None = None,
        sent_at: datetime | None = None,
    ) -> SendResult:
        """Create a tracked result carrying Kapow's message identifier."""
        return cls(
            recipient=recipient,
            send_via=send_via,
            status=DeliveryStatus.ACCEPTED,
            message_id=message_id,
            credits=credits,
            sent_at=sent_at,
        )

    @classmethod
    def submitted(
        cls,
        recipient: str,
        send_via: SendVia,
        sent_at: datetime | None = None,
    ) -> SendResult:
        """Create an untracked (send and forget) result."""
        return cls(
            recipient=recipient,
            send_via=send_via,
            status=DeliveryStatus.SUBMITTED,
            sent_at=sent_at,
        )

    @classmethod
    def failed(
        cls,
        recipient: str,
        send_via: SendVia,
        error: str | None = None,
    ) -> SendResult:
        """Create a failed result."""
        return cls(
            recipient=recipient,
            send_via=send_via,
            status=DeliveryStatus.FAILED,
            error=error,
        )
