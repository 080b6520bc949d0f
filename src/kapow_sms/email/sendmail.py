"""Local sendmail submission."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..config import EmailVia
from ..exceptions import EmailTransportError
from ..ports.email import IEmailTransport

if TYPE_CHECKING:
    from email.message import EmailMessage

logger = logging.getLogger(__name__)


class SendmailTransport(IEmailTransport):
    """
    Pipes messages into the local sendmail binary (``sendmail -t -oi``).
    """

    def __init__(self, path: str = "/usr/sbin/sendmail"):
        self.path = path

    async def send(self, message: EmailMessage, method: EmailVia = EmailVia.SENDMAIL) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                self.path,
                "-t",
                "-oi",
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise EmailTransportError("sendmail", f"cannot run {self.path}: {e}") from e

        _, stderr = await process.communicate(message.as_bytes())
        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise EmailTransportError(
                "sendmail", f"exit status {process.returncode}: {detail or 'no output'}"
            )

        logger.info(f"Email to {message['To']} handed to {self.path}")
