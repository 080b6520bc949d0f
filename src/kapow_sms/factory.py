"""Default wiring of a KapowSender from configuration."""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Mapping
from typing import Any

from .config import EmailVia, SenderConfig, load_config
from .email.sendmail import SendmailTransport
from .email.smtp import SmtpTransport
from .email.transport import MailTransport
from .http.httpx_client import HttpxClient
from .ports.email import IEmailTransport
from .ports.http import IHttpClient
from .sender import KapowSender

logger = logging.getLogger(__name__)


def _installed(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except ValueError:
        # present in sys.modules without a spec, e.g. blocked with None
        return False


def default_http_client(config: SenderConfig) -> IHttpClient | None:
    """Return an httpx-backed client, or None when httpx is not installed."""
    if not _installed("httpx"):
        logger.debug("httpx not installed; http/https transports unavailable")
        return None
    return HttpxClient(timeout=config.timeout)


def default_email_transport(config: SenderConfig) -> IEmailTransport | None:
    """Return a transport that submits via sendmail or SMTP (aiosmtplib).

    Returns None when SMTP is the configured method and aiosmtplib is not
    installed.
    """
    if config.email_via is EmailVia.SMTP and not _installed("aiosmtplib"):
        logger.debug("aiosmtplib not installed; email via smtp unavailable")
        return None
    return MailTransport(
        smtp=SmtpTransport(host=config.smtp_host, port=config.smtp_port, timeout=config.timeout),
        sendmail=SendmailTransport(path=config.sendmail_path),
    )


def create_sender(
    config: SenderConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> KapowSender:
    """Build a :class:`KapowSender` wired to the default adapters.

    ``config`` may be a :class:`SenderConfig` or an option mapping as accepted
    by :func:`load_config`; keyword options are merged into a mapping.

    Example::

        sender = create_sender(_login="me", _password="secret", _send_via="https")
        result = await sender.send("07712345678", "Hello, world!")
    """
    if not isinstance(config, SenderConfig):
        config = load_config({**(config or {}), **options})
    elif options:
        overrides = {key.lstrip("_"): value for key, value in options.items()}
        # a new user replaces the login already held by config
        user = overrides.pop("user", None)
        if user and not overrides.get("login"):
            overrides["login"] = user
        config = load_config({**config.model_dump(), **overrides})

    return KapowSender(
        config,
        http_client=default_http_client(config),
        email_transport=default_email_transport(config),
    )
