"""SMS driver for the kapow.co.uk gateway — http, https and email transports."""

from __future__ import annotations

from .config import EmailVia, HttpMethod, SendVia, SenderConfig, load_config
from .delivery import DeliveryStatus, SendRequest, SendResult
from .email import MailTransport, SendmailTransport, SmtpTransport, compose_email
from .exceptions import (
    ConfigurationError,
    CredentialError,
    EmailTransportError,
    KapowError,
    StateError,
    TransportError,
)
from .factory import create_sender
from .http import HttpxClient

# Memory adapters for testing
from .memory import FakeHttpClient, FakeResponse, InMemoryEmailTransport
from .normalization import normalize, normalize_recipient, normalize_text
from .ports import IEmailTransport, IHttpClient, IHttpResponse, ISMSSender

# Sanitization
from .sanitization import ParameterSanitizer
from .sender import KapowSender

__all__ = [
    "ConfigurationError",
    "CredentialError",
    "DeliveryStatus",
    "EmailTransportError",
    "EmailVia",
    "FakeHttpClient",
    "FakeResponse",
    "HttpMethod",
    "HttpxClient",
    "IEmailTransport",
    "IHttpClient",
    "IHttpResponse",
    "ISMSSender",
    "InMemoryEmailTransport",
    "KapowError",
    "KapowSender",
    "MailTransport",
    "ParameterSanitizer",
    "SendRequest",
    "SendResult",
    "SendVia",
    "SenderConfig",
    "SendmailTransport",
    "SmtpTransport",
    "StateError",
    "TransportError",
    "compose_email",
    "create_sender",
    "load_config",
    "normalize",
    "normalize_recipient",
    "normalize_text",
]
