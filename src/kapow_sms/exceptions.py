"""Exception hierarchy for the Kapow SMS driver."""

from __future__ import annotations


class KapowError(Exception):
    """Root exception for the kapow-sms driver."""


class ConfigurationError(KapowError):
    """Raised when a required capability is missing or the transport settings are invalid."""


class CredentialError(KapowError):
    """Raised when the selected transport needs a login/password that was not configured."""


class TransportError(KapowError):
    """Raised when the HTTP request to Kapow failed or returned a non-success status."""

    def __init__(self, message: str, status_line: str | None = None):
        self.status_line = status_line
        super().__init__(message)


class StateError(KapowError):
    """Raised when a status check has no message identifier to look up."""


class EmailTransportError(KapowError):
    """Raised by email adapters when a message could not be handed to the mail system."""

    def __init__(self, method: str, reason: str):
        self.method = method
        super().__init__(f"Failed to send email via {method}: {reason}")
