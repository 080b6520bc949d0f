"""Sender configuration: account credentials and transport preferences."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "www.kapow.co.uk"


class SendVia(Enum):
    """How messages are handed to Kapow."""

    HTTP = "http"
    HTTPS = "https"
    EMAIL = "email"

    @property
    def is_http(self) -> bool:
        return self in (SendVia.HTTP, SendVia.HTTPS)


class HttpMethod(Enum):
    """HTTP verb used for the http and https transports."""

    GET = "get"
    POST = "post"


class EmailVia(Enum):
    """Mail submission method used by the email transport."""

    SENDMAIL = "sendmail"
    SMTP = "smtp"


def default_email_via() -> EmailVia:
    """SMTP on Windows hosts (no local sendmail), sendmail everywhere else."""
    return EmailVia.SMTP if sys.platform == "win32" else EmailVia.SENDMAIL


class SenderConfig(BaseModel):
    """Immutable Kapow account and transport settings.

    ``login`` may also be supplied as ``user``. Credentials are not checked
    here: the http transports require them at send time, the email transport
    can rely on a trusted sender address registered with Kapow instead.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    login: str | None = Field(default=None, validation_alias=AliasChoices("login", "user"))
    password: str | None = None
    send_via: SendVia = SendVia.HTTP
    http_method: HttpMethod = HttpMethod.GET
    email_via: EmailVia = Field(default_factory=default_email_via)
    callback_url: str | None = None
    from_address: str | None = None
    from_id: str | None = None
    route: str | None = None

    host: str = DEFAULT_HOST
    timeout: float = 10.0
    smtp_host: str = "localhost"
    smtp_port: int = 25
    sendmail_path: str = "/usr/sbin/sendmail"

    @field_validator("send_via", "http_method", "email_via", mode="before")
    @classmethod
    def _lowercase_choice(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def username(self) -> str | None:
        return self.login or None

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    @property
    def protocol(self) -> str:
        """URL scheme for requests to Kapow; email senders fall back to plain http."""
        return "https" if self.send_via is SendVia.HTTPS else "http"


# Option names accepted by the SMS::Send style constructor, mapped to fields.
_OPTION_ALIASES: dict[str, str] = {
    "user": "login",
    "url": "callback_url",
    "from": "from_address",
}


def load_config(options: Mapping[str, Any]) -> SenderConfig:
    """Build a :class:`SenderConfig` from a loose option mapping.

    Accepts the field names as well as the underscore-prefixed option names
    (``_login``, ``_send_via``, ``_url``, ``_from`` ...). Validation failures
    are reported as :class:`ConfigurationError`.
    """
    values: dict[str, Any] = {}
    for key, value in options.items():
        name = key.lstrip("_")
        values[_OPTION_ALIASES.get(name, name)] = value

    # an explicit login takes precedence over user
    login = next(
        (options[k] for k in ("login", "_login", "user", "_user") if options.get(k)),
        None,
    )
    if login is not None:
        values["login"] = login

    try:
        return SenderConfig.model_validate(values)
    except PydanticValidationError as exc:
        errors: list[str] = []
        for error in exc.errors():
            loc = ".".join(str(p) for p in error.get("loc", ("__root__",)))
            errors.append(f"{loc}: {error.get('msg', 'invalid value')}")
        logger.debug(f"Rejected sender options: {errors}")
        raise ConfigurationError("Invalid sender configuration: " + "; ".join(errors)) from exc
