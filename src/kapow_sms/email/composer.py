"""Builds the email Kapow turns into an SMS."""

from __future__ import annotations

import email.message
import email.policy

KAPOW_EMAIL_DOMAIN = "kapow.co.uk"


def compose_email(
    recipient: str,
    text: str,
    username: str | None = None,
    password: str | None = None,
    from_address: str | None = None,
) -> email.message.EmailMessage:
    """Compose a plain-text message addressed to ``<recipient>@kapow.co.uk``.

    The SMS text travels in the subject. Kapow reads the first two body lines
    as username and password, so the body stays empty when either is missing
    (the account must then trust the sending address).
    """
    message = email.message.EmailMessage(policy=email.policy.default)
    message["To"] = f"{recipient}@{KAPOW_EMAIL_DOMAIN}"
    message["Subject"] = text
    if from_address:
        message["From"] = from_address

    body = f"{username}\n{password}\n" if username and password else ""
    message.set_content(body, subtype="plain", charset="utf-8")
    return message
