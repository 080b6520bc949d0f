"""Recipient number and message text normalization."""

from __future__ import annotations

import re

_LINE_BREAKS = re.compile(r"[\r\n]+")


def normalize_recipient(to: str) -> str:
    """Put a phone number into the international form Kapow expects.

    A single leading ``+`` is dropped and a UK mobile number starting with
    ``07`` is rewritten to start with ``447``.
    """
    if to.startswith("+"):
        to = to[1:]
    if to.startswith("07"):
        to = "447" + to[2:]
    return to


def normalize_text(text: str) -> str:
    """Replace every run of carriage returns / line feeds with one space."""
    return _LINE_BREAKS.sub(" ", text)


def normalize(to: str | None, text: str | None) -> tuple[str, str]:
    if not to or not text:
        raise ValueError("You must provide a 'to' number and 'text' content")
    return normalize_recipient(to), normalize_text(text)
