"""Parameter sanitization — keeps Kapow credentials out of logs."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "password",
        # Note: mobile/username are NOT in this list — they're needed to debug delivery
    }
)


class ParameterSanitizer:
    """
    Sanitizes gateway request parameters before they reach a log line.

    Sensitive fields are replaced by ``***``; ``hash_fields`` are replaced
    by a sha256 digest so repeated values can still be correlated.
    """

    def __init__(
        self,
        *,
        redact_fields: set[str] | None = None,
        hash_fields: set[str] | None = None,
        sensitive_fields: set[str] | None = None,
    ) -> None:
        self._redact_fields = {f.lower() for f in (redact_fields or set())}
        self._hash_fields = {f.lower() for f in (hash_fields or set())}
        sensitive = set(sensitive_fields or _DEFAULT_SENSITIVE_FIELDS)
        self._sensitive_fields = {f.lower() for f in sensitive}

    def sanitize(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Return a sanitized copy of ``params`` safe for logging."""
        result: dict[str, Any] = {}
        for key, value in params.items():
            result[str(key)] = self._sanitize_value(value, str(key).lower())
        return result

    def sanitize_url(self, url: str) -> str:
        """Return ``url`` with sensitive query parameters masked."""
        parts = urlsplit(url)
        if not parts.query:
            return url
        query = self.sanitize(dict(parse_qsl(parts.query, keep_blank_values=True)))
        return urlunsplit(parts._replace(query=urlencode(query, safe="*:")))

    def _sanitize_value(self, value: Any, field_name: str) -> Any:
        if field_name in self._hash_fields:
            return self._hash_value(value)
        if field_name in self._redact_fields or field_name in self._sensitive_fields:
            return "***"
        return value

    def _hash_value(self, value: Any) -> str:
        payload = str(value).encode("utf-8")
        digest = hashlib.sha256(payload).hexdigest()
        return f"sha256:{digest}"


# Default instance for convenience
default_sanitizer = ParameterSanitizer()
