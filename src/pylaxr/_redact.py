"""Helpers for safe debug logging.

Broker credentials and raw payloads should not land in DEBUG logs
verbatim. This module redacts sensitive keys and shortens payloads before
they are logged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset({"password", "username", "token"})


def redact_for_log(value: Any, *, max_string: int = 256) -> Any:
    """Return a redacted copy of broker settings or a payload suitable for debug logs."""
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"

    if isinstance(value, (bytes, bytearray)):
        if len(value) > max_string:
            return f"<bytes:{len(value)}b>"
        return bytes(value).decode("utf-8", errors="replace")

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS and v is not None:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string)
        return redacted

    return value
