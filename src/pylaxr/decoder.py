"""Telemetry payload decoding.

Decoding is all-or-nothing: either a complete :class:`SensorRecord` comes
out, or :class:`DecodeError` is raised. There is no best-effort partial
record.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from pylaxr.exceptions import DecodeError, DecodeFailure
from pylaxr.models.sensor import SensorRecord


def _parse_json_object(payload: bytes | str) -> dict[str, Any]:
    try:
        text = payload.decode("utf-8") if isinstance(payload, (bytes, bytearray)) else payload
        parsed = json.loads(text)
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(
            f"Payload is not valid JSON: {exc}",
            reason=DecodeFailure.MALFORMED_PAYLOAD,
            payload=payload,
        ) from exc
    if not isinstance(parsed, dict):
        raise DecodeError(
            f"Payload decoded to {type(parsed).__name__}, expected an object",
            reason=DecodeFailure.MALFORMED_PAYLOAD,
            payload=payload,
        )
    return parsed


def decode(payload: bytes | str) -> SensorRecord:
    """Decode a raw telemetry payload into a :class:`SensorRecord`.

    Raises
    ------
    DecodeError
        With ``reason=MALFORMED_PAYLOAD`` when the payload is not a JSON
        object or is missing ``time``, ``sound_db`` or ``wifi_rssi``.
    """
    parsed = _parse_json_object(payload)
    try:
        return SensorRecord.model_validate(parsed)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise DecodeError(
            f"Payload failed validation for fields: {', '.join(fields) or 'unknown'}",
            reason=DecodeFailure.MALFORMED_PAYLOAD,
            payload=payload,
        ) from exc
