"""Sensor telemetry model."""

from __future__ import annotations

import math
from typing import Any

from pydantic import ConfigDict, Field, StrictStr, field_validator

from pylaxr.models._base import LaxrBaseModel


class SensorRecord(LaxrBaseModel):
    """One decoded telemetry message.

    Parameters
    ----------
    timestamp : str
        Producer timestamp, carried verbatim (wire key ``time``).
    sound_level : float
        Sound level in dB (wire key ``sound_db``).
    wifi_signal : float
        Wi-Fi RSSI in dBm (wire key ``wifi_rssi``).
    raw : dict
        Full decoded JSON object.
    """

    # Wire keys only: a payload carrying "sound_level" instead of "sound_db" is malformed.
    model_config = ConfigDict(populate_by_name=False)

    timestamp: StrictStr = Field(..., alias="time")
    sound_level: float = Field(..., alias="sound_db")
    wifi_signal: float = Field(..., alias="wifi_rssi")

    @field_validator("sound_level", "wifi_signal", mode="before")
    @classmethod
    def _require_number(cls, value: Any) -> float:
        # bool is an int subclass; "true" is not a reading.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected a number, got {type(value).__name__}")
        result = float(value)
        if not math.isfinite(result):
            raise ValueError("expected a finite number")
        return result
