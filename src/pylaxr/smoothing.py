"""Time-based dial smoothing."""

from __future__ import annotations

from pylaxr.mapping import shortest_arc


def advance(
    current: float,
    target: float | None,
    elapsed_seconds: float,
    rate: float,
) -> float:
    """Move *current* toward *target* along the shorter arc.

    The interpolation fraction is ``min(1, rate * elapsed_seconds)``, so
    repeated ticks converge geometrically. A ``None`` target (reading below
    threshold) holds the current angle, as does ``elapsed_seconds == 0``.

    The result is not wrapped: crossing 360 from 350 toward 10 yields
    values above 360 rather than jumping back to 0.
    """
    if elapsed_seconds < 0:
        raise ValueError(f"elapsed_seconds must be non-negative, got {elapsed_seconds}")
    if target is None or elapsed_seconds == 0:
        return current
    fraction = min(1.0, rate * elapsed_seconds)
    return current + shortest_arc(current, target) * fraction
